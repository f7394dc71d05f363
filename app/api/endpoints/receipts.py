"""
Receipt endpoints - receipts with location and total price.
"""

from fastapi import APIRouter, Query, Response

from app.core.dependencies import CurrentUserId
from app.db.repositories.location_repository import LocationRepository
from app.db.repositories.receipt_repository import ReceiptRepository
from app.db.session import DbSession
from app.schemas.common import DeleteById
from app.schemas.receipt import ReceiptCreate, ReceiptUpdate, ReceiptWithData
from app.services.receipt_service import ReceiptService

router = APIRouter()


def _get_receipt_service(session: DbSession) -> ReceiptService:
    return ReceiptService(ReceiptRepository(session), LocationRepository(session))


@router.get("", response_model=list[ReceiptWithData])
async def list_receipts(
    session: DbSession,
    user_id: CurrentUserId,
    id: str | None = Query(None),
    location_id: str | None = Query(None, alias="locationId"),
):
    """REST: GET /receipts, /receipts?id=..., or /receipts?locationId=..."""
    return await _get_receipt_service(session).list_receipts(user_id, public_id=id, location_id=location_id)


@router.post("", response_class=Response)
async def create_receipt(session: DbSession, user_id: CurrentUserId, data: ReceiptCreate):
    await _get_receipt_service(session).create(user_id, data)


@router.put("", response_class=Response)
async def update_receipt(session: DbSession, user_id: CurrentUserId, data: ReceiptUpdate):
    await _get_receipt_service(session).update(user_id, data)


@router.delete("", response_class=Response)
async def delete_receipt(session: DbSession, user_id: CurrentUserId, data: DeleteById):
    await _get_receipt_service(session).delete(user_id, data.id)
