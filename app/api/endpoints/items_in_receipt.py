"""
Line item endpoints - items on a receipt, owned through the receipt.
"""

from fastapi import APIRouter, Response

from app.core.dependencies import CurrentUserId
from app.db.repositories.item_in_receipt_repository import ItemInReceiptRepository
from app.db.repositories.item_repository import ItemRepository
from app.db.repositories.receipt_repository import ReceiptRepository
from app.db.session import DbSession
from app.schemas.item_in_receipt import (
    ItemInReceiptCreate,
    ItemInReceiptDelete,
    ItemInReceiptResponse,
    ItemInReceiptUpdate,
)
from app.services.item_in_receipt_service import ItemInReceiptService

router = APIRouter()


def _get_line_service(session: DbSession) -> ItemInReceiptService:
    return ItemInReceiptService(
        ItemInReceiptRepository(session),
        ReceiptRepository(session),
        ItemRepository(session),
    )


@router.get("/{receipt_id}", response_model=list[ItemInReceiptResponse])
async def list_items_in_receipt(session: DbSession, user_id: CurrentUserId, receipt_id: str):
    return await _get_line_service(session).list_lines(user_id, receipt_id)


@router.post("", response_class=Response)
async def add_item_to_receipt(session: DbSession, user_id: CurrentUserId, data: ItemInReceiptCreate):
    await _get_line_service(session).create(user_id, data)


@router.put("", response_class=Response)
async def update_item_in_receipt(session: DbSession, user_id: CurrentUserId, data: ItemInReceiptUpdate):
    await _get_line_service(session).update(user_id, data)


@router.delete("", response_class=Response)
async def remove_item_from_receipt(session: DbSession, user_id: CurrentUserId, data: ItemInReceiptDelete):
    """Body {itemId} removes that line; {itemId, receiptId} removes the item from the receipt."""
    await _get_line_service(session).delete(user_id, data)
