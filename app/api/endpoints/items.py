"""
Item endpoints - the caller's catalog of purchasable items.
Design: Thin controller; service layer holds business logic.
"""

from fastapi import APIRouter, Query, Response

from app.core.dependencies import CurrentUserId
from app.db.repositories.item_repository import ItemRepository
from app.db.session import DbSession
from app.schemas.common import DeleteById
from app.schemas.item import ItemCreate, ItemResponse, ItemUpdate
from app.services.item_service import ItemService

router = APIRouter()


def _get_item_service(session: DbSession) -> ItemService:
    return ItemService(ItemRepository(session))


@router.get("", response_model=list[ItemResponse])
async def list_items(session: DbSession, user_id: CurrentUserId, name: str | None = Query(None)):
    """REST: GET /items?name=milk."""
    return await _get_item_service(session).list_items(user_id, name)


@router.post("", response_class=Response)
async def create_item(session: DbSession, user_id: CurrentUserId, data: ItemCreate):
    await _get_item_service(session).create(user_id, data)


@router.put("", response_class=Response)
async def update_item(session: DbSession, user_id: CurrentUserId, data: ItemUpdate):
    """Only fields present in the body change; `price: 0` is applied."""
    await _get_item_service(session).update(user_id, data)


@router.delete("", response_class=Response)
async def delete_item(session: DbSession, user_id: CurrentUserId, data: DeleteById):
    await _get_item_service(session).delete(user_id, data.id)
