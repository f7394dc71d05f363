"""
Item service - business logic for catalog items (SOLID: Single Responsibility).
Challenge: Partial updates with explicit optional fields; ownership enforced by the repository.
Design: Service depends on abstractions (repositories); easy to test with mocks.
"""

import logging

from sqlalchemy import func

from app.core.errors import ConflictError
from app.core.security import new_public_id
from app.db.models.item import Item
from app.db.repositories.item_repository import ItemRepository
from app.schemas.item import ItemCreate, ItemResponse, ItemUpdate

logger = logging.getLogger(__name__)


def _item_to_response(item: Item) -> ItemResponse:
    """Map model to API response (public id only)."""
    return ItemResponse(
        id=item.public_id,
        name=item.name,
        price=item.price,
        unit=item.unit,
        created_at=item.created_at,
        updated_at=item.updated_at,
    )


class ItemService:
    """Handles all item use cases for one caller."""

    def __init__(self, item_repo: ItemRepository):
        self.item_repo = item_repo

    async def list_items(self, user_id: int, name: str | None = None) -> list[ItemResponse]:
        items = await self.item_repo.list_owned(user_id, name=name)
        return [_item_to_response(i) for i in items]

    async def create(self, user_id: int, data: ItemCreate) -> str:
        """Create item and commit; returns its public id."""
        if await self.item_repo.name_taken(user_id, data.name):
            raise ConflictError(f"item {data.name!r} already exists")
        item = await self.item_repo.add(
            Item(
                public_id=new_public_id(),
                created_by=user_id,
                name=data.name,
                price=data.price,
                unit=data.unit,
            )
        )
        await self.item_repo.session.commit()
        logger.info("item created: %s", item.public_id)
        return item.public_id

    async def update(self, user_id: int, data: ItemUpdate) -> None:
        """Apply supplied fields only; updated_at always moves."""
        item_id = await self.item_repo.assert_owned(data.id, user_id)
        item = await self.item_repo.get_by_id(item_id)
        if data.name is not None:
            if await self.item_repo.name_taken(user_id, data.name, exclude_id=item_id):
                raise ConflictError(f"item {data.name!r} already exists")
            item.name = data.name
        if data.price is not None:
            item.price = data.price
        if data.unit is not None:
            item.unit = data.unit
        item.updated_at = func.now()
        await self.item_repo.session.commit()
        logger.info("item updated: %s", data.id)

    async def delete(self, user_id: int, public_id: str) -> None:
        item_id = await self.item_repo.assert_owned(public_id, user_id)
        item = await self.item_repo.get_by_id(item_id)
        await self.item_repo.delete(item)
        await self.item_repo.session.commit()
        logger.info("item deleted: %s", public_id)
