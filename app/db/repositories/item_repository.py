"""
Item repository - owner-scoped catalog queries.
"""

from sqlalchemy import select

from app.db.models.item import Item
from app.db.repositories.base_repository import BaseRepository


class ItemRepository(BaseRepository[Item]):
    """Item-specific queries."""

    def __init__(self, session):
        super().__init__(session, Item)

    async def list_owned(self, user_id: int, name: str | None = None) -> list[Item]:
        """Caller's items, optionally filtered by case-sensitive name substring."""
        query = select(Item).where(Item.created_by == user_id)
        if name:
            query = query.where(Item.name.contains(name, autoescape=True))
        result = await self.session.execute(query.order_by(Item.id))
        return list(result.scalars().all())

    async def name_taken(self, user_id: int, name: str, exclude_id: int | None = None) -> bool:
        query = select(Item.id).where(Item.created_by == user_id, Item.name == name)
        if exclude_id is not None:
            query = query.where(Item.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None
