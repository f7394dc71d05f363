"""
Location repository - owner-scoped location queries.
"""

from sqlalchemy import select

from app.db.models.location import Location
from app.db.repositories.base_repository import BaseRepository


class LocationRepository(BaseRepository[Location]):
    def __init__(self, session):
        super().__init__(session, Location)

    async def list_owned(self, user_id: int, name: str | None = None) -> list[Location]:
        """Caller's locations, optionally filtered by case-sensitive name substring."""
        query = select(Location).where(Location.created_by == user_id)
        if name:
            query = query.where(Location.name.contains(name, autoescape=True))
        result = await self.session.execute(query.order_by(Location.id))
        return list(result.scalars().all())

    async def name_taken(self, user_id: int, name: str, exclude_id: int | None = None) -> bool:
        query = select(Location.id).where(Location.created_by == user_id, Location.name == name)
        if exclude_id is not None:
            query = query.where(Location.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None
