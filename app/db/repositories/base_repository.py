"""
Base repository - generic CRUD plus the ownership check every mutation goes through.
Challenge: One authorization primitive instead of a hand-written join per handler.
Design: Subclasses describe their ownership chain in `_owned_ids`; everything else is shared.
"""

from typing import Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ForbiddenError
from app.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: int) -> ModelType | None:
        """Fetch single entity by internal primary key."""
        return await self.session.get(self.model, id)

    async def get_by_public_id(self, public_id: str) -> ModelType | None:
        result = await self.session.execute(select(self.model).where(self.model.public_id == public_id))
        return result.scalar_one_or_none()

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller commits session."""
        self.session.add(entity)
        await self.session.flush()  # Get ID without committing
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        """Remove entity from DB."""
        await self.session.delete(entity)
        await self.session.flush()

    def _owned_ids(self, user_id: int) -> Select:
        """Ids of rows owned by `user_id`. Directly owned tables filter on created_by."""
        return select(self.model.id).where(self.model.created_by == user_id)

    async def find_owned_id(self, public_id: str, user_id: int) -> int | None:
        """Internal id of the row with `public_id` if `user_id` owns it, else None."""
        result = await self.session.execute(
            self._owned_ids(user_id).where(self.model.public_id == public_id)
        )
        return result.scalar_one_or_none()

    async def assert_owned(self, public_id: str, user_id: int) -> int:
        """
        Internal id of the row, or ForbiddenError.
        Absent and foreign-owned rows are indistinguishable to the caller.
        """
        row_id = await self.find_owned_id(public_id, user_id)
        if row_id is None:
            raise ForbiddenError(f"not authorized to modify {self.model.__tablename__} row {public_id!r}")
        return row_id
