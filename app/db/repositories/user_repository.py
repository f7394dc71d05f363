"""
User repository - encapsulates all user data access (SOLID: Single Responsibility).
Challenge: Keep queries in one place; public-to-internal id resolution lives here.
"""

from sqlalchemy import select

from app.core.errors import NotFoundError
from app.db.models.user import User
from app.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """User-specific queries. Extends base CRUD with domain logic."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - used for local-credential authentication."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_external_id(self, external_id: str) -> User | None:
        """Find user by OAuth subject - used by the login callback."""
        result = await self.session.execute(select(User).where(User.external_id == external_id))
        return result.scalar_one_or_none()

    async def private_id(self, public_id: str) -> int:
        """Resolve a caller's public id to the internal id every owner filter uses."""
        result = await self.session.execute(select(User.id).where(User.public_id == public_id))
        user_id = result.scalar_one_or_none()
        if user_id is None:
            raise NotFoundError(f"user {public_id!r} not found")
        return user_id
