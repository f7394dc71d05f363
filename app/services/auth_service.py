"""
Auth service - user lookup and creation for OAuth and local-credential logins.
Challenge: Find-or-create on first OAuth login; credentials checked without leaking which part was wrong.
"""

import logging

from app.core.errors import ConflictError, UnauthenticatedError
from app.core.security import hash_password, new_public_id, verify_password
from app.db.models.user import User
from app.db.repositories.user_repository import UserRepository
from app.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)


def user_to_response(user: User) -> UserResponse:
    return UserResponse(id=user.public_id, display_name=user.display_name, email=user.email)


class AuthService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def find_or_create(self, external_id: str, display_name: str) -> User:
        """Return the user bound to this provider subject, inserting one on first login."""
        user = await self.user_repo.get_by_external_id(external_id)
        if user:
            return user
        user = await self.user_repo.add(
            User(public_id=new_public_id(), external_id=external_id, display_name=display_name)
        )
        await self.user_repo.session.commit()
        logger.info("user created from oauth login: %s", user.public_id)
        return user

    async def register(self, data: UserCreate) -> User:
        if await self.user_repo.get_by_email(data.email):
            raise ConflictError("Email already registered")
        user = await self.user_repo.add(
            User(
                public_id=new_public_id(),
                email=data.email,
                hashed_password=hash_password(data.password),
                display_name=data.display_name or data.email,
            )
        )
        await self.user_repo.session.commit()
        logger.info("user registered: %s", user.public_id)
        return user

    async def authenticate(self, email: str, password: str) -> User:
        user = await self.user_repo.get_by_email(email)
        if not user or not user.hashed_password or not verify_password(password, user.hashed_password):
            raise UnauthenticatedError("Invalid email or password")
        return user
