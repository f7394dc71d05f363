"""
User model - account owning every other row, created by OAuth login or local registration.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, PublicIdMixin, TimestampMixin


class User(PublicIdMixin, TimestampMixin, Base):
    """User entity. `public_id` is the only identifier clients ever see."""

    __tablename__ = "users"

    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Local-credential users
    email: Mapped[str | None] = mapped_column(String(255), unique=True, index=True, nullable=True)
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # OAuth users: the provider's stable subject
    external_id: Mapped[str | None] = mapped_column(String(255), unique=True, index=True, nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, public_id={self.public_id})>"
