"""
Item model - reusable catalog entry (name, unit price, unit) referenced by receipt lines.
"""

from sqlalchemy import Float, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, PublicIdMixin, TimestampMixin


class Item(PublicIdMixin, TimestampMixin, Base):
    """Catalog item. Price is per `unit`; a receipt line multiplies it by its amount."""

    __tablename__ = "items"
    __table_args__ = (UniqueConstraint("created_by", "name", name="uq_items_owner_name"),)

    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    unit: Mapped[str] = mapped_column(String(64), nullable=False)

    def __repr__(self) -> str:
        return f"<Item(id={self.id}, name={self.name})>"
