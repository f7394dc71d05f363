"""
Receipt model. The total price is never stored; repositories derive it from the line items.
A client may backdate a receipt by supplying created_at at creation.
"""

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, PublicIdMixin, TimestampMixin


class Receipt(PublicIdMixin, TimestampMixin, Base):
    __tablename__ = "receipts"

    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False, index=True)
    created_by: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Receipt(id={self.id}, public_id={self.public_id})>"
