"""
ItemInReceipt model - one receipt line: `amount` units of an item on a receipt.
Ownership is inherited from the receipt.
"""

from sqlalchemy import Float, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, PublicIdMixin


class ItemInReceipt(PublicIdMixin, Base):
    __tablename__ = "items_in_receipt"

    receipt_id: Mapped[int] = mapped_column(ForeignKey("receipts.id"), nullable=False, index=True)
    item_id: Mapped[int] = mapped_column(ForeignKey("items.id"), nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False, default=1.0, server_default="1.0")

    def __repr__(self) -> str:
        return f"<ItemInReceipt(id={self.id}, amount={self.amount})>"
