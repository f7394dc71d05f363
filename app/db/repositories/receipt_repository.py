"""
Receipt repository - receipts joined with their location, owner and derived total.
Challenge: Total price is an aggregate over line items; receipts without lines must total 0.
"""

from typing import NamedTuple

from sqlalchemy import func, select

from app.db.models.item import Item
from app.db.models.item_in_receipt import ItemInReceipt
from app.db.models.location import Location
from app.db.models.receipt import Receipt
from app.db.models.user import User
from app.db.repositories.base_repository import BaseRepository


class ReceiptRow(NamedTuple):
    receipt: Receipt
    location: Location
    created_by: str
    total_price: float


class ReceiptRepository(BaseRepository[Receipt]):
    def __init__(self, session):
        super().__init__(session, Receipt)

    async def list_with_data(
        self,
        user_id: int,
        public_id: str | None = None,
        location_public_id: str | None = None,
    ) -> list[ReceiptRow]:
        """Caller's receipts with location, owner public id and total price (outer joins keep empty receipts)."""
        total_price = func.coalesce(func.sum(Item.price * ItemInReceipt.amount), 0.0).label("total_price")
        query = (
            select(Receipt, Location, User.public_id.label("created_by"), total_price)
            .join(Location, Location.id == Receipt.location_id)
            .join(User, User.id == Receipt.created_by)
            .outerjoin(ItemInReceipt, ItemInReceipt.receipt_id == Receipt.id)
            .outerjoin(Item, Item.id == ItemInReceipt.item_id)
            .where(Receipt.created_by == user_id)
            .group_by(Receipt.id, Location.id, User.public_id)
            .order_by(Receipt.created_at, Receipt.id)
        )
        if public_id is not None:
            query = query.where(Receipt.public_id == public_id)
        if location_public_id is not None:
            query = query.where(Location.public_id == location_public_id)
        result = await self.session.execute(query)
        return [
            ReceiptRow(row.Receipt, row.Location, row.created_by, float(row.total_price or 0.0))
            for row in result.all()
        ]
