"""
ItemInReceipt repository - line items are owned through their receipt.
"""

from typing import NamedTuple

from sqlalchemy import Select, select

from app.db.models.item import Item
from app.db.models.item_in_receipt import ItemInReceipt
from app.db.models.receipt import Receipt
from app.db.repositories.base_repository import BaseRepository


class LineRow(NamedTuple):
    line: ItemInReceipt
    item: Item


class ItemInReceiptRepository(BaseRepository[ItemInReceipt]):
    def __init__(self, session):
        super().__init__(session, ItemInReceipt)

    def _owned_ids(self, user_id: int) -> Select:
        """Ownership chain: items_in_receipt -> receipts -> users."""
        return (
            select(ItemInReceipt.id)
            .join(Receipt, Receipt.id == ItemInReceipt.receipt_id)
            .where(Receipt.created_by == user_id)
        )

    async def find_owned_ids_by_pair(
        self, item_public_id: str, receipt_public_id: str, user_id: int
    ) -> list[int]:
        """Lines of one item on one receipt, both given by public id."""
        query = (
            self._owned_ids(user_id)
            .join(Item, Item.id == ItemInReceipt.item_id)
            .where(Item.public_id == item_public_id, Receipt.public_id == receipt_public_id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_owned(self, user_id: int, receipt_public_id: str | None = None) -> list[LineRow]:
        """Caller's lines joined with their catalog item, optionally for one receipt."""
        query = (
            select(ItemInReceipt, Item)
            .join(Item, Item.id == ItemInReceipt.item_id)
            .join(Receipt, Receipt.id == ItemInReceipt.receipt_id)
            .where(Receipt.created_by == user_id)
        )
        if receipt_public_id is not None:
            query = query.where(Receipt.public_id == receipt_public_id)
        result = await self.session.execute(query.order_by(ItemInReceipt.id))
        return [LineRow(row.ItemInReceipt, row.Item) for row in result.all()]
