"""
Line item service - items on receipts, owned through the receipt.
"""

import logging

from sqlalchemy import delete

from app.core.errors import ForbiddenError, ReferenceNotFoundError
from app.core.security import new_public_id
from app.db.models.item_in_receipt import ItemInReceipt
from app.db.repositories.item_in_receipt_repository import ItemInReceiptRepository, LineRow
from app.db.repositories.item_repository import ItemRepository
from app.db.repositories.receipt_repository import ReceiptRepository
from app.schemas.item_in_receipt import (
    ItemInReceiptCreate,
    ItemInReceiptDelete,
    ItemInReceiptResponse,
    ItemInReceiptUpdate,
)

logger = logging.getLogger(__name__)


def line_to_response(row: LineRow) -> ItemInReceiptResponse:
    return ItemInReceiptResponse(
        id=row.line.public_id,
        item_id=row.item.public_id,
        name=row.item.name,
        price=row.item.price,
        unit=row.item.unit,
        amount=row.line.amount,
    )


class ItemInReceiptService:
    def __init__(
        self,
        line_repo: ItemInReceiptRepository,
        receipt_repo: ReceiptRepository,
        item_repo: ItemRepository,
    ):
        self.line_repo = line_repo
        self.receipt_repo = receipt_repo
        self.item_repo = item_repo

    async def list_lines(self, user_id: int, receipt_id: str | None = None) -> list[ItemInReceiptResponse]:
        rows = await self.line_repo.list_owned(user_id, receipt_public_id=receipt_id)
        return [line_to_response(row) for row in rows]

    async def create(self, user_id: int, data: ItemInReceiptCreate) -> str:
        """Both the receipt and the catalog item must belong to the caller."""
        receipt_id = await self.receipt_repo.find_owned_id(data.receipt_id, user_id)
        if receipt_id is None:
            raise ReferenceNotFoundError(f"receipt {data.receipt_id!r} not found")
        item_id = await self.item_repo.find_owned_id(data.item_id, user_id)
        if item_id is None:
            raise ReferenceNotFoundError(f"item {data.item_id!r} not found")
        line = await self.line_repo.add(
            ItemInReceipt(
                public_id=new_public_id(),
                receipt_id=receipt_id,
                item_id=item_id,
                amount=data.amount,
            )
        )
        await self.line_repo.session.commit()
        logger.info("item %s added to receipt %s", data.item_id, data.receipt_id)
        return line.public_id

    async def update(self, user_id: int, data: ItemInReceiptUpdate) -> None:
        line_id = await self.line_repo.assert_owned(data.id, user_id)
        line = await self.line_repo.get_by_id(line_id)
        if data.amount is not None:
            line.amount = data.amount
        await self.line_repo.session.commit()
        logger.info("receipt line updated: %s", data.id)

    async def delete(self, user_id: int, data: ItemInReceiptDelete) -> None:
        """Delete by the line's own id, or every line of (itemId, receiptId)."""
        if data.receipt_id:
            line_ids = await self.line_repo.find_owned_ids_by_pair(data.item_id, data.receipt_id, user_id)
            if not line_ids:
                raise ForbiddenError("not authorized to delete specified item from receipt")
        else:
            line_ids = [await self.line_repo.assert_owned(data.item_id, user_id)]
        await self.line_repo.session.execute(delete(ItemInReceipt).where(ItemInReceipt.id.in_(line_ids)))
        await self.line_repo.session.commit()
        logger.info("deleted %d receipt line(s)", len(line_ids))
