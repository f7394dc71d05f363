"""
Receipt service - receipts with their location and derived total price.
"""

import logging

from sqlalchemy import func

from app.core.errors import BadRequestError, ReferenceNotFoundError
from app.core.security import new_public_id
from app.db.models.receipt import Receipt
from app.db.repositories.location_repository import LocationRepository
from app.db.repositories.receipt_repository import ReceiptRepository, ReceiptRow
from app.schemas.receipt import ReceiptCreate, ReceiptUpdate, ReceiptWithData
from app.services.location_service import location_to_response

logger = logging.getLogger(__name__)

# Totals are sums of float products; keep them to cents
TOTAL_PRICE_DIGITS = 2


def receipt_to_response(row: ReceiptRow) -> ReceiptWithData:
    return ReceiptWithData(
        id=row.receipt.public_id,
        created_by=row.created_by,
        location=location_to_response(row.location),
        total_price=round(row.total_price, TOTAL_PRICE_DIGITS),
        created_at=row.receipt.created_at,
        updated_at=row.receipt.updated_at,
    )


class ReceiptService:
    def __init__(self, receipt_repo: ReceiptRepository, location_repo: LocationRepository):
        self.receipt_repo = receipt_repo
        self.location_repo = location_repo

    async def list_receipts(
        self,
        user_id: int,
        public_id: str | None = None,
        location_id: str | None = None,
    ) -> list[ReceiptWithData]:
        """Filter by receipt id or by location id, never both."""
        if public_id and location_id:
            raise BadRequestError("Too many parameters specified: use either id or locationId")
        rows = await self.receipt_repo.list_with_data(
            user_id,
            public_id=public_id or None,
            location_public_id=location_id or None,
        )
        return [receipt_to_response(row) for row in rows]

    async def _resolve_location(self, location_public_id: str, user_id: int) -> int:
        location_id = await self.location_repo.find_owned_id(location_public_id, user_id)
        if location_id is None:
            raise ReferenceNotFoundError(f"location {location_public_id!r} not found")
        return location_id

    async def create(self, user_id: int, data: ReceiptCreate) -> str:
        location_id = await self._resolve_location(data.location_id, user_id)
        receipt = Receipt(public_id=new_public_id(), location_id=location_id, created_by=user_id)
        if data.created_at is not None:
            receipt.created_at = data.created_at
            receipt.updated_at = data.created_at
        receipt = await self.receipt_repo.add(receipt)
        await self.receipt_repo.session.commit()
        logger.info("receipt created: %s", receipt.public_id)
        return receipt.public_id

    async def update(self, user_id: int, data: ReceiptUpdate) -> None:
        receipt_id = await self.receipt_repo.assert_owned(data.id, user_id)
        receipt = await self.receipt_repo.get_by_id(receipt_id)
        if data.location_id is not None:
            receipt.location_id = await self._resolve_location(data.location_id, user_id)
        receipt.updated_at = func.now()
        await self.receipt_repo.session.commit()
        logger.info("receipt updated: %s", data.id)

    async def delete(self, user_id: int, public_id: str) -> None:
        receipt_id = await self.receipt_repo.assert_owned(public_id, user_id)
        receipt = await self.receipt_repo.get_by_id(receipt_id)
        await self.receipt_repo.delete(receipt)
        await self.receipt_repo.session.commit()
        logger.info("receipt deleted: %s", public_id)
