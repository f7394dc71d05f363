"""GraphQL object types. Field names are exposed in camelCase by Strawberry."""

from datetime import datetime
from typing import Optional

import strawberry

from app.schemas.item_in_receipt import ItemInReceiptResponse
from app.schemas.location import LocationResponse
from app.schemas.receipt import ReceiptWithData


@strawberry.type
class Location:
    id: str
    name: str
    address: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_response(cls, location: LocationResponse) -> "Location":
        return cls(
            id=location.id,
            name=location.name,
            address=location.address,
            created_at=location.created_at,
            updated_at=location.updated_at,
        )


@strawberry.type
class ItemInReceipt:
    id: str
    item_id: str
    name: str
    price: float
    unit: str
    amount: float

    @classmethod
    def from_response(cls, line: ItemInReceiptResponse) -> "ItemInReceipt":
        return cls(
            id=line.id,
            item_id=line.item_id,
            name=line.name,
            price=line.price,
            unit=line.unit,
            amount=line.amount,
        )


@strawberry.type
class Receipt:
    id: str
    created_by: str
    location: Location
    total_price: float
    created_at: datetime
    updated_at: datetime
    # Filled only when the query selects it
    items_in_receipt: Optional[list[ItemInReceipt]] = None

    @classmethod
    def from_response(cls, receipt: ReceiptWithData) -> "Receipt":
        return cls(
            id=receipt.id,
            created_by=receipt.created_by,
            location=Location.from_response(receipt.location),
            total_price=receipt.total_price,
            created_at=receipt.created_at,
            updated_at=receipt.updated_at,
        )
