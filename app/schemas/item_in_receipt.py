"""Line item (item in receipt) request/response schemas."""

from pydantic import Field

from app.schemas.common import CamelModel


class ItemInReceiptCreate(CamelModel):
    receipt_id: str = Field(..., min_length=1)
    item_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)


class ItemInReceiptUpdate(CamelModel):
    id: str
    amount: float | None = Field(None, gt=0)


class ItemInReceiptDelete(CamelModel):
    """`itemId` alone is the line's own id; with `receiptId` it is the catalog item's id."""

    item_id: str = Field(..., min_length=1)
    receipt_id: str | None = None


class ItemInReceiptResponse(CamelModel):
    id: str
    item_id: str
    name: str
    price: float
    unit: str
    amount: float
