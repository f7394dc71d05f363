"""Receipt request/response schemas - REST API contract."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.location import LocationResponse


class ReceiptCreate(CamelModel):
    location_id: str = Field(..., min_length=1)
    # RFC 3339; backdates the receipt
    created_at: datetime | None = None


class ReceiptUpdate(CamelModel):
    id: str
    location_id: str | None = Field(None, min_length=1)


class ReceiptWithData(CamelModel):
    id: str
    created_by: str
    location: LocationResponse
    total_price: float
    created_at: datetime
    updated_at: datetime
