"""Item request/response schemas - REST API contract."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class ItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    unit: str = Field(..., min_length=1, max_length=64)


class ItemUpdate(CamelModel):
    """Omitted or null fields are left unchanged; an explicit 0 price is applied."""

    id: str
    name: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, ge=0)
    unit: str | None = Field(None, min_length=1, max_length=64)


class ItemResponse(CamelModel):
    id: str
    name: str
    price: float
    unit: str
    created_at: datetime
    updated_at: datetime
