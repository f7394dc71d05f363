"""Location request/response schemas - REST API contract."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class LocationCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=255)


class LocationUpdate(CamelModel):
    """Omitted or null fields are left unchanged."""

    id: str
    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1, max_length=255)


class LocationResponse(CamelModel):
    id: str
    name: str
    address: str
    created_at: datetime
    updated_at: datetime
