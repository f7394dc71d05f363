"""User request/response schemas - API contract and validation."""

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel


class UserCreate(CamelModel):
    email: EmailStr
    # bcrypt accepts max 72 bytes; longer passwords cause 500. Validate here for clear 422.
    password: str = Field(..., min_length=1, max_length=72)
    display_name: str | None = Field(None, min_length=1, max_length=255)


class LoginRequest(CamelModel):
    email: str
    password: str


class UserResponse(CamelModel):
    id: str
    display_name: str
    email: str | None = None
