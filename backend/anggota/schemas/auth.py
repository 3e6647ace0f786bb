"""Authentication-related schemas."""
from __future__ import annotations

from pydantic import BaseModel, field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        # stored emails went through EmailStr; anything unparseable simply won't match
        try:
            _, normalized = validate_email(value)
        except PydanticCustomError:
            return value
        return normalized


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
