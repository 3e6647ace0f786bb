"""Pydantic schemas for user operations."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

EMAIL_MAX_LENGTH = 100


def _check_email_length(value: str) -> str:
    if len(value) > EMAIL_MAX_LENGTH:
        raise PydanticCustomError(
            "string_too_long",
            "String should have at most {max_length} characters",
            {"max_length": EMAIL_MAX_LENGTH},
        )
    return value


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    umur: int = Field(..., ge=1)
    status_keanggotaan: str | None = Field(default=None, max_length=20)

    @field_validator("email")
    @classmethod
    def _email_length(cls, value: str) -> str:
        return _check_email_length(value)


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)


class RegisterRequest(UserCreate):
    password_confirmation: str

    @model_validator(mode="after")
    def _check_confirmation(self) -> RegisterRequest:
        if self.password != self.password_confirmation:
            raise PydanticCustomError(
                "password_confirmation",
                "The password field confirmation does not match.",
                {"field": "password"},
            )
        return self


class UserUpdate(BaseModel):
    """Fields an admin may change; anything else in the payload is dropped."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    umur: int = Field(..., ge=1)
    status_keanggotaan: str | None = Field(default=None, max_length=20)

    @field_validator("email")
    @classmethod
    def _email_length(cls, value: str) -> str:
        return _check_email_length(value)


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    umur: int
    status_keanggotaan: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserPage(BaseModel):
    current_page: int
    data: list[UserRead]
    per_page: int
    total: int
    last_page: int


class MessageResponse(BaseModel):
    message: str
