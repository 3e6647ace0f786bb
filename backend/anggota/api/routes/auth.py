"""Registration and login endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from anggota.core.dependencies import get_db
from anggota.core.exceptions import AnggotaError, InvalidCredentialsError, PersistenceError, ValidationFailed
from anggota.core.security import TokenSigner, token_ttl_seconds
from anggota.schemas.auth import LoginRequest, TokenResponse
from anggota.schemas.user import MessageResponse, RegisterRequest
from anggota.services.users import EMAIL_TAKEN_MESSAGE, authenticate_user, create_user, email_taken

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, session: AsyncSession = Depends(get_db)) -> MessageResponse:
    if await email_taken(session, payload.email):
        raise ValidationFailed.for_field("email", EMAIL_TAKEN_MESSAGE)

    try:
        user = await create_user(session, payload)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to register user %s", payload.email)
        raise PersistenceError(f"Failed to register user. {exc}") from exc

    logger.info("Registered user %s", user.id)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, session: AsyncSession = Depends(get_db)) -> TokenResponse:
    try:
        user = await authenticate_user(session, payload.email, payload.password)
        token = TokenSigner().issue(user.id) if user else None
    except Exception as exc:
        logger.exception("Login error")
        raise AnggotaError(f"Failed to login. {exc}") from exc

    if user is None or token is None:
        logger.warning("Failed login for %s", payload.email)
        raise InvalidCredentialsError()

    return TokenResponse(access_token=token, expires_in=token_ttl_seconds())
