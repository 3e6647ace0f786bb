"""Member management endpoints."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from anggota.core.cache import TTLStore, users_page_key
from anggota.core.config import get_settings
from anggota.core.dependencies import get_current_user, get_db, get_users_cache
from anggota.core.exceptions import (
    PersistenceError,
    UserNotFoundError,
    ValidationFailed,
    validation_errors_from_pydantic,
)
from anggota.core.permissions import require_role
from anggota.models.user import User
from anggota.schemas.user import MessageResponse, UserCreate, UserPage, UserRead, UserUpdate
from anggota.services import users as user_service

logger = logging.getLogger(__name__)

_settings = get_settings()

router = APIRouter(prefix="/users", tags=["users"])

require_admin = require_role(_settings.admin_role)


async def _get_user_or_404(session: AsyncSession, user_id: int) -> User:
    user = await user_service.get_user(session, user_id)
    if not user:
        raise UserNotFoundError()
    return user


@router.get("", response_model=UserPage)
async def list_users(
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=_settings.default_per_page, ge=1, le=_settings.max_per_page),
    session: AsyncSession = Depends(get_db),
    cache: TTLStore = Depends(get_users_cache),
    _: User = Depends(require_admin),
) -> dict[str, Any]:
    key = users_page_key(page, per_page)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("Users cache hit: %s", key)
        return cached

    logger.debug("Users cache miss: %s", key)
    result = await user_service.paginate_users(session, page, per_page)
    cache.set(key, result, get_settings().users_cache_ttl_seconds)
    return result


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    session: AsyncSession = Depends(get_db),
    _: User = Depends(get_current_user),
) -> UserRead:
    user = await _get_user_or_404(session, user_id)
    return UserRead.model_validate(user)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    session: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> UserRead:
    if await user_service.email_taken(session, payload.email):
        raise ValidationFailed.for_field("email", user_service.EMAIL_TAKEN_MESSAGE)

    try:
        user = await user_service.create_user(session, payload)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to create user %s", payload.email)
        raise PersistenceError("Failed to create user.") from exc

    logger.info("Admin %s created user %s", admin.id, user.id)
    return UserRead.model_validate(user)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    body: Any = Body(None),
    session: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> UserRead:
    # the target must exist before the payload is validated
    user = await _get_user_or_404(session, user_id)
    try:
        payload = UserUpdate.model_validate(body)
    except ValidationError as exc:
        raise ValidationFailed(validation_errors_from_pydantic(exc.errors())) from exc

    if await user_service.email_taken(session, payload.email, exclude_id=user.id):
        raise ValidationFailed.for_field("email", user_service.EMAIL_TAKEN_MESSAGE)

    try:
        updated = await user_service.update_user(session, user, payload)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to update user %s", user_id)
        raise PersistenceError("Failed to update user.") from exc

    logger.info("Admin %s updated user %s", admin.id, user_id)
    return UserRead.model_validate(updated)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    session: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
) -> MessageResponse:
    user = await _get_user_or_404(session, user_id)

    try:
        await user_service.delete_user(session, user)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to delete user %s", user_id)
        raise PersistenceError("Failed to delete user.") from exc

    logger.info("Admin %s deleted user %s", admin.id, user_id)
    return MessageResponse(message="User deleted successfully.")
