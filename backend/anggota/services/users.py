"""User service functions for CRUD, authentication and pagination."""
from __future__ import annotations

import math
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from anggota.core.security import PasswordHasher
from anggota.models.user import User, UserRole
from anggota.schemas.user import UserCreate, UserPage, UserRead, UserUpdate

DEFAULT_STATUS = "standard"
EMAIL_TAKEN_MESSAGE = "The email has already been taken."

# Columns an update request is allowed to touch.
UPDATABLE_FIELDS = ("name", "email", "umur", "status_keanggotaan")


async def get_user(session: AsyncSession, user_id: int, with_roles: bool = False) -> User | None:
    query = select(User).where(User.id == user_id)
    if with_roles:
        query = query.options(selectinload(User.roles))
    result = await session.execute(query)
    return result.scalar_one_or_none()


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def email_taken(session: AsyncSession, email: str, exclude_id: int | None = None) -> bool:
    query = select(User.id).where(User.email == email)
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    result = await session.execute(query.limit(1))
    return result.first() is not None


async def create_user(session: AsyncSession, user_in: UserCreate) -> User:
    user = User(
        name=user_in.name,
        email=user_in.email,
        password=PasswordHasher.hash(user_in.password),
        umur=user_in.umur,
        status_keanggotaan=user_in.status_keanggotaan or DEFAULT_STATUS,
    )
    session.add(user)
    await session.flush()
    return user


async def update_user(session: AsyncSession, user: User, user_in: UserUpdate) -> User:
    """Apply the allow-listed fields present in the payload; password and roles stay."""

    changes = user_in.model_dump(exclude_unset=True)
    for field in UPDATABLE_FIELDS:
        if field in changes:
            setattr(user, field, changes[field])
    await session.flush()
    await session.refresh(user)
    return user


async def delete_user(session: AsyncSession, user: User) -> None:
    await session.delete(user)
    await session.flush()


async def authenticate_user(session: AsyncSession, email: str, password: str) -> User | None:
    user = await get_user_by_email(session, email)
    if not user:
        return None
    if not PasswordHasher.verify(password, user.password):
        return None
    return user


async def count_users(session: AsyncSession) -> int:
    result = await session.execute(select(func.count()).select_from(User))
    return result.scalar_one()


async def paginate_users(session: AsyncSession, page: int, per_page: int) -> dict[str, Any]:
    """Return one page of users as a plain dict, safe to cache and serialize."""

    total = await count_users(session)
    result = await session.execute(
        select(User).order_by(User.id).offset((page - 1) * per_page).limit(per_page)
    )
    users = result.scalars().all()
    page_model = UserPage(
        current_page=page,
        data=[UserRead.model_validate(user) for user in users],
        per_page=per_page,
        total=total,
        last_page=max(1, math.ceil(total / per_page)),
    )
    return page_model.model_dump(mode="json")


async def grant_role(session: AsyncSession, user: User, role: str) -> UserRole:
    result = await session.execute(
        select(UserRole).where(UserRole.user_id == user.id, UserRole.role == role)
    )
    existing = result.scalar_one_or_none()
    if existing:
        return existing
    user_role = UserRole(user_id=user.id, role=role)
    session.add(user_role)
    await session.flush()
    return user_role
