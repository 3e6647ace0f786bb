"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from anggota.core.cache import MemoryTTLStore, TTLStore
from anggota.core.config import get_settings
from anggota.core.exceptions import UnauthenticatedError
from anggota.core.security import TokenSigner, token_ttl_seconds
from anggota.db.session import get_session
from anggota.models.user import User
from anggota.services.users import get_user

_bearer_scheme = HTTPBearer(auto_error=False)

_users_cache: TTLStore | None = None


async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_session() as session:
        yield session


def get_users_cache() -> TTLStore:
    global _users_cache
    if _users_cache is None:
        _users_cache = MemoryTTLStore(maxsize=get_settings().users_cache_max_entries)
    return _users_cache


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    session: AsyncSession = Depends(get_db),
) -> User:
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    try:
        payload = TokenSigner().verify(credentials.credentials, max_age=token_ttl_seconds())
    except ValueError as exc:
        raise UnauthenticatedError() from exc

    user_id = payload.get("sub") if isinstance(payload, dict) else None
    if not isinstance(user_id, int):
        raise UnauthenticatedError()

    user = await get_user(session, user_id, with_roles=True)
    if not user:
        raise UnauthenticatedError()

    return user
