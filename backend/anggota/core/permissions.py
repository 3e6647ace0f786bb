"""Role-based authorization checks."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable

from fastapi import Depends

from anggota.core.dependencies import get_current_user
from anggota.core.exceptions import ForbiddenError
from anggota.models.user import User

logger = logging.getLogger(__name__)


def has_role(identity: User | None, required_role: str) -> bool:
    """Exact-match membership test of ``required_role`` in the identity's roles."""

    if identity is None:
        return False
    return required_role in identity.role_names


def require_role(role: str) -> Callable[..., Awaitable[User]]:
    """Build a dependency that admits only authenticated users holding ``role``."""

    async def _check(current_user: User = Depends(get_current_user)) -> User:
        if not has_role(current_user, role):
            logger.warning("User %s denied: missing role %r", current_user.id, role)
            raise ForbiddenError()
        return current_user

    return _check
