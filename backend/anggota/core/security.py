"""Security helpers for password hashing and bearer token signing."""
from __future__ import annotations

from typing import Any

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from .config import get_settings


_password_context = CryptContext(schemes=["argon2"], deprecated="auto")


class PasswordHasher:
    """Hash and verify user passwords using Argon2id."""

    @staticmethod
    def hash(password: str) -> str:
        return _password_context.hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        return _password_context.verify(password, hashed)


def token_ttl_seconds() -> int:
    """Lifetime of an issued bearer token in seconds."""

    return get_settings().access_token_expire_minutes * 60


class TokenSigner:
    """Sign and verify timestamped bearer tokens carrying a user id."""

    def __init__(self, salt: str = "anggota-access-token", secret_key: str | None = None) -> None:
        key = secret_key or get_settings().secret_key
        self._serializer = URLSafeTimedSerializer(key, salt=salt)

    def issue(self, user_id: int) -> str:
        return self._serializer.dumps({"sub": user_id})

    def verify(self, token: str, max_age: int | None = None) -> dict[str, Any]:
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired) as exc:
            raise ValueError("Invalid or expired access token") from exc
