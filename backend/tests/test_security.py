from __future__ import annotations

import pytest

from anggota.core.security import PasswordHasher, TokenSigner, token_ttl_seconds


def test_password_hash_roundtrip() -> None:
    hashed = PasswordHasher.hash("password123")
    assert hashed != "password123"
    assert PasswordHasher.verify("password123", hashed)
    assert not PasswordHasher.verify("password124", hashed)


def test_token_carries_user_id() -> None:
    signer = TokenSigner(secret_key="k")
    token = signer.issue(42)
    assert signer.verify(token, max_age=60) == {"sub": 42}


def test_token_signed_with_other_key_is_rejected() -> None:
    token = TokenSigner(secret_key="k1").issue(42)
    with pytest.raises(ValueError):
        TokenSigner(secret_key="k2").verify(token, max_age=60)


def test_tampered_token_is_rejected() -> None:
    token = TokenSigner(secret_key="k").issue(42)
    with pytest.raises(ValueError):
        TokenSigner(secret_key="k").verify(token[:-2] + "xx", max_age=60)


def test_expired_token_is_rejected() -> None:
    token = TokenSigner(secret_key="k").issue(42)
    with pytest.raises(ValueError):
        TokenSigner(secret_key="k").verify(token, max_age=-1)


def test_token_ttl_follows_settings() -> None:
    assert token_ttl_seconds() == 60 * 60
