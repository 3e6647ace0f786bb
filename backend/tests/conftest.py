from __future__ import annotations

import os
from functools import lru_cache

# Settings are read once at import time; point them at test values first.
os.environ.setdefault("ANGGOTA_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ANGGOTA_SECRET_KEY", "test-secret-key")

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from anggota.core.cache import MemoryTTLStore
from anggota.core.dependencies import get_db, get_users_cache
from anggota.core.security import PasswordHasher
from anggota.db.base import Base
from anggota.db.session import build_engine
from anggota.main import app
from anggota.models.user import User, UserRole

DEFAULT_PASSWORD = "password123"


@lru_cache
def _hashed(password: str) -> str:
    return PasswordHasher.hash(password)


@pytest.fixture
async def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    await engine.dispose()


@pytest.fixture
def users_cache() -> MemoryTTLStore:
    return MemoryTTLStore()


@pytest.fixture
async def client(session_factory, users_cache):
    async def _override_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_users_cache] = lambda: users_cache
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    counter = {"n": 0}

    async def _make_user(
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        roles: tuple[str, ...] = (),
        **fields,
    ) -> User:
        counter["n"] += 1
        async with session_factory() as session:
            user = User(
                name=fields.pop("name", f"User {counter['n']}"),
                email=email or f"user{counter['n']}@example.com",
                password=_hashed(password),
                umur=fields.pop("umur", 20),
                status_keanggotaan=fields.pop("status_keanggotaan", "standard"),
                **fields,
            )
            user.roles = [UserRole(role=role) for role in roles]
            session.add(user)
            await session.commit()
            return user

    return _make_user


@pytest.fixture
def login(client):
    async def _login(email: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
        resp = await client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _login


@pytest.fixture
async def admin_headers(make_user, login):
    admin = await make_user(email="admin@example.com", roles=("admin",))
    return await login(admin.email)
