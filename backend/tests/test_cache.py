from __future__ import annotations

from anggota.core.cache import MemoryTTLStore, users_page_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_get_missing_key_returns_none() -> None:
    store = MemoryTTLStore()
    assert store.get("absent") is None


def test_entry_expires_after_its_ttl() -> None:
    clock = FakeClock()
    store = MemoryTTLStore(timer=clock)
    store.set("page", {"total": 3}, ttl_seconds=3600)

    clock.now += 3599
    assert store.get("page") == {"total": 3}

    clock.now += 1
    assert store.get("page") is None


def test_entries_keep_individual_lifetimes() -> None:
    clock = FakeClock()
    store = MemoryTTLStore(timer=clock)
    store.set("short", 1, ttl_seconds=10)
    store.set("long", 2, ttl_seconds=100)

    clock.now += 50

    assert store.get("short") is None
    assert store.get("long") == 2


def test_last_write_wins() -> None:
    store = MemoryTTLStore()
    store.set("key", "first", ttl_seconds=60)
    store.set("key", "second", ttl_seconds=60)
    assert store.get("key") == "second"


def test_capacity_is_bounded() -> None:
    store = MemoryTTLStore(maxsize=2)
    store.set("a", 1, ttl_seconds=60)
    store.set("b", 2, ttl_seconds=60)
    store.set("c", 3, ttl_seconds=60)
    assert len(store) == 2
    assert store.get("c") == 3


def test_clear() -> None:
    store = MemoryTTLStore()
    store.set("key", "value", ttl_seconds=60)
    store.clear()
    assert store.get("key") is None


def test_users_page_key() -> None:
    assert users_page_key(2, 25) == "users_page_2_per_page_25"
