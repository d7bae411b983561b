"""Tests for the per-surface sort adapter."""

import asyncio

import pytest
import pytest_asyncio

from chrono_backlinks.config import settings
from chrono_backlinks.models.common import BacklinkEntry
from chrono_backlinks.models.sort import Surface
from chrono_backlinks.services.sort_manager import REORDER_PROVENANCE, SortManager


def entries(*labels):
    return [BacklinkEntry(id=label, label=label) for label in labels]


async def drain():
    await asyncio.sleep(0.05)


@pytest.fixture
def fast_timing(monkeypatch):
    monkeypatch.setattr(settings, "debounce_ms", 0)
    monkeypatch.setattr(settings, "settle_ms", 10_000)


@pytest_asyncio.fixture
async def manager(store, fast_timing):
    m = SortManager(store=store)
    yield m
    m.reset()


@pytest.fixture
def updates(manager):
    received = []

    async def listener(update):
        received.append(update)

    manager.add_order_listener(Surface.SIDEBAR, listener)
    return received


@pytest.mark.asyncio
async def test_notify_emits_sorted_order(manager, updates):
    assert await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"))
    await drain()

    assert len(updates) == 1
    assert updates[0].order == ["2025-01-01", "2024-01-01"]
    assert updates[0].generation == 1
    state = manager.get_state(Surface.SIDEBAR)
    assert state.in_flight == 1
    assert state.applied_order == ["2025-01-01", "2024-01-01"]
    assert state.last_sorted_at is not None


@pytest.mark.asyncio
async def test_already_sorted_input_emits_nothing(manager, updates):
    await manager.notify(Surface.SIDEBAR, entries("2025-01-01", "2024-01-01", "Unknown"))
    await drain()
    assert updates == []
    assert manager.get_state(Surface.SIDEBAR).generation == 0


@pytest.mark.asyncio
async def test_debounce_keeps_latest_entries(manager, updates, monkeypatch):
    monkeypatch.setattr(settings, "debounce_ms", 30)
    await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"))
    await manager.notify(Surface.SIDEBAR, entries("2023-01-01", "2024-01-01", "2025-01-01"))
    await asyncio.sleep(0.1)

    assert len(updates) == 1
    assert updates[0].order == ["2025-01-01", "2024-01-01", "2023-01-01"]


@pytest.mark.asyncio
async def test_echo_of_applied_order_is_ignored(manager, updates):
    await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"))
    await drain()

    scheduled = await manager.notify(Surface.SIDEBAR, entries("2025-01-01", "2024-01-01"))
    assert not scheduled
    assert manager.get_state(Surface.SIDEBAR).notifications_ignored == 1


@pytest.mark.asyncio
async def test_reorder_provenance_is_ignored(manager, updates):
    scheduled = await manager.notify(
        Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"), provenance=REORDER_PROVENANCE
    )
    await drain()
    assert not scheduled
    assert updates == []


@pytest.mark.asyncio
async def test_disabled_surface_is_ignored(manager, updates, monkeypatch):
    monkeypatch.setattr(settings, "enable_sidebar", False)
    assert not await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"))
    await drain()
    assert updates == []
    assert not manager.get_state(Surface.SIDEBAR).enabled


@pytest.mark.asyncio
async def test_order_held_until_acknowledged(manager, updates):
    await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"))
    await drain()
    assert len(updates) == 1

    # New entry shows up before the host applied generation 1
    await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01", "2026-01-01"))
    await drain()
    assert len(updates) == 1

    assert not await manager.acknowledge(Surface.SIDEBAR, 99)
    assert await manager.acknowledge(Surface.SIDEBAR, 1)
    assert len(updates) == 2
    assert updates[1].generation == 2
    assert updates[1].order == ["2026-01-01", "2025-01-01", "2024-01-01"]


@pytest.mark.asyncio
async def test_unacknowledged_order_settles(manager, updates, monkeypatch):
    monkeypatch.setattr(settings, "settle_ms", 10)
    await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"))
    await drain()
    assert manager.get_state(Surface.SIDEBAR).in_flight is None


@pytest.mark.asyncio
async def test_surfaces_are_independent(manager, updates):
    await manager.notify(Surface.IN_DOCUMENT, entries("2024-01-01", "2025-01-01"))
    await drain()
    assert updates == []
    assert manager.get_state(Surface.IN_DOCUMENT).generation == 1
    assert manager.get_state(Surface.SIDEBAR).generation == 0


@pytest.mark.asyncio
async def test_failing_listener_does_not_break_adapter(manager, updates):
    async def broken(update):
        raise RuntimeError("host went away")

    manager.add_order_listener(Surface.SIDEBAR, broken)
    await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"))
    await drain()
    assert len(updates) == 1

    manager.remove_order_listener(Surface.SIDEBAR, broken)
    assert await manager.acknowledge(Surface.SIDEBAR, 1)


@pytest.mark.asyncio
async def test_sort_now_uses_store(manager, store):
    store.add("Meeting Notes.md", {"edited": "2025-10-07"}, mtime=5)
    resolved = manager.sort_now(entries("August 12th, 2025", "December 4th, 2025", "Meeting Notes"))
    assert [r.label for r in resolved] == ["Meeting Notes", "December 4th, 2025", "August 12th, 2025"]


@pytest.mark.asyncio
async def test_removed_entry_not_brought_back_by_held_order(manager, updates):
    await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"))
    await drain()
    assert updates[0].order == ["2025-01-01", "2024-01-01"]

    # An entry appears while generation 1 is in flight, then disappears again
    await manager.notify(Surface.SIDEBAR, entries("2025-01-01", "2024-01-01", "2026-01-01"))
    await drain()
    assert not await manager.notify(Surface.SIDEBAR, entries("2025-01-01", "2024-01-01"))

    assert await manager.acknowledge(Surface.SIDEBAR, 1)
    assert len(updates) == 1
    assert manager.get_state(Surface.SIDEBAR).in_flight is None


@pytest.mark.asyncio
async def test_held_order_dropped_when_newer_entries_already_sorted(manager, updates):
    await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"))
    await drain()

    await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01", "2026-01-01"))
    await drain()
    # Host now shows a different, already chronological set
    await manager.notify(Surface.SIDEBAR, entries("2026-01-01", "2024-01-01"))
    await drain()

    assert await manager.acknowledge(Surface.SIDEBAR, 1)
    assert len(updates) == 1


@pytest.mark.asyncio
async def test_echo_cancels_debounced_sort_of_older_entries(manager, updates, monkeypatch):
    await manager.notify(Surface.SIDEBAR, entries("2024-01-01", "2025-01-01"))
    await drain()

    monkeypatch.setattr(settings, "debounce_ms", 30)
    await manager.notify(Surface.SIDEBAR, entries("2025-01-01", "2024-01-01", "2026-01-01"))
    await manager.notify(Surface.SIDEBAR, entries("2025-01-01", "2024-01-01"))
    await asyncio.sleep(0.1)

    assert await manager.acknowledge(Surface.SIDEBAR, 1)
    assert len(updates) == 1
