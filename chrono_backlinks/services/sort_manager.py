"""Per-surface re-sorting: debouncing, in-flight tracking, feedback suppression."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from ..config import settings
from ..models.common import BacklinkEntry, ResolvedEntry
from ..models.sort import OrderUpdate, Surface, SurfaceState
from ..stores.base import BaseMetadataStore
from ..stores.registry import default_store
from .ordering import order_entries
from .timestamps import MetadataLookup

logger = logging.getLogger(__name__)

# Notifications tagged with this provenance were caused by applying our own order
REORDER_PROVENANCE = "reorder"


class SortManager:
    """Turns "entries may have changed" notifications into orders to apply.

    Each surface gets at most one order in flight at a time. An order stays
    in flight until the host acknowledges its generation, or until
    ``settle_ms`` passes. Orders computed meanwhile are held and emitted on
    acknowledgement.
    """

    def __init__(self, store: Optional[BaseMetadataStore] = None):
        self._store = store
        self._states: dict[Surface, SurfaceState] = {}
        self._timers: dict[Surface, asyncio.Task] = {}
        self._settle_tasks: dict[Surface, asyncio.Task] = {}
        self._pending: dict[Surface, list[str]] = {}
        self._order_listeners: dict[Surface, list[Callable]] = {}
        self.reset()

    @property
    def lookup(self) -> Optional[MetadataLookup]:
        return self._store if self._store is not None else default_store()

    def is_enabled(self, surface: Surface) -> bool:
        if surface == Surface.IN_DOCUMENT:
            return settings.enable_in_document
        return settings.enable_sidebar

    def get_state(self, surface: Surface) -> SurfaceState:
        state = self._states[surface]
        state.enabled = self.is_enabled(surface)
        return state

    def get_all_states(self) -> list[SurfaceState]:
        return [self.get_state(surface) for surface in Surface]

    def add_order_listener(self, surface: Surface, callback: Callable) -> None:
        self._order_listeners.setdefault(surface, []).append(callback)

    def remove_order_listener(self, surface: Surface, callback: Callable) -> None:
        listeners = self._order_listeners.get(surface, [])
        if callback in listeners:
            listeners.remove(callback)

    def sort_now(
        self,
        entries: list[BacklinkEntry],
        lookup: Optional[MetadataLookup] = None,
        descending: Optional[bool] = None,
    ) -> list[ResolvedEntry]:
        """One-shot ordering with no surface state involved."""
        return order_entries(entries, lookup if lookup is not None else self.lookup, descending)

    async def notify(
        self,
        surface: Surface,
        entries: list[BacklinkEntry],
        provenance: Optional[str] = None,
    ) -> bool:
        """Report the entries currently shown on a surface.

        Returns True when a (debounced) sort was scheduled.
        """
        state = self._states[surface]

        if not self.is_enabled(surface):
            return False

        if provenance == REORDER_PROVENANCE:
            state.notifications_ignored += 1
            return False

        reported = [e.id for e in entries]
        if state.in_flight is not None and reported == state.applied_order:
            # The host is echoing back the order we just asked it to apply;
            # anything computed from older entries is now stale
            state.notifications_ignored += 1
            self._pending.pop(surface, None)
            existing = self._timers.pop(surface, None)
            if existing and not existing.done():
                existing.cancel()
            return False

        existing = self._timers.get(surface)
        if existing and not existing.done():
            existing.cancel()

        self._timers[surface] = asyncio.create_task(self._debounced_sort(surface, list(entries)))
        return True

    async def acknowledge(self, surface: Surface, generation: int) -> bool:
        """Mark an emitted order as applied; emits any order held meanwhile."""
        state = self._states[surface]
        if state.in_flight != generation:
            return False

        state.in_flight = None
        settle = self._settle_tasks.pop(surface, None)
        if settle and settle is not asyncio.current_task():
            settle.cancel()

        pending = self._pending.pop(surface, None)
        if pending is not None and pending != state.applied_order:
            await self._emit(surface, pending)
        return True

    def reset(self) -> None:
        """Cancel timers and forget all surface state."""
        for task in list(self._timers.values()) + list(self._settle_tasks.values()):
            if not task.done() and not task.get_loop().is_closed():
                task.cancel()
        self._timers.clear()
        self._settle_tasks.clear()
        self._pending.clear()
        self._states = {surface: SurfaceState(surface=surface) for surface in Surface}

    async def _debounced_sort(self, surface: Surface, entries: list[BacklinkEntry]) -> None:
        try:
            await asyncio.sleep(settings.debounce_ms / 1000)
        except asyncio.CancelledError:
            return

        # Past the debounce window a newer notification schedules its own sort
        if self._timers.get(surface) is asyncio.current_task():
            del self._timers[surface]

        try:
            await self._sort_and_emit(surface, entries)
        except Exception as e:
            logger.error(f"[{surface.value}] Sort failed: {e}")

    async def _sort_and_emit(self, surface: Surface, entries: list[BacklinkEntry]) -> None:
        state = self._states[surface]
        if not entries:
            self._pending.pop(surface, None)
            logger.debug(f"[{surface.value}] No backlink items to sort")
            return

        resolved = order_entries(entries, self.lookup)
        order = [r.id for r in resolved]
        state.last_sorted_at = datetime.now(tz=timezone.utc)

        if order == [e.id for e in entries]:
            self._pending.pop(surface, None)
            logger.debug(f"[{surface.value}] {len(order)} backlinks already in order")
            return

        if state.in_flight is not None:
            self._pending[surface] = order
            return

        await self._emit(surface, order)

    async def _emit(self, surface: Surface, order: list[str]) -> None:
        state = self._states[surface]
        state.generation += 1
        state.in_flight = state.generation
        state.applied_order = order
        state.sorts_emitted += 1

        self._settle_tasks[surface] = asyncio.create_task(self._settle(surface, state.generation))

        logger.info(f"[{surface.value}] Re-sorted {len(order)} items (generation {state.generation})")
        await self._notify_order(OrderUpdate(surface=surface, generation=state.generation, order=order))

    async def _settle(self, surface: Surface, generation: int) -> None:
        try:
            await asyncio.sleep(settings.settle_ms / 1000)
            await self.acknowledge(surface, generation)
        except asyncio.CancelledError:
            pass

    async def _notify_order(self, update: OrderUpdate) -> None:
        listeners = self._order_listeners.get(update.surface, [])
        for cb in list(listeners):
            try:
                await cb(update)
            except Exception as e:
                logger.warning(f"[{update.surface.value}] Order listener failed: {e}")


# Singleton
sort_manager = SortManager()
