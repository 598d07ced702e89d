"""
Per-page view state.

One ViewModelStore lives as long as a page is mounted. Each resource slot
holds the latest collection and its load state. Collections are replaced
wholesale, never patched. Every load takes a request token first; a result
carrying an older token, or arriving after the page was closed, is dropped.
"""
from __future__ import annotations
import enum
import itertools
import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

Collection = Tuple[Mapping[str, Any], ...]


class LoadState(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class Slot:
    collection: Collection = ()
    state: LoadState = LoadState.IDLE
    error: Optional[str] = None
    token: int = 0


def freeze(records: Iterable[Mapping[str, Any]]) -> Collection:
    return tuple(MappingProxyType(dict(r)) for r in records)


class ViewModelStore:
    def __init__(self, resources: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._slots: Dict[str, Slot] = {name: Slot() for name in resources}
        self._tokens = itertools.count(1)
        self.closed = False

    # ── reads ─────────────────────────────────────────
    def slot(self, resource: str) -> Slot:
        with self._lock:
            return self._slots.get(resource, Slot())

    def get(self, resource: str) -> Collection:
        return self.slot(resource).collection

    def state(self, resource: str) -> LoadState:
        return self.slot(resource).state

    def snapshot(self) -> Dict[str, Slot]:
        with self._lock:
            return dict(self._slots)

    # ── writes ────────────────────────────────────────
    def begin(self, resource: str) -> int:
        """Start a load for `resource` and return its request token."""
        with self._lock:
            token = next(self._tokens)
            current = self._slots.get(resource, Slot())
            self._slots[resource] = Slot(current.collection, LoadState.LOADING, None, token)
            return token

    def complete(self, resource: str, token: int, records: Iterable[Mapping[str, Any]]) -> bool:
        """Replace the collection. Returns False when the result was stale."""
        frozen = freeze(records)
        with self._lock:
            if not self._is_current(resource, token):
                logger.debug("Discarding stale result for %s (token %d)", resource, token)
                return False
            self._slots[resource] = Slot(frozen, LoadState.LOADED, None, token)
            return True

    def fail(self, resource: str, token: int, reason: str) -> bool:
        """Mark the load failed; the previous collection stays in place."""
        with self._lock:
            if not self._is_current(resource, token):
                logger.debug("Discarding stale failure for %s (token %d)", resource, token)
                return False
            current = self._slots[resource]
            self._slots[resource] = Slot(current.collection, LoadState.FAILED, reason, token)
            return True

    def close(self) -> None:
        """Page unmounted: any load still in flight is ignored on arrival."""
        with self._lock:
            self.closed = True

    def _is_current(self, resource: str, token: int) -> bool:
        if self.closed:
            return False
        slot = self._slots.get(resource)
        return slot is not None and slot.token == token
