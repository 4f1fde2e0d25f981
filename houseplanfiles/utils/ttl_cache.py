from __future__ import annotations

import time
from dataclasses import dataclass
from threading import RLock
from typing import Callable, Dict, Generic, Optional, TypeVar


K = TypeVar('K')
V = TypeVar('V')


@dataclass
class _Entry(Generic[V]):
    value: V
    expires_at: float


class TTLCache(Generic[K, V]):
    """Small thread-safe in-process cache with per-entry expiry.

    Used for voice command resolutions and rendered gallery previews; losing
    it on restart only costs a recomputation.
    """

    def __init__(self, ttl_seconds: int = 60, max_items: int = 1024):
        self._ttl = max(1, int(ttl_seconds))
        self._max = max(16, int(max_items))
        self._data: Dict[K, _Entry[V]] = {}
        self._lock = RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            if entry.expires_at <= time.monotonic():
                del self._data[key]
                return None
            return entry.value

    def set(self, key: K, value: V, ttl_seconds: Optional[int] = None) -> None:
        ttl = self._ttl if ttl_seconds is None else max(1, int(ttl_seconds))
        with self._lock:
            if key not in self._data and len(self._data) >= self._max:
                self._evict_locked()
            self._data[key] = _Entry(value=value, expires_at=time.monotonic() + ttl)

    def pop(self, key: K) -> Optional[V]:
        with self._lock:
            entry = self._data.pop(key, None)
            return entry.value if entry else None

    def get_or_set(self, key: K, factory: Callable[[], V], ttl_seconds: Optional[int] = None) -> V:
        existing = self.get(key)
        if existing is not None:
            return existing
        value = factory()
        if value is not None:
            self.set(key, value, ttl_seconds=ttl_seconds)
        return value

    def _evict_locked(self) -> None:
        now = time.monotonic()
        for k in [k for k, v in self._data.items() if v.expires_at <= now]:
            del self._data[k]
        if len(self._data) >= self._max:
            # dicts keep insertion order: drop the oldest entry
            del self._data[next(iter(self._data))]
