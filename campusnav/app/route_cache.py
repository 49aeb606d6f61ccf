# campusnav/app/route_cache.py
from collections import OrderedDict
from threading import Lock
from typing import Dict, FrozenSet, Hashable, Optional, Tuple

from .costs import RoutePreferences
from .routing import Route

_MISS = object()

RouteKey = Tuple[str, RoutePreferences, str, str, FrozenSet[str]]


def route_key(campus_key: str, prefs: RoutePreferences, start_id: str, end_id: str, pinned=()) -> RouteKey:
    return (campus_key, prefs, start_id, end_id, frozenset(pinned))


class RouteCache:
    """LRU memo of routing results; a cached ``None`` means "no route"."""

    def __init__(self, max_entries: int) -> None:
        self._max_entries = max(1, int(max_entries))
        self._lock = Lock()
        self._items: "OrderedDict[Hashable, Optional[Route]]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get(self, key: Hashable):
        """Return the cached value, or the module-level miss sentinel."""
        with self._lock:
            if key not in self._items:
                self._misses += 1
                return _MISS
            self._items.move_to_end(key)
            self._hits += 1
            return self._items[key]

    def set(self, key: Hashable, value: Optional[Route]) -> None:
        with self._lock:
            if key in self._items:
                self._items.move_to_end(key)
            self._items[key] = value
            while len(self._items) > self._max_entries:
                self._items.popitem(last=False)

    def clear(self) -> int:
        with self._lock:
            cleared = len(self._items)
            self._items.clear()
            return cleared

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._items),
                "hits": self._hits,
                "misses": self._misses,
                "max_entries": self._max_entries,
            }


def is_miss(value) -> bool:
    return value is _MISS
