import hashlib
import json
import logging
import threading
from collections import OrderedDict
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 128


def make_key(options: dict[str, Any], kind: str, extra: bytes = b"") -> str:
    """Build a cache key from render options, an output kind and extra bytes.

    Options are serialized as sorted JSON, so equal options always produce
    equal keys regardless of insertion order.
    """
    digest = hashlib.sha256()
    digest.update(json.dumps(options, sort_keys=True, default=str).encode("utf-8"))
    digest.update(extra)
    return f"{kind}-{digest.hexdigest()}"


class RenderCache:
    """Thread-safe in-memory LRU cache of rendered outputs.

    A cache is only shared between requests when the caller passes the same
    instance to them.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self.max_entries = max_entries
        self._entries: OrderedDict[str, Any] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:
        with self._lock:
            if key not in self._entries:
                return None
            self._entries.move_to_end(key)
            logger.debug(f"Cache hit: {key}")
            return self._entries[key]

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
