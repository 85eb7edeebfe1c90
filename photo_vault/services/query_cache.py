"""Process-wide query cache keyed by (kind, caller).

Reads go through `fetch`, which serves the cached value or runs the loader.
Writers invalidate the exact keys their write affected, and only after the
write has been acknowledged. Nothing here flushes another caller's entries.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

QueryKey = tuple[str, str]
Loader = Callable[[], Awaitable[Any]]


def files_key(caller: str) -> QueryKey:
    return ("files", caller)


def quota_key(caller: str) -> QueryKey:
    return ("quota", caller)


def profile_key(caller: str) -> QueryKey:
    return ("profile", caller)


class QueryCache:
    def __init__(self):
        self._values: dict[QueryKey, Any] = {}
        self._loaders: dict[QueryKey, Loader] = {}

    def peek(self, key: QueryKey) -> Optional[Any]:
        return self._values.get(key)

    def is_fresh(self, key: QueryKey) -> bool:
        return key in self._values

    async def fetch(self, key: QueryKey, loader: Loader) -> Any:
        self._loaders[key] = loader
        if key in self._values:
            return self._values[key]
        return await self._load(key, loader)

    async def refetch(self, key: QueryKey, loader: Optional[Loader] = None) -> Optional[Any]:
        """Reload `key`, bypassing the cached value.

        Uses `loader` when given, otherwise the loader of the last `fetch`.
        """
        loader = loader or self._loaders.get(key)
        if loader is None:
            logger.debug(f"Refetch of {key} skipped: never fetched")
            return None
        self._loaders[key] = loader
        return await self._load(key, loader)

    def invalidate(self, key: QueryKey) -> bool:
        """Mark `key` stale. Returns whether a value was dropped."""
        logger.debug(f"Invalidating {key}")
        return self._values.pop(key, None) is not None

    def clear_scope(self, caller: str) -> int:
        """Forget every entry belonging to `caller`."""
        keys = [k for k in set(self._values) | set(self._loaders) if k[1] == caller]
        for key in keys:
            self._values.pop(key, None)
            self._loaders.pop(key, None)
        return len(keys)

    async def _load(self, key: QueryKey, loader: Loader) -> Any:
        value = await loader()
        self._values[key] = value
        return value
