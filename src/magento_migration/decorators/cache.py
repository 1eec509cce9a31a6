from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import wraps
from typing import Any, Awaitable, Callable, Optional, TypeVar
from collections import OrderedDict
import asyncio
import logging

T = TypeVar('T')

@dataclass
class CacheMetrics:
    """Metrics for cache monitoring"""
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return round(self.hits / total, 4) if total > 0 else 0.0

class Cache:
    """
    Memoises coroutine results for ``ttl`` seconds, keeping at most
    ``max_size`` entries and evicting the least recently used one.

    One instance may wrap several coroutines; they share the size limit
    and the metrics. Results of None are cached too, so a lookup that
    found nothing is not repeated within the TTL.
    """
    def __init__(
        self,
        ttl: int = 300,
        max_size: int = 1000,
        logger: Optional[logging.Logger] = None
    ) -> None:
        self.ttl = timedelta(seconds=ttl)
        self.max_size = max_size
        self.logger = logger or logging.getLogger(__name__)
        self.metrics = CacheMetrics()
        self._entries: OrderedDict = OrderedDict()
        self._lock = asyncio.Lock()

    def __call__(self, func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            key = (func.__qualname__, args, tuple(sorted(kwargs.items())))

            async with self._lock:
                entry = self._entries.get(key)
                if entry is not None and entry[1] > datetime.now():
                    self._entries.move_to_end(key)
                    self.metrics.hits += 1
                    return entry[0]

                self.metrics.misses += 1
                result = await func(*args, **kwargs)
                self._store(key, result)
                return result

        return wrapper

    def clear(self) -> None:
        self._entries.clear()
        self.metrics.size = 0

    def _store(self, key: tuple, value: Any) -> None:
        self._entries.pop(key, None)
        while len(self._entries) >= self.max_size:
            self._entries.popitem(last=False)
            self.metrics.evictions += 1
            self.logger.debug(f"Cache eviction, size limit {self.max_size} reached")

        self._entries[key] = (value, datetime.now() + self.ttl)
        self.metrics.size = len(self._entries)
