"""
Read-through caching and bounded retry for calls to remote dependencies.

QueryCache keeps one slot per (region, key) until it is cleared or the
process restarts. RetryPolicy re-invokes a coroutine on transport-level
failures only and surfaces exhaustion as UpstreamUnavailableError.
"""
import asyncio
from typing import Any, Awaitable, Callable, Hashable, Optional, TypeVar

import httpx
import structlog

from shared.errors import UpstreamUnavailableError
from shared.observability.metrics import ecomm_catalog_cache_total, ecomm_catalog_retries_total

logger = structlog.get_logger(__name__)

T = TypeVar("T")

UPSTREAM_UNAVAILABLE_MESSAGE = "Service temporarily unavailable. Please try again later."

_MISSING = object()


class QueryCache:

    def __init__(self) -> None:
        self._entries: dict[tuple[str, Hashable], Any] = {}

    def get(self, region: str, key: Hashable = None) -> Any:
        return self._entries.get((region, key), _MISSING)

    def put(self, region: str, key: Hashable, value: Any) -> None:
        self._entries[(region, key)] = value

    def __contains__(self, item: tuple[str, Hashable]) -> bool:
        return item in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self, region: Optional[str] = None) -> None:
        if region is None:
            self._entries.clear()
            return
        for entry in [e for e in self._entries if e[0] == region]:
            del self._entries[entry]

    async def get_or_load(self, region: str, key: Hashable, loader: Callable[[], Awaitable[T]]) -> T:
        """Returns the cached value or awaits loader() and stores its result.

        Exceptions raised by loader propagate and leave the slot empty.
        """
        value = self.get(region, key)
        if value is not _MISSING:
            ecomm_catalog_cache_total.labels(region=region, result="hit").inc()
            return value
        ecomm_catalog_cache_total.labels(region=region, result="miss").inc()
        value = await loader()
        self.put(region, key, value)
        return value


class RetryPolicy:

    def __init__(
        self,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        retry_on: tuple[type[BaseException], ...] = (httpx.TransportError,),
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self.retry_on = retry_on

    def is_retryable(self, exc: BaseException) -> bool:
        return isinstance(exc, self.retry_on)

    async def call(self, operation: str, func: Callable[..., Awaitable[T]], *args: Any) -> T:
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await func(*args)
            except Exception as exc:
                if not self.is_retryable(exc):
                    raise
                ecomm_catalog_retries_total.labels(operation=operation).inc()
                logger.warning(
                    "upstream_call_failed",
                    operation=operation,
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    error=type(exc).__name__,
                )
                if attempt == self.max_attempts:
                    raise UpstreamUnavailableError(UPSTREAM_UNAVAILABLE_MESSAGE) from exc
                if self.backoff_seconds:
                    await asyncio.sleep(self.backoff_seconds)
