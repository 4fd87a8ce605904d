"""Explicit bounded retry around the transport's GET fetch."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from weatherapp.config.schema import ApiConfig
from weatherapp.models.errors import ErrorInfo, ErrorKind
from weatherapp.models.result import Failure, Result

logger = logging.getLogger(__name__)

MAX_RETRIES_CEILING = 2


class Fetcher(Protocol):
    async def fetch(
        self, path: str, params: dict[str, Any] | None = None
    ) -> Result[Any]: ...


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = MAX_RETRIES_CEILING
    base_delay: float = 0.5
    retry_on: frozenset[ErrorKind] = field(
        default_factory=lambda: frozenset({ErrorKind.NETWORK, ErrorKind.SERVER})
    )

    def __post_init__(self) -> None:
        if not 0 <= self.max_retries <= MAX_RETRIES_CEILING:
            raise ValueError(
                f"max_retries must be between 0 and {MAX_RETRIES_CEILING}, "
                f"got {self.max_retries}"
            )

    @classmethod
    def from_config(cls, config: ApiConfig) -> "RetryPolicy":
        return cls(max_retries=config.max_retries, base_delay=config.retry_base_delay_s)

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * (2**attempt)


class RetryingApiClient:
    """Wraps a fetcher and retries retryable failures with exponential backoff.

    Only GETs are issued through ``fetch``, so every retried call is idempotent.
    Each retry is logged and reported to ``on_retry``; ``last_attempts`` holds
    the number of attempts made by the most recent call.
    """

    def __init__(
        self,
        inner: Fetcher,
        policy: RetryPolicy | None = None,
        on_retry: Callable[[int, ErrorInfo], None] | None = None,
    ):
        self.inner = inner
        self.policy = policy or RetryPolicy()
        self.on_retry = on_retry
        self.last_attempts = 0

    async def fetch(
        self, path: str, params: dict[str, Any] | None = None
    ) -> Result[Any]:
        self.last_attempts = 0
        for attempt in range(self.policy.max_retries + 1):
            self.last_attempts = attempt + 1
            result = await self.inner.fetch(path, params)
            match result:
                case Failure(error=err) if (
                    err.kind in self.policy.retry_on
                    and attempt < self.policy.max_retries
                ):
                    delay = self.policy.delay_for(attempt)
                    logger.warning(
                        "GET %s failed (%s), retrying in %.1fs (attempt %d/%d)",
                        path, err.kind, delay, attempt + 1, self.policy.max_retries,
                    )
                    if self.on_retry is not None:
                        self.on_retry(attempt + 1, err)
                    await asyncio.sleep(delay)
                case _:
                    return result
        return result
