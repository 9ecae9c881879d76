"""Retry executor with exponential backoff and jitter."""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog

from .failures import Failure, HttpFailure, classify
from .normalizer import normalize_error

T = TypeVar("T")

logger = structlog.stdlib.get_logger(__name__)

RETRYABLE_CLIENT_STATUSES = frozenset({408, 429})


@dataclass(frozen=True)
class RetryPolicy:
    """Retry policy. Delays are in milliseconds."""

    max_retries: int = 3
    base_delay_ms: int = 1000
    max_delay_ms: int = 30000
    jitter_ratio: float = 0.1

    def compute_delay(self, attempt_count: int) -> float:
        """Delay before the retry that follows ``attempt_count`` earlier retries."""
        exponential = self.base_delay_ms * (2**attempt_count)
        jitter = random.random() * self.jitter_ratio * exponential
        return min(exponential + jitter, self.max_delay_ms)


@dataclass
class RetryContext:
    """Per-request retry bookkeeping."""

    max_retries: int
    base_delay_ms: int
    attempt_count: int = 0

    @property
    def exhausted(self) -> bool:
        return self.attempt_count >= self.max_retries


def is_retryable(failure: Failure) -> bool:
    """Client errors are final, except request timeout and rate limiting."""
    if isinstance(failure, HttpFailure) and 400 <= failure.status < 500:
        return failure.status in RETRYABLE_CLIENT_STATUSES
    return True


class RetryExecutor:
    """Runs an idempotent request function under a :class:`RetryPolicy`.

    Attempts are strictly sequential. The wait between attempts goes through
    ``sleep`` so other tasks keep running.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.policy = policy if policy is not None else RetryPolicy()
        self._sleep = sleep

    async def run(self, fn: Callable[[], Awaitable[T]], description: str = "") -> T:
        """Return the result of ``fn`` or raise the normalized final failure."""
        ctx = RetryContext(
            max_retries=self.policy.max_retries,
            base_delay_ms=self.policy.base_delay_ms,
        )
        while True:
            try:
                return await fn()
            except Exception as e:
                failure = classify(e)
                if not is_retryable(failure) or ctx.exhausted:
                    error = normalize_error(e)
                    if error is e:
                        raise
                    raise error from e
                delay_ms = self.policy.compute_delay(ctx.attempt_count)
                ctx.attempt_count += 1
                logger.warning(
                    "retrying request",
                    request=description,
                    attempt=ctx.attempt_count,
                    max_retries=ctx.max_retries,
                    delay_ms=round(delay_ms),
                    failure=type(failure).__name__,
                )
                await self._sleep(delay_ms / 1000)


async def with_retry(policy: RetryPolicy, fn: Callable[[], Awaitable[T]]) -> T:
    """Run ``fn`` with retries under ``policy``."""
    return await RetryExecutor(policy).run(fn)
