"""Bounded exponential backoff for quota-exhausted operations."""

import functools
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from .exceptions import QuotaExceededError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_BASE_DELAY = 1.0
QUOTA_MARKER = "quotaExceeded"


def is_quota_exhausted(error: BaseException) -> bool:
    """Whether a failure means the caller must slow down and try again later."""
    return isinstance(error, QuotaExceededError) or QUOTA_MARKER in str(error)


def _retrying(
    max_attempts: int, base_delay: float, sleep: Optional[Callable[[float], Awaitable[None]]]
) -> AsyncRetrying:
    kwargs = {}
    if sleep is not None:
        kwargs["sleep"] = sleep
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        # base_delay * 2 ** (attempt - 1): 1s, 2s, 4s, 8s with the defaults
        wait=wait_exponential(multiplier=base_delay, exp_base=2),
        retry=retry_if_exception(is_quota_exhausted),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
        **kwargs,
    )


async def retry_on_quota(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY,
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
) -> T:
    """Run ``operation`` until it succeeds, fails for a non-quota reason, or runs out of attempts.

    The last exception is re-raised as-is once ``max_attempts`` calls have
    failed with quota exhaustion. ``sleep`` defaults to :func:`asyncio.sleep`.
    """
    return await _retrying(max_attempts, base_delay, sleep)(operation)


def quota_retry(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY,
    sleep: Optional[Callable[[float], Awaitable[None]]] = None,
):
    """Decorator form of :func:`retry_on_quota` for async functions."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            return await retry_on_quota(
                lambda: func(*args, **kwargs),
                max_attempts=max_attempts,
                base_delay=base_delay,
                sleep=sleep,
            )

        return wrapper

    return decorator

