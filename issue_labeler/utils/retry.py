"""Retry decorator for GitHub API calls that hit rate limits.

A labeling run performs a handful of calls, so the retry budget here is small:
a throttled call waits for the window GitHub advertises (or an exponential
backoff when it advertises none) and is attempted again. Any other failure is
raised immediately.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Awaitable, Callable, TypeVar

import structlog
from github.GithubException import GithubException, RateLimitExceededException

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def _header(exc: GithubException, name: str) -> str | None:
    headers = exc.headers or {}
    for key, value in headers.items():
        if key.lower() == name:
            return str(value)
    return None


def is_rate_limit_response(exc: GithubException) -> bool:
    """Return True if a failed request was rejected because of throttling."""
    if isinstance(exc, RateLimitExceededException) or exc.status == 429:
        return True
    if exc.status != 403:
        return False
    if _header(exc, "x-ratelimit-remaining") == "0":
        return True
    return "rate limit" in str(exc).lower()


def wait_time_from_headers(exc: GithubException, default: float) -> float:
    """Work out how long to wait from the retry-after or x-ratelimit-reset headers."""
    retry_after = _header(exc, "retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)
    rate_limit_reset = _header(exc, "x-ratelimit-reset")
    if rate_limit_reset:
        try:
            reset_timestamp = int(rate_limit_reset)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
        else:
            remaining = reset_timestamp - int(time.time())
            if remaining > 0:
                return float(remaining + 1)
    return default


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 5.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Retry an async GitHub call when it is rejected by a primary or secondary rate limit.

    Args:
        max_retries: Maximum number of retry attempts after the first call.
        initial_delay: Delay in seconds used when GitHub does not say how long to wait.
        max_delay: Upper bound on any single wait, in seconds.
        exponential_base: Growth factor of the fallback delay between attempts.

    Returns:
        A decorator wrapping the coroutine function with the retry loop.
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"@retry_on_rate_limit only supports async functions, got {func.__name__}")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except GithubException as e:
                    if not is_rate_limit_response(e):
                        raise
                    if attempt == max_retries:
                        logger.error(
                            "Max retries reached for GitHub rate limit error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            status_code=e.status,
                        )
                        raise
                    wait_time = min(wait_time_from_headers(e, delay), max_delay)

                logger.warning(
                    "GitHub rate limit hit, retrying",
                    function=func.__name__,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    wait_time=wait_time,
                )
                await asyncio.sleep(wait_time)
                delay = min(delay * exponential_base, max_delay)

        return wrapper  # type: ignore[return-value]

    return decorator
