"""Retry decorator for handling rate limits and transient errors on network calls.

This module provides a decorator that implements bounded retry logic for both
GitHub API calls (made through githubkit) and Jira API calls (made through
httpx), including respect for rate limit headers and exponential backoff.
"""

import asyncio
import functools
import inspect
import time
from typing import Any, Callable, Mapping, TypeVar

import httpx
import structlog
from githubkit.exception import PrimaryRateLimitExceeded, RequestFailed, SecondaryRateLimitExceeded

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
"""HTTP status codes from Jira that are worth retrying."""


def wait_time_from_headers(headers: Mapping[str, str], default: float) -> float:
    """Determine how long to wait before retrying based on rate limit headers.

    Prefers the retry-after header, then x-ratelimit-reset, then the default.
    """
    retry_after = headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            logger.warning("Invalid retry-after header value", retry_after=retry_after)
            return default

    rate_limit_reset = headers.get("x-ratelimit-reset")
    if rate_limit_reset:
        try:
            reset_timestamp = int(rate_limit_reset)
        except ValueError:
            logger.warning("Invalid x-ratelimit-reset header value", rate_limit_reset=rate_limit_reset)
            return default
        current_timestamp = int(time.time())
        if reset_timestamp > current_timestamp:
            return reset_timestamp - current_timestamp + 1
    return default


def retryable_wait_time(exc: Exception, delay: float) -> float | None:
    """Return the wait time for a retryable exception, or None if it should not be retried."""
    if isinstance(exc, (PrimaryRateLimitExceeded, SecondaryRateLimitExceeded)):
        if exc.retry_after:
            return exc.retry_after.total_seconds()
        return delay

    if isinstance(exc, RequestFailed):
        status_code = exc.response.status_code
        is_rate_limit = status_code == 429 or (status_code == 403 and "rate limit" in str(exc).lower())
        if not is_rate_limit:
            return None
        return wait_time_from_headers(exc.response.headers, delay)

    if isinstance(exc, httpx.HTTPStatusError):
        if exc.response.status_code not in RETRYABLE_STATUS_CODES:
            return None
        return wait_time_from_headers(exc.response.headers, delay)

    if isinstance(exc, httpx.TransportError):
        return delay

    return None


def retry_on_rate_limit(
    max_retries: int = 5,
    initial_delay: float = 2.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
) -> Callable[[F], F]:
    """Decorator for retrying async functions when they encounter rate limits or transient errors.

    This decorator handles:
    - GitHub primary and secondary rate limits (403/429)
    - Jira rate limits (429) and transient server errors (5xx)
    - httpx transport errors (connection resets, timeouts)
    - Respects retry-after and x-ratelimit-reset headers

    Retries are bounded so that a misbehaving API cannot stall a CI job for
    long; the overall run timeout is the final backstop.

    Args:
        max_retries: Maximum number of retry attempts (default: 5)
        initial_delay: Initial delay in seconds between retries (default: 2.0)
        max_delay: Maximum delay in seconds between retries (default: 60.0)
        exponential_base: Base for exponential backoff calculation (default: 2.0)

    Returns:
        Decorated function with retry logic

    Example:
        @retry_on_rate_limit()
        async def get_issue(key: str):
            return await http_client.get(f"/rest/api/2/issue/{key}")
    """

    def decorator(func: F) -> F:
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"Function {func.__name__} decorated with @retry_on_rate_limit must be async.")

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            delay = initial_delay

            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    wait_time = retryable_wait_time(e, delay)
                    if wait_time is None:
                        raise

                    if attempt == max_retries:
                        logger.error(
                            "Max retries reached for retryable error",
                            function=func.__name__,
                            attempt=attempt + 1,
                            error_type=type(e).__name__,
                            error=str(e),
                        )
                        raise

                    wait_time = min(wait_time, max_delay)
                    logger.warning(
                        f"Retryable error encountered, retrying in {wait_time} seconds",
                        function=func.__name__,
                        attempt=attempt + 1,
                        max_retries=max_retries,
                        wait_time=wait_time,
                        error_type=type(e).__name__,
                    )
                    await asyncio.sleep(wait_time)

                    # Exponential backoff for next attempt
                    delay = min(delay * exponential_base, max_delay)

        return async_wrapper  # type: ignore

    return decorator
