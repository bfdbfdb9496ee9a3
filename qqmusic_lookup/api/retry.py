"""
Retry combinator for upstream requests.

Runs a zero-argument coroutine factory up to ``retries`` times with linear
backoff (delay * attempt). Only failures flagged transient are retried;
permanent failures such as FormatError propagate immediately.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

from qqmusic_lookup.core.exceptions import QQMusicError
from qqmusic_lookup.core.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0


def is_transient(error: BaseException) -> bool:
    """Return True if ``error`` is worth retrying."""
    return isinstance(error, QQMusicError) and error.transient


async def retry_request(
    operation: Callable[[], Awaitable[T]],
    retries: int = DEFAULT_RETRIES,
    delay: float = DEFAULT_RETRY_DELAY
) -> T:
    """
    Await ``operation()`` until it succeeds or attempts run out.

    Args:
        operation: Zero-argument callable returning a fresh awaitable on
                   every call (e.g. ``lambda: transport.get_json(url, params)``).
        retries: Maximum number of attempts, including the first one.
        delay: Backoff unit in seconds. After failed attempt n the wrapper
               sleeps n * delay (1s, 2s, ... with the default).

    Returns:
        Whatever the first successful attempt returns.

    Raises:
        The last attempt's exception, unchanged, once attempts are
        exhausted; or the first non-transient exception immediately.
    """
    if retries < 1:
        raise ValueError(f"retries must be at least 1, got {retries}")

    attempt = 1
    while True:
        try:
            return await operation()
        except Exception as e:
            if not is_transient(e) or attempt >= retries:
                raise

            wait = delay * attempt
            logger.warning(
                f"Attempt {attempt}/{retries} failed: {e}. Retrying in {wait:.1f}s"
            )
            await asyncio.sleep(wait)
            attempt += 1
