"""
HTTP layer for qqmusic-lookup.

    - transport: Immutable aiohttp GET + JSON client with fixed headers
    - retry: Linear-backoff retry combinator for transient failures
    - requester: Transport + retry composition used by the endpoints
"""

from qqmusic_lookup.api.requester import Requester
from qqmusic_lookup.api.retry import (
    DEFAULT_RETRIES,
    DEFAULT_RETRY_DELAY,
    is_transient,
    retry_request,
)
from qqmusic_lookup.api.transport import Transport

__all__ = [
    "Transport",
    "Requester",
    "retry_request",
    "is_transient",
    "DEFAULT_RETRIES",
    "DEFAULT_RETRY_DELAY",
]
