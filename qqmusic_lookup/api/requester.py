"""
Transport + retry composition used by every endpoint adapter.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping

from qqmusic_lookup.api.retry import DEFAULT_RETRIES, DEFAULT_RETRY_DELAY, retry_request
from qqmusic_lookup.api.transport import Transport
from qqmusic_lookup.core.config import Config


@dataclass(frozen=True)
class Requester:
    """
    Sends GET requests through a Transport, retrying transient failures.

    Attributes:
        transport: The HTTP transport (fixed headers and timeout).
        retries: Maximum attempts per request.
        delay: Backoff unit in seconds.

    Example:
        requester = Requester.from_config(load_config())
        body = await requester.get_json(url, params)
    """
    transport: Transport = field(default_factory=Transport)
    retries: int = DEFAULT_RETRIES
    delay: float = DEFAULT_RETRY_DELAY

    @classmethod
    def from_config(cls, config: Config) -> "Requester":
        return cls(
            transport=Transport.from_config(config.network),
            retries=config.network.retries,
            delay=config.network.retry_delay,
        )

    async def get_json(
        self,
        url: str,
        params: Mapping[str, Any],
        headers: Mapping[str, str] | None = None
    ) -> Any:
        """GET ``url`` and return decoded JSON, retrying transient failures."""
        return await retry_request(
            lambda: self.transport.get_json(url, params, headers),
            retries=self.retries,
            delay=self.delay,
        )
