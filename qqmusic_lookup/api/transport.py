"""
HTTP transport for the QQ Music web API.

This module contains only network logic:
- fixed headers (User-Agent, Referer)
- per-attempt timeout
- status and body decoding checks

No retries, no endpoint semantics. See api/retry.py for retries and the
music/ package for the endpoints.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Mapping

import aiohttp

from qqmusic_lookup.core.config import DEFAULT_REFERER, DEFAULT_USER_AGENT, NetworkConfig
from qqmusic_lookup.core.exceptions import TransportError
from qqmusic_lookup.core.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Transport:
    """
    Immutable HTTP GET + JSON client.

    A single instance can be shared by any number of concurrent tasks:
    it holds configuration only, and every request opens its own
    aiohttp session.

    Attributes:
        timeout: Total time allowed for one request, in seconds.
        user_agent: Value of the User-Agent header.
        referer: Value of the Referer header. The upstream may reject
                 requests that do not carry it.

    Example:
        transport = Transport()
        data = await transport.get_json(url, {"format": "json"})
    """
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    referer: str = DEFAULT_REFERER

    @classmethod
    def from_config(cls, network: NetworkConfig) -> "Transport":
        """Build a transport from the network configuration section."""
        return cls(
            timeout=network.timeout,
            user_agent=network.user_agent,
            referer=network.referer,
        )

    @property
    def headers(self) -> dict[str, str]:
        """Headers sent with every request."""
        return {
            "User-Agent": self.user_agent,
            "Referer": self.referer,
        }

    async def get_json(
        self,
        url: str,
        params: Mapping[str, Any],
        headers: Mapping[str, str] | None = None
    ) -> Any:
        """
        Perform a GET request and return the decoded JSON body.

        Args:
            url: Endpoint URL without query string.
            params: Query parameters. Values are URL-encoded by aiohttp.
            headers: Extra headers merged over the fixed ones.

        Returns:
            The parsed JSON body (usually a dict). The body is decoded
            whatever the response content type, since the upstream serves
            JSON as text/html or application/x-javascript.

        Raises:
            TransportError: On timeout or connection failure (transient),
                            non-2xx status (transient for 5xx and 429),
                            or a body that is not valid JSON (permanent).
        """
        request_headers = {**self.headers, **(headers or {})}
        client_timeout = aiohttp.ClientTimeout(total=self.timeout)

        logger.debug(f"GET {url} params={dict(params)}")

        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.get(url, params=params, headers=request_headers) as response:
                    if not 200 <= response.status < 300:
                        raise TransportError(
                            f"HTTP {response.status} from {url}",
                            details={"url": url, "status": response.status},
                            status=response.status
                        )
                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:
                        raise TransportError(
                            f"Malformed JSON from {url}: {e}",
                            details={"url": url, "original_error": str(e)},
                            status=response.status,
                            transient=False
                        ) from e
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request to {url} timed out after {self.timeout}s",
                details={"url": url, "timeout": self.timeout}
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(
                f"Request to {url} failed: {e}",
                details={"url": url, "original_error": str(e)}
            ) from e
