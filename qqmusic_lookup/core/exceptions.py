"""
Exception classes for qqmusic-lookup.

Every failure raised by the client derives from QQMusicError so the facade
can catch them with a single except clause and render them as text.

Exception Hierarchy:
    QQMusicError (base)
        ConfigError - Configuration file issues
        TransportError - Network, HTTP status or body decoding issues
        FormatError - Upstream answered 2xx with an unexpected JSON shape
        NotFoundError - No matching song, or the song has no lyric

Retry Classification:
    Each exception carries a ``transient`` flag. The retry wrapper only
    retries transient failures; everything else propagates on the first
    attempt.
"""

import copy


class QQMusicError(Exception):
    """
    Base exception for all qqmusic-lookup errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., url, status).
        transient: True if repeating the same request may succeed.

    Example:
        try:
            entries = await fetch_chart(26)
        except QQMusicError as e:
            logger.error(f"Chart fetch failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    transient: bool = False

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'url': Endpoint that was requested
                     - 'status': HTTP status code
                     - 'original_error': The underlying exception text
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message

    def with_message(self, message: str) -> "QQMusicError":
        """
        Return a copy of this error carrying a new user-facing message.

        The copy keeps the class, the ``transient`` flag and the details;
        the replaced message is stored under details['original_error'].

        Example:
            except TransportError as e:
                raise e.with_message("获取排行榜数据失败，请稍后再试") from e
        """
        wrapped = copy.copy(self)
        wrapped.args = (message,)
        wrapped.message = message
        wrapped.details = {**self.details, "original_error": self.message}
        return wrapped


class ConfigError(QQMusicError):
    """
    Raised when the configuration file or environment overrides are invalid.

    Common causes:
        - An explicit config path that does not exist
        - config.yaml has invalid YAML syntax
        - A value has the wrong type (e.g., non-integer retries)

    Example:
        raise ConfigError(
            "'network.timeout' must be a positive number",
            details={'field': 'network.timeout', 'value': -1}
        )
    """
    pass


class TransportError(QQMusicError):
    """
    Raised when an HTTP request to the upstream service fails.

    Timeouts, connection failures, HTTP 5xx and HTTP 429 are transient.
    Other 4xx answers and bodies that are not valid JSON are permanent.

    Attributes:
        status: HTTP status code, or None if no response was received.

    Example:
        raise TransportError(
            "HTTP 502 from upstream",
            details={'url': url},
            status=502
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status: int | None = None,
        transient: bool | None = None
    ) -> None:
        """
        Initialize transport error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
            status: HTTP status code if the server answered.
            transient: Override the classification derived from ``status``.
        """
        super().__init__(message, details)
        self.status = status
        if transient is None:
            transient = status is None or status >= 500 or status == 429
        self.transient = transient


class FormatError(QQMusicError):
    """
    Raised when the upstream answered successfully but the JSON body does
    not have the expected structure (missing or mistyped container field).

    This is a permanent error: retrying returns the same body.

    Example:
        raise FormatError(
            "排行榜数据格式错误",
            details={'field': 'songlist', 'type': 'dict'}
        )
    """
    pass


class NotFoundError(QQMusicError):
    """
    Raised when a lyrics lookup finds no matching song or no lyric text.

    Example:
        raise NotFoundError(
            "未找到该歌曲",
            details={'query': '晴天 周杰伦'}
        )
    """
    pass
