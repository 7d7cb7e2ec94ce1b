"""Custom exceptions for mediahub.

All exceptions include an HTTP status_code attribute for easy
integration with web frameworks and chat front ends.
"""


class MediaHubError(Exception):
    """Base exception for mediahub.

    Attributes:
        status_code: HTTP status code for API error responses.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AdapterError(MediaHubError):
    """A backend call failed.

    Raised (or subclassed) whenever a media server could not be queried
    or its answer could not be translated. The original cause is kept
    in ``__cause__``.
    """

    status_code: int = 502  # Bad Gateway (upstream failure)


class TransportError(AdapterError):
    """Network failure or non-2xx response from a media server.

    Attributes:
        http_status: Upstream HTTP status, None when no response was received.
        body: Raw upstream response body, empty when unavailable.
    """

    def __init__(
        self, message: str, *, http_status: int | None = None, body: bytes = b""
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.body = body


class UpstreamError(TransportError):
    """Media server answered with a non-2xx status."""

    def __init__(self, message: str, *, http_status: int, body: bytes = b"") -> None:
        super().__init__(message, http_status=http_status, body=body)


class DecodeError(AdapterError):
    """Response body did not match the expected shape."""


class NotFoundError(MediaHubError):
    """A lookup found no match, even after refreshing.

    Raised for unknown library ids and unconfigured server types.
    """

    status_code: int = 404  # Not Found


class ConfigurationError(MediaHubError):
    """No media server could be constructed.

    Raised at startup when no backend credentials were supplied.
    """

    status_code: int = 500  # Internal Server Error
