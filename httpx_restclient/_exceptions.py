from typing import Optional


class RestClientError(Exception):
    """Base class for all errors raised by httpx-restclient."""


class InvalidArgument(RestClientError, ValueError):
    """A required argument was missing or malformed."""


class TransportError(RestClientError, OSError):
    """The request could not be sent or the response could not be read."""


class HttpApplicationError(RestClientError):
    """
    The server answered with an HTTP error status.

    Only raised by an installed error handler.
    """

    def __init__(self, code: int, message: Optional[str], detail: str) -> None:
        super().__init__(detail)
        self.code = code
        self.message = message


class UnsupportedContentType(RestClientError, TypeError):
    """A multipart content value is not a known part type."""


class ResponseStateError(RestClientError, RuntimeError):
    """A response accessor was used after the response was cancelled."""
