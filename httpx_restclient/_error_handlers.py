import logging
from typing import Optional

from ._exceptions import HttpApplicationError

logger = logging.getLogger(__name__)


def http_error(code: int, message: Optional[str]) -> HttpApplicationError:
    return HttpApplicationError(
        code,
        message,
        f"HTTP Error {code} was returned from the server: {message}",
    )


class ErrorHandler(object):
    def handle_error(self, code: int, message: Optional[str]) -> None:
        """
        Decide what to do with an HTTP error response.

        Called from ``Response.get_content`` before the content is
        deserialized. Raising aborts materialization; returning lets it
        continue with the error body.
        """
        raise NotImplementedError


class ThrowAllErrors(ErrorHandler):
    """Raise for every status outside 1xx-3xx and for non-HTTP failures."""

    def handle_error(self, code, message):
        if code <= 0:
            raise HttpApplicationError(
                code, message, "A non-HTTP error was returned from the server."
            )
        if not 100 <= code < 400:
            raise http_error(code, message)


class Throw5xxErrors(ErrorHandler):
    """Raise for server errors only."""

    def handle_error(self, code, message):
        if 500 <= code < 600:
            raise http_error(code, message)


class LogErrors(ErrorHandler):
    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self.log = log or logger

    def handle_error(self, code, message):
        self.log.warning("HTTP Error %s was returned from the server: %s", code, message)


THROW_ALL_ERRORS = ThrowAllErrors()
THROW_5XX_ERRORS = Throw5xxErrors()
