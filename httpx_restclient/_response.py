import logging
from typing import Generic, Optional, TextIO, TypeVar

import httpx

from ._connection import Connection
from ._debug import DebugLine, response_line
from ._deserializers import (
    DEFAULT_CHARSET,
    STRING_DESERIALIZER,
    ResponseDeserializer,
    StringDeserializer,
)
from ._error_handlers import ErrorHandler
from ._exceptions import ResponseStateError, TransportError
from ._models import HttpMethod, ResponseState

logger = logging.getLogger(__name__)

T = TypeVar("T")


def is_error_code(code: int) -> bool:
    return 400 <= code < 600


class Response(Generic[T]):
    """
    Deferred result of a call.

    Nothing is read from the server until the status or the content is
    asked for. State moves PENDING -> CODE_RESOLVED -> CONTENT_MATERIALIZED,
    or to CANCELLED from any state before materialization. The status code
    and the content are cached once resolved; after cancellation both
    accessors raise ``ResponseStateError``.
    """

    def __init__(
        self,
        method: HttpMethod,
        url: str,
        connection: Connection,
        deserializer: Optional[ResponseDeserializer[T]] = None,
        error_handler: Optional[ErrorHandler] = None,
        debug_writer: Optional[TextIO] = None,
    ) -> None:
        self.request_method = method
        self.request_url = url
        self.connection = connection
        self.deserializer = deserializer
        self.error_handler = error_handler
        self.debug_writer = debug_writer

        self.state = ResponseState.PENDING
        self._code: Optional[int] = None
        self._content: Optional[T] = None
        self._debug_line: Optional[DebugLine] = None

    def get_code(self) -> int:
        if self._code is None:
            if self.state is ResponseState.CANCELLED:
                raise ResponseStateError("The response was cancelled before its status was read.")
            self._code = self.connection.status_code
            self.state = ResponseState.CODE_RESOLVED
            logger.debug("%s %s returned %s", self.request_method.value, self.request_url, self._code)
            self._debug_line = response_line(
                self.debug_writer, self._code, self.connection.reason_phrase
            )
        return self._code

    def is_error(self) -> bool:
        try:
            return is_error_code(self.get_code())
        except (TransportError, ResponseStateError):
            return True

    @property
    def headers(self) -> httpx.Headers:
        return self.connection.response_headers

    def get_content(self) -> Optional[T]:
        if self.state is ResponseState.CANCELLED:
            raise ResponseStateError("The response was cancelled.")
        if self.state is ResponseState.CONTENT_MATERIALIZED:
            return self._content

        keep_open = False
        try:
            code = self.get_code()
            if is_error_code(code):
                content = self._error_content(code)
            else:
                content = self._success_content(code)
                keep_open = not getattr(self._deserializer, "consumes_stream", True)
        except Exception:
            self.connection.close()
            raise

        self._content = content
        self.state = ResponseState.CONTENT_MATERIALIZED
        if not keep_open:
            self.connection.close()
        return content

    @property
    def _deserializer(self) -> ResponseDeserializer:
        return self.deserializer if self.deserializer is not None else STRING_DESERIALIZER

    def _error_content(self, code: int) -> Optional[T]:
        message = self.get_error_message()
        if self._debug_line is not None:
            self._debug_line.add(message).write()

        if self.error_handler is not None:
            self.error_handler.handle_error(code, message)

        if self.deserializer is None:
            return None
        return self.deserializer.deserialize(
            self.connection.error_stream(), code, self.connection.response_headers
        )

    def _success_content(self, code: int) -> T:
        content = self._deserializer.deserialize(
            self.connection.input_stream(), code, self.connection.response_headers
        )
        if self._debug_line is not None:
            # Only text content is worth tracing.
            if isinstance(self._deserializer, StringDeserializer):
                self._debug_line.add(content)
            self._debug_line.write()
        return content

    def get_error_message(self) -> Optional[str]:
        """
        The server's error body as text, or the reason phrase when the body
        is empty. None if either cannot be read.
        """
        try:
            message = self.connection.reason_phrase
            body = self.connection.read_error_body()
            if body:
                message = body.decode(self.connection.content_charset or DEFAULT_CHARSET)
            return message
        except (TransportError, LookupError, UnicodeDecodeError):
            return None

    def cancel(self, may_interrupt_if_running: bool = True) -> bool:
        """
        Close the connection. A read already in progress on another thread
        may fail with ``TransportError`` rather than stop cleanly.
        """
        if self.state is ResponseState.CONTENT_MATERIALIZED:
            return False

        self.connection.close()
        self.state = ResponseState.CANCELLED
        if self._debug_line is not None:
            self._debug_line.add("[CANCELLED]").write()
        return True

    def is_cancelled(self) -> bool:
        return self.state is ResponseState.CANCELLED

    def is_done(self) -> bool:
        return self.state is ResponseState.CONTENT_MATERIALIZED

    def __repr__(self) -> str:
        return f"<Response [{self.request_method.value} {self.request_url} {self.state.name}]>"
