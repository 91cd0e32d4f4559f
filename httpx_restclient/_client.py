import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, TextIO, Tuple, Union

from ._connection import (
    Connection,
    ConnectionInitializer,
    ConnectionProvider,
    DefaultConnectionProvider,
)
from ._debug import request_line
from ._deserializers import HTTP_CODE_DESERIALIZER, STRING_DESERIALIZER, ResponseDeserializer
from ._error_handlers import ErrorHandler
from ._exceptions import InvalidArgument
from ._models import BODY_METHODS, HttpMethod
from ._multipart import MultipartEncoder, Part
from ._response import Response
from ._urls import URLBuilder, build_url
from ._utils import SyncLock, ensure_scheme, property_string, read_stream, validate_arguments

logger = logging.getLogger(__name__)

HEADER_CONTENT_TYPE = "Content-Type"
HEADER_CONTENT_LENGTH = "Content-Length"
APPLICATION_X_WWW_FORM_URLENCODED = "application/x-www-form-urlencoded"

MethodTypes = Union[HttpMethod, str]


@dataclass(frozen=True)
class ClientConfig:
    """Configuration as seen by one call."""

    connection_provider: ConnectionProvider
    connection_initializers: Tuple[ConnectionInitializer, ...]
    error_handler: Optional[ErrorHandler]
    debug_writer: Optional[TextIO]


class RestClient(object):
    """
    A blocking client for HTTP resources.

    Configuration (connection provider, initializers, error handler, debug
    writer) may be changed at any time; every call works against the
    configuration as it was when the call started.
    """

    def __init__(
        self,
        connection_provider: Optional[ConnectionProvider] = None,
        initializers: Optional[List[ConnectionInitializer]] = None,
        error_handler: Optional[ErrorHandler] = None,
        debug_writer: Optional[TextIO] = None,
        multipart_encoder: Optional[MultipartEncoder] = None,
    ) -> None:
        self.lock = SyncLock()
        self._connection_provider = connection_provider or DefaultConnectionProvider()
        self._connection_initializers: List[ConnectionInitializer] = []
        self._error_handler = error_handler
        self._debug_writer = debug_writer
        self.multipart_encoder = multipart_encoder or MultipartEncoder()

        for initializer in initializers or ():
            self.add_connection_initializer(initializer)

    # Configuration

    @property
    def connection_provider(self) -> ConnectionProvider:
        with self.lock:
            return self._connection_provider

    @connection_provider.setter
    def connection_provider(self, provider: ConnectionProvider) -> None:
        validate_arguments(provider)
        with self.lock:
            self._connection_provider = provider

    @property
    def error_handler(self) -> Optional[ErrorHandler]:
        with self.lock:
            return self._error_handler

    @error_handler.setter
    def error_handler(self, handler: Optional[ErrorHandler]) -> None:
        """
        Without an error handler HTTP error statuses are not raised; the
        response content is None or the deserialized error body.
        """
        with self.lock:
            self._error_handler = handler

    @property
    def debug_writer(self) -> Optional[TextIO]:
        with self.lock:
            return self._debug_writer

    @debug_writer.setter
    def debug_writer(self, writer: Optional[TextIO]) -> None:
        with self.lock:
            self._debug_writer = writer

    @property
    def connection_initializers(self) -> Tuple[ConnectionInitializer, ...]:
        with self.lock:
            return tuple(self._connection_initializers)

    def add_connection_initializer(self, initializer: ConnectionInitializer) -> ConnectionInitializer:
        validate_arguments(initializer)
        with self.lock:
            if initializer not in self._connection_initializers:
                self._connection_initializers.append(initializer)
        return initializer

    def remove_connection_initializer(self, initializer: ConnectionInitializer) -> bool:
        with self.lock:
            if initializer in self._connection_initializers:
                self._connection_initializers.remove(initializer)
                return True
        return False

    def snapshot(self) -> ClientConfig:
        with self.lock:
            return ClientConfig(
                connection_provider=self._connection_provider,
                connection_initializers=tuple(self._connection_initializers),
                error_handler=self._error_handler,
                debug_writer=self._debug_writer,
            )

    # Dispatch

    def call(
        self,
        method: MethodTypes,
        url: Any,
        deserializer: Optional[ResponseDeserializer] = None,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        """
        Prepare and dispatch a request, returning a deferred response.

        Connection setup, initializers, headers and (for POST and PUT) the
        body write all happen here, so transport failures in those steps
        raise from this call. The round trip of body-less methods happens on
        the first ``get_code`` or ``get_content`` of the returned response.

        ``deserializer`` of None means text for successful responses and
        None for error responses. ``headers`` are added after any headers
        set by the connection initializers; neither replaces the other.
        """
        validate_arguments(method, url)
        method = self._coerce_method(method)
        url = str(url)
        http_url = ensure_scheme(url)
        config = self.snapshot()

        debug_line = request_line(config.debug_writer, method.value, http_url)

        connection = config.connection_provider.get_connection(http_url)
        connection.method = method.value

        try:
            for initializer in config.connection_initializers:
                initializer.initialize(connection)

            if headers:
                for name, value in headers.items():
                    connection.add_header(name, value)

            if method in BODY_METHODS:
                connection.do_output = True
                content = read_stream(body)
                if debug_line is not None and content is not None:
                    debug_line.add(content.decode("utf-8", errors="replace"))
                self.write_request_body(connection, content)
            elif method is HttpMethod.DELETE:
                connection.do_input = True
            else:
                connection.do_input = True
                connection.do_output = False
        except Exception:
            connection.close()
            raise

        if debug_line is not None:
            debug_line.write()

        return Response(
            method,
            url,
            connection,
            deserializer=deserializer,
            error_handler=config.error_handler,
            debug_writer=config.debug_writer,
        )

    @staticmethod
    def _coerce_method(method: MethodTypes) -> HttpMethod:
        if isinstance(method, HttpMethod):
            return method
        try:
            return HttpMethod(str(method).upper())
        except ValueError:
            raise InvalidArgument(f"Unsupported HTTP method: {method!r}") from None

    @staticmethod
    def write_request_body(connection: Connection, content: Optional[bytes]) -> None:
        """
        Set Content-Length and send the body. A None body sends nothing
        here and declares a zero length.
        """
        if content is not None:
            connection.set_header(HEADER_CONTENT_LENGTH, str(len(content)))
            logger.debug("writing %d byte body to %s", len(content), connection.url)
            connection.write_body(content)
        else:
            connection.set_header(HEADER_CONTENT_LENGTH, "0")

    # Convenience verbs

    def get(
        self,
        url: Any,
        deserializer: Optional[ResponseDeserializer] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        return self.call(HttpMethod.GET, url, deserializer, None, headers)

    def get_content(self, url: Any, deserializer: ResponseDeserializer = STRING_DESERIALIZER) -> Any:
        """GET and block until the content is deserialized."""
        return self.call(HttpMethod.GET, url, deserializer, None, None).get_content()

    def post(
        self,
        url: Any,
        body: Any,
        deserializer: ResponseDeserializer = HTTP_CODE_DESERIALIZER,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        return self.call(HttpMethod.POST, url, deserializer, body, headers)

    def post_form(
        self,
        url: Any,
        form_data: Mapping[str, str],
        deserializer: ResponseDeserializer = HTTP_CODE_DESERIALIZER,
    ) -> Response:
        return self.call(
            HttpMethod.POST,
            url,
            deserializer,
            property_string(form_data).encode("utf-8"),
            {HEADER_CONTENT_TYPE: APPLICATION_X_WWW_FORM_URLENCODED},
        )

    def post_multipart(
        self,
        url: Any,
        content: Mapping[str, Part],
        deserializer: ResponseDeserializer = HTTP_CODE_DESERIALIZER,
    ) -> Response:
        """
        POST ``content`` as multipart/form-data. Values are ``Text``,
        ``File`` or ``Stream`` parts; plain strings are sent as text.
        """
        encoder = self.multipart_encoder
        boundary = encoder.create_boundary()
        return self.call(
            HttpMethod.POST,
            url,
            deserializer,
            encoder.encode(boundary, content),
            {HEADER_CONTENT_TYPE: encoder.content_type(boundary)},
        )

    def put(
        self,
        url: Any,
        body: Any,
        deserializer: ResponseDeserializer = HTTP_CODE_DESERIALIZER,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        return self.call(HttpMethod.PUT, url, deserializer, body, headers)

    def put_form(
        self,
        url: Any,
        form_data: Mapping[str, str],
        deserializer: ResponseDeserializer = HTTP_CODE_DESERIALIZER,
    ) -> Response:
        return self.call(
            HttpMethod.PUT,
            url,
            deserializer,
            property_string(form_data).encode("utf-8"),
            {HEADER_CONTENT_TYPE: APPLICATION_X_WWW_FORM_URLENCODED},
        )

    def delete(self, url: Any, deserializer: ResponseDeserializer = HTTP_CODE_DESERIALIZER) -> Response:
        return self.call(HttpMethod.DELETE, url, deserializer, None, None)

    def head(self, url: Any) -> Response:
        return self.call(HttpMethod.HEAD, url, HTTP_CODE_DESERIALIZER, None, None)

    def build_url(self, *segments: str) -> URLBuilder:
        return build_url(*segments)

    def close(self) -> None:
        provider = self.connection_provider
        close = getattr(provider, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "RestClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
