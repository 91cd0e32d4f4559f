import logging
from base64 import b64encode
from typing import List, Mapping, Optional, Tuple, Union

import httpx

from ._exceptions import InvalidArgument, TransportError
from ._models import HttpMethod
from ._utils import ResponseStream, SyncLock

logger = logging.getLogger(__name__)

TimeoutTypes = Union[None, float, httpx.Timeout]

# Everything a transport may raise while sending or reading.
TRANSPORT_ERRORS = (httpx.TransportError, httpx.StreamError, OSError)


class Connection:
    """
    A single prepared request and, once sent, its response.

    The request side (method, headers, flags, body) is mutable until the
    request is sent. The request is sent by ``write_body`` or by the first
    access to the response side, whichever comes first.
    """

    def __init__(
        self,
        url: httpx.URL,
        transport: httpx.BaseTransport,
        timeout: TimeoutTypes = None,
    ) -> None:
        self.url = url
        self.transport = transport
        self.timeout = timeout

        self.method = HttpMethod.GET.value
        self.headers: List[Tuple[str, str]] = []
        self.do_input = True
        self.do_output = False
        self.body: Optional[bytes] = None

        self.response: Optional[httpx.Response] = None
        self.error_body: Optional[bytes] = None
        self.closed = False

    def add_header(self, name: str, value: str) -> None:
        self.headers.append((name, value))

    def set_header(self, name: str, value: str) -> None:
        self.headers = [h for h in self.headers if h[0].lower() != name.lower()]
        self.headers.append((name, value))

    def get_header(self, name: str) -> Optional[str]:
        for key, value in self.headers:
            if key.lower() == name.lower():
                return value
        return None

    @property
    def connected(self) -> bool:
        return self.response is not None

    def write_body(self, content: bytes) -> None:
        if not self.do_output:
            raise TransportError("Output is disabled for this connection.")
        if self.connected:
            raise TransportError("The request has already been sent.")
        self.body = content
        self.connect()

    def build_request(self) -> httpx.Request:
        return httpx.Request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.body if self.do_output else None,
            extensions={"timeout": httpx.Timeout(self.timeout).as_dict()},
        )

    def connect(self) -> httpx.Response:
        if self.response is None:
            if self.closed:
                raise TransportError("The connection is closed.")
            request = self.build_request()
            logger.debug("sending %s %s", request.method, request.url)
            try:
                self.response = self.transport.handle_request(request)
            except TRANSPORT_ERRORS as exc:
                # A failed send is never retried on this connection.
                self.closed = True
                raise TransportError(f"{self.method} {self.url} failed: {exc}") from exc
        return self.response

    @property
    def status_code(self) -> int:
        return self.connect().status_code

    @property
    def reason_phrase(self) -> str:
        return self.connect().reason_phrase

    @property
    def response_headers(self) -> httpx.Headers:
        return self.connect().headers

    @property
    def content_charset(self) -> Optional[str]:
        return self.connect().charset_encoding

    def input_stream(self) -> ResponseStream:
        """
        The decoded response body. The connection is closed once the
        stream has been drained or closed.
        """
        response = self.connect()
        return ResponseStream(response.iter_bytes(), callback=self.close)

    def read_error_body(self) -> bytes:
        if self.error_body is None:
            response = self.connect()
            try:
                self.error_body = response.read()
            except TRANSPORT_ERRORS as exc:
                raise TransportError(f"Unable to read error body: {exc}") from exc
        return self.error_body

    def error_stream(self) -> ResponseStream:
        return ResponseStream([self.read_error_body()])

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self.response is not None:
            logger.debug("closing connection to %s", self.url)
            self.response.close()

    def __repr__(self) -> str:
        return f"<Connection [{self.method} {self.url}]>"


class ConnectionProvider(object):
    def get_connection(self, url: str) -> Connection:
        """Return a new, unsent connection for the given absolute URL."""
        raise NotImplementedError


class DefaultConnectionProvider(ConnectionProvider):
    """
    Opens connections over a single pooled httpx transport.

    The transport is created on first use unless one is supplied.
    """

    def __init__(
        self,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: TimeoutTypes = None,
    ) -> None:
        self.transport = transport
        self.timeout = timeout
        self.lock = SyncLock()

    def get_transport(self) -> httpx.BaseTransport:
        with self.lock:
            if self.transport is None:
                self.transport = httpx.HTTPTransport()
            return self.transport

    def get_connection(self, url: str) -> Connection:
        try:
            parsed = httpx.URL(url)
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            raise InvalidArgument(f"Invalid URL {url!r}: {exc}") from exc

        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise InvalidArgument(f"Invalid URL {url!r}: expected an absolute http(s) URL")

        logger.debug("opening connection to %s", parsed)
        return Connection(parsed, self.get_transport(), timeout=self.timeout)

    def close(self) -> None:
        with self.lock:
            if self.transport is not None:
                self.transport.close()


class ConnectionInitializer(object):
    def initialize(self, connection: Connection) -> None:
        """
        Configure a connection before its request is sent.

        Called once per call, in registration order, after the request
        method has been set.
        """
        raise NotImplementedError


class BasicAuthConnectionInitializer(ConnectionInitializer):
    """Sends a Basic Authentication header with every request."""

    def __init__(self, username: str, password: str) -> None:
        userpass = f"{username}:{password}".encode("utf-8")
        self.field = "Basic " + b64encode(userpass).decode("ascii")

    def initialize(self, connection: Connection) -> None:
        connection.add_header("Authorization", self.field)


class HeadersConnectionInitializer(ConnectionInitializer):
    def __init__(self, headers: Mapping[str, str]) -> None:
        self.headers = dict(headers)

    def initialize(self, connection: Connection) -> None:
        for name, value in self.headers.items():
            connection.add_header(name, value)


class TimeoutConnectionInitializer(ConnectionInitializer):
    def __init__(self, timeout: TimeoutTypes) -> None:
        self.timeout = timeout

    def initialize(self, connection: Connection) -> None:
        connection.timeout = self.timeout
