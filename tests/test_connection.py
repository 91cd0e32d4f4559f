import httpx
import pytest

from httpx_restclient import (
    DefaultConnectionProvider,
    InvalidArgument,
    TimeoutConnectionInitializer,
    TransportError,
)


@pytest.fixture()
def provider(transport):
    return DefaultConnectionProvider(transport=transport)


class TestProvider(object):
    @pytest.mark.parametrize("url", ["ftp://testserver/", "testserver/", "http://"])
    def test_rejects_bad_urls(self, provider, url):
        with pytest.raises(InvalidArgument):
            provider.get_connection(url)

    def test_creates_transport_lazily(self):
        provider = DefaultConnectionProvider()
        assert provider.transport is None

        transport = provider.get_transport()
        assert isinstance(transport, httpx.HTTPTransport)
        assert provider.get_transport() is transport
        provider.close()

    def test_timeout_is_passed_to_connections(self, transport):
        provider = DefaultConnectionProvider(transport=transport, timeout=3.0)
        assert provider.get_connection("http://testserver/").timeout == 3.0


class TestConnection(object):
    def test_headers(self, provider):
        connection = provider.get_connection("http://testserver/")
        connection.add_header("X-A", "1")
        connection.add_header("x-a", "2")
        assert connection.get_header("X-A") == "1"

        connection.set_header("X-A", "3")
        assert connection.headers == [("X-A", "3")]

    def test_nothing_sent_until_asked(self, provider, app):
        connection = provider.get_connection("http://testserver/")
        assert not connection.connected
        assert app.requests == []

        assert connection.status_code == 200
        assert connection.connected
        assert len(app.requests) == 1

    def test_write_requires_output(self, provider):
        connection = provider.get_connection("http://testserver/echo")
        with pytest.raises(TransportError):
            connection.write_body(b"x")

    def test_write_sends_once(self, provider, app):
        connection = provider.get_connection("http://testserver/echo")
        connection.method = "POST"
        connection.do_output = True
        connection.write_body(b"x")

        with pytest.raises(TransportError):
            connection.write_body(b"y")
        assert len(app.requests) == 1

    def test_closed_connection_cannot_send(self, provider):
        connection = provider.get_connection("http://testserver/")
        connection.close()
        connection.close()
        with pytest.raises(TransportError):
            connection.status_code

    def test_error_stream_can_be_read_twice(self, provider):
        connection = provider.get_connection("http://testserver/notfound")
        assert connection.read_error_body() == b"no such page"
        assert connection.error_stream().read() == b"no such page"

    def test_timeout_initializer(self, provider, app):
        connection = provider.get_connection("http://testserver/")
        TimeoutConnectionInitializer(5.0).initialize(connection)
        connection.status_code

        assert app.requests[0].extensions["timeout"] == httpx.Timeout(5.0).as_dict()
