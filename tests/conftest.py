import httpx
import pytest

from httpx_restclient import DefaultConnectionProvider, RestClient


class SimpleApp(object):
    """
    Stands in for a live server behind an httpx.MockTransport and records
    every request it sees.
    """

    def __init__(self):
        self.requests = []
        self.failure = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.failure is not None:
            raise self.failure

        path = request.url.path
        if path == "/echo":
            return httpx.Response(
                200,
                content=request.content,
                headers={"Content-Type": "application/octet-stream"},
            )
        if path == "/json":
            return httpx.Response(200, json={"items": [1, 2, 3]})
        if path == "/notfound":
            return httpx.Response(404, text="no such page")
        if path == "/empty_notfound":
            return httpx.Response(404)
        if path == "/unavailable":
            return httpx.Response(503, text="service down")
        if path == "/latin":
            return httpx.Response(
                400,
                content="café".encode("latin-1"),
                headers={"Content-Type": "text/plain; charset=latin-1"},
            )
        return httpx.Response(200, text="Hello World")


@pytest.fixture()
def app():
    return SimpleApp()


@pytest.fixture()
def transport(app):
    return httpx.MockTransport(app)


@pytest.fixture()
def url():
    return "http://testserver/"


@pytest.fixture()
def client(transport):
    client = RestClient(DefaultConnectionProvider(transport=transport))
    yield client
    client.close()
