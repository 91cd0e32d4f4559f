import io

import pytest
from freezegun import freeze_time

from httpx_restclient import STRING_DESERIALIZER


@pytest.fixture()
def writer(client):
    writer = io.StringIO()
    client.debug_writer = writer
    return writer


@freeze_time("2012-01-14 09:05:03.042")
class TestDebugLines(object):
    def test_get(self, client, url, writer):
        client.get(url).get_content()
        assert writer.getvalue().splitlines() == [
            "9:05:03.042 GET http://testserver/",
            "9:05:03.042 <-- 200 OK Hello World",
        ]

    def test_post_includes_body(self, client, url, writer):
        client.post(url + "echo", b"payload").get_content()
        assert writer.getvalue().splitlines() == [
            "9:05:03.042 POS http://testserver/echo payload",
            "9:05:03.042 <-- 200 OK",
        ]

    def test_post_without_body(self, client, url, writer):
        client.post(url + "echo", None).get_content()
        assert writer.getvalue().splitlines() == [
            "9:05:03.042 POS http://testserver/echo",
            "9:05:03.042 <-- 200 OK",
        ]

    def test_explicit_text_deserializer_includes_body(self, client, url, writer):
        client.get(url, STRING_DESERIALIZER).get_content()
        assert writer.getvalue().splitlines()[-1] == "9:05:03.042 <-- 200 OK Hello World"

    def test_error_includes_message(self, client, url, writer):
        client.get(url + "notfound", STRING_DESERIALIZER).get_content()
        assert writer.getvalue().splitlines()[-1] == "9:05:03.042 <-- 404 Not Found no such page"

    def test_cancel(self, client, url, writer):
        response = client.get(url)
        response.get_code()
        response.cancel()
        assert writer.getvalue().splitlines()[-1] == "9:05:03.042 <-- 200 OK [CANCELLED]"

    def test_cancel_before_code_writes_no_response_line(self, client, url, writer):
        client.get(url).cancel()
        assert writer.getvalue().splitlines() == ["9:05:03.042 GET http://testserver/"]


def test_no_writer_no_output(client, url):
    assert client.debug_writer is None
    assert client.get(url).get_content() == "Hello World"


def test_writer_is_fixed_at_call_time(client, url):
    writer = io.StringIO()
    client.debug_writer = writer
    response = client.get(url)
    client.debug_writer = None

    response.get_content()
    assert len(writer.getvalue().splitlines()) == 2
