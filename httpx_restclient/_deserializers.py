import json
from email.message import Message
from typing import Any, Generic, Mapping, Optional, TypeVar

from ._utils import ResponseStream, read_stream

T = TypeVar("T")

DEFAULT_CHARSET = "utf-8"


def charset_from_headers(headers: Optional[Mapping[str, str]]) -> Optional[str]:
    if not headers:
        return None
    content_type = headers.get("content-type")
    if not content_type:
        return None
    msg = Message()
    msg["content-type"] = content_type
    return msg.get_content_charset()


class ResponseDeserializer(Generic[T]):
    # Deserializers that hand the live stream to the caller leave the
    # connection open; it is closed when the stream is drained or closed.
    consumes_stream = True

    def deserialize(
        self,
        stream: Optional[ResponseStream],
        code: int,
        headers: Optional[Mapping[str, str]],
    ) -> T:
        """
        Turn a response body into a value.

        ``stream`` is the success body, or the error body for error
        responses. ``headers`` may be None when the caller has none to give.
        """
        raise NotImplementedError


class StringDeserializer(ResponseDeserializer[Optional[str]]):
    """The whole body as text, decoded with the declared charset or UTF-8."""

    def deserialize(self, stream, code, headers):
        if stream is None:
            return None
        data = read_stream(stream)
        charset = charset_from_headers(headers) or DEFAULT_CHARSET
        try:
            return data.decode(charset, errors="replace")
        except LookupError:
            return data.decode(DEFAULT_CHARSET, errors="replace")


class HttpCodeDeserializer(ResponseDeserializer[int]):
    def deserialize(self, stream, code, headers):
        return code


class StreamDeserializer(ResponseDeserializer[Optional[ResponseStream]]):
    """Returns the body stream itself, for callers that read it manually."""

    consumes_stream = False

    def deserialize(self, stream, code, headers):
        return stream


class JsonDeserializer(ResponseDeserializer[Any]):
    def deserialize(self, stream, code, headers):
        if stream is None:
            return None
        data = read_stream(stream)
        if not data:
            return None
        charset = charset_from_headers(headers) or DEFAULT_CHARSET
        return json.loads(data.decode(charset))


STRING_DESERIALIZER = StringDeserializer()
HTTP_CODE_DESERIALIZER = HttpCodeDeserializer()
STREAM_DESERIALIZER = StreamDeserializer()
JSON_DESERIALIZER = JsonDeserializer()
