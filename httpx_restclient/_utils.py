import threading
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional
from urllib.parse import urlencode

import httpx

from ._exceptions import InvalidArgument, TransportError

SyncLock = threading.Lock

SCHEMES = ("http://", "https://")


class ResponseStream:
    def __init__(
        self,
        chunks: Iterable[bytes],
        callback: Optional[Callable] = None,
    ) -> None:
        """
        A readable wrapper around a response body that calls a callback once,
        after the body has been fully read or the stream has been closed.
        """
        self.chunks = iter(chunks)
        self.callback = callback or (lambda *args, **kwargs: None)

        self.buffer = bytearray()
        self.callback_called = False

    def _on_read_finish(self):
        if not self.callback_called:
            self.callback_called = True
            self.callback()

    def _next_chunk(self) -> Optional[bytes]:
        try:
            return next(self.chunks)
        except StopIteration:
            self._on_read_finish()
            return None
        except (httpx.TransportError, httpx.StreamError) as exc:
            raise TransportError(f"Unable to read response body: {exc}") from exc

    def __iter__(self) -> Iterator[bytes]:
        if self.buffer:
            pending = bytes(self.buffer)
            self.buffer.clear()
            yield pending
        while True:
            chunk = self._next_chunk()
            if chunk is None:
                return
            if chunk:
                yield chunk

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            return b"".join(self)

        while len(self.buffer) < size:
            chunk = self._next_chunk()
            if chunk is None:
                break
            self.buffer.extend(chunk)

        data = bytes(self.buffer[:size])
        del self.buffer[:size]
        return data

    def close(self) -> None:
        self._on_read_finish()

    @property
    def closed(self) -> bool:
        return self.callback_called

    def __enter__(self) -> "ResponseStream":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def read_stream(stream: Any) -> Optional[bytes]:
    """
    Read the complete contents of a body-like value into memory.

    Accepts bytes, str (encoded as UTF-8), binary file-like objects and
    iterables of bytes chunks. Returns None for None.
    """
    if stream is None:
        return None
    if isinstance(stream, (bytes, bytearray, memoryview)):
        return bytes(stream)
    if isinstance(stream, str):
        return stream.encode("utf-8")
    if hasattr(stream, "read"):
        data = stream.read()
        return data.encode("utf-8") if isinstance(data, str) else bytes(data)
    if isinstance(stream, Iterable):
        return b"".join(stream)
    raise InvalidArgument(f"Cannot read a body from {type(stream).__name__}")


def property_string(props: Mapping[str, str]) -> str:
    """
    Render a mapping as an application/x-www-form-urlencoded string,
    keeping the mapping's order.
    """
    if props is None:
        raise InvalidArgument("Form data is None.")
    return urlencode(list(props.items()))


def ensure_scheme(url: str) -> str:
    if url.lower().startswith(SCHEMES):
        return url
    return "http://" + url


def validate_arguments(*args) -> None:
    for arg in args:
        if arg is None:
            raise InvalidArgument("An input parameter is None.")
