import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from multimethod import multimethod

from ._exceptions import InvalidArgument, UnsupportedContentType
from ._utils import read_stream

MULTIPART_FORM_DATA = "multipart/form-data"
LINE_ENDING = b"\r\n"
BOUNDARY_PREFIX = "-" * 27
RANDOM_CHAR_COUNT = 15


@dataclass
class Text:
    value: str


@dataclass
class File:
    """A file on disk, uploaded under its base name."""

    path: Union[str, Path]
    mime_type: str

    @property
    def filename(self) -> str:
        return Path(self.path).name


@dataclass
class Stream:
    """
    Upload content read from ``source``: a binary file-like object,
    bytes, or an iterable of bytes chunks.
    """

    source: Any
    filename: str
    mime_type: str


Part = Union[Text, File, Stream]
PART_TYPES = (Text, File, Stream, str)


class MultipartEncoder(object):
    """
    Serializes a mapping of form field names to parts into a
    multipart/form-data body.

    Each part is followed by CRLF, including the last one; no closing
    ``--boundary--`` line is written.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    def create_boundary(self) -> str:
        chars = []
        for _ in range(RANDOM_CHAR_COUNT):
            if self.rng.random() < 0.5:
                chars.append(chr(self.rng.randrange(25) + 65))
            else:
                chars.append(chr(self.rng.randrange(25) + 98))
        return BOUNDARY_PREFIX + "".join(chars)

    def content_type(self, boundary: str) -> str:
        return f"{MULTIPART_FORM_DATA}; boundary={boundary}"

    def encode(self, boundary: str, content: Mapping[str, Part]) -> bytes:
        if content is None:
            raise InvalidArgument("Multipart content is None.")

        body = bytearray()
        header = self.part_header(boundary)
        for name, value in content.items():
            if value is None:
                raise InvalidArgument(f"Content value for {name!r} is None.")
            if not isinstance(value, PART_TYPES):
                raise UnsupportedContentType(f"Unhandled type: {type(value).__name__}")
            body += header
            body += name.encode("utf-8")
            body += b'"'
            body += self.encode_part(value)
            body += LINE_ENDING
        return bytes(body)

    def part_header(self, boundary: str) -> bytes:
        return f'--{boundary}\r\nContent-Disposition: form-data; name="'.encode("utf-8")

    @multimethod
    def encode_part(self, part):
        raise NotImplementedError

    @encode_part.register
    def _encode_text(self, part: Text) -> bytes:
        return LINE_ENDING + LINE_ENDING + part.value.encode("utf-8")

    @encode_part.register
    def _encode_str(self, part: str) -> bytes:
        return self.encode_part(Text(part))

    @encode_part.register
    def _encode_file(self, part: File) -> bytes:
        with open(part.path, "rb") as f:
            data = f.read()
        return self.file_header(part.filename, part.mime_type) + data

    @encode_part.register
    def _encode_stream(self, part: Stream) -> bytes:
        data = read_stream(part.source)
        return self.file_header(part.filename, part.mime_type) + (data or b"")

    def file_header(self, filename: str, mime_type: str) -> bytes:
        header = f'; filename="{filename}"\r\nContent-Type: {mime_type};'
        return header.encode("utf-8") + LINE_ENDING + LINE_ENDING
