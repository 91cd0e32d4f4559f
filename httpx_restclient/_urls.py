from typing import List, Tuple
from urllib.parse import urlencode

from ._utils import validate_arguments


class URLBuilder(object):
    """
    Composes URLs from string segments.

    Leading, trailing and repeated slashes are cleaned up and scheme tokens
    (``http:``, ``https:``, any case) may appear inside any segment::

        >>> str(URLBuilder().append("htTPS://example.com/store/").append("/items"))
        'https://example.com/store/items'
    """

    def __init__(self, segments: List[str] = None, https: bool = False) -> None:
        self.segments: List[str] = list(segments) if segments else []
        self.https = https
        self.parameters: List[Tuple[str, str]] = []
        self.scheme_emitted = True
        self.domain_emitted = True

    def append(self, *segments: str) -> "URLBuilder":
        validate_arguments(*segments)
        for segment in segments:
            self._append_single(segment)
        return self

    def _append_single(self, segment: str) -> None:
        segment = segment.strip()
        if not segment:
            return

        if segment.find("/", 1) > -1:
            for piece in segment.split("/"):
                self._append_single(piece)
            return

        token = segment.upper()
        if token.startswith("HTTP:"):
            return
        if token.startswith("HTTPS:"):
            self.https = True
            return

        segment = segment.replace("/", "")
        if segment:
            self.segments.append(segment)

    def set_https(self, value: bool) -> "URLBuilder":
        self.https = value
        return self

    def emit_scheme(self, value: bool) -> "URLBuilder":
        """Render ``http://`` / ``https://`` in front of the URL."""
        self.scheme_emitted = value
        return self

    def emit_domain(self, value: bool) -> "URLBuilder":
        """
        Render the first segment (the host). When disabled the host is
        replaced by a bare ``/`` and the rest of the path is kept.
        """
        self.domain_emitted = value
        return self

    def add_parameter(self, key: str, value: str) -> "URLBuilder":
        validate_arguments(key, value)
        self.parameters.append((key, value))
        return self

    def copy(self, *segments: str) -> "URLBuilder":
        """
        A new builder with the same path and scheme, with ``segments``
        appended. Query parameters and emit flags are not carried over.
        """
        validate_arguments(*segments)
        return URLBuilder(self.segments, self.https).append(*segments)

    def __str__(self) -> str:
        parts = []
        if self.scheme_emitted:
            parts.append("https://" if self.https else "http://")

        last = len(self.segments) - 1
        for index, segment in enumerate(self.segments):
            if index == 0 and not self.domain_emitted:
                parts.append("/")
                continue
            parts.append(segment)
            if index < last:
                parts.append("/")

        if self.parameters:
            parts.append("?")
            parts.append(urlencode(self.parameters))

        return "".join(parts)

    def __repr__(self) -> str:
        return f"<URLBuilder [{self}]>"


def build_url(*segments: str) -> URLBuilder:
    return URLBuilder().append(*segments)
