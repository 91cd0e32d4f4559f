from datetime import datetime
from typing import List, Optional, TextIO


def timestamp() -> str:
    now = datetime.now()
    return f"{now.hour}:{now:%M:%S}.{now.microsecond // 1000:03d}"


class DebugLine(object):
    """
    One line of the wire trace, built up in pieces and written at once.
    """

    def __init__(self, writer: TextIO, *elements: object) -> None:
        self.writer = writer
        self.elements: List[str] = [timestamp()]
        self.elements.extend(str(e) for e in elements)
        self.written = False

    def add(self, element: Optional[object]) -> "DebugLine":
        self.elements.append(str(element))
        return self

    def write(self) -> None:
        if self.written:
            return
        self.written = True
        self.writer.write(" ".join(self.elements) + "\n")
        flush = getattr(self.writer, "flush", None)
        if flush is not None:
            flush()


def request_line(writer: Optional[TextIO], method: str, url: str) -> Optional[DebugLine]:
    if writer is None:
        return None
    return DebugLine(writer, method[:3], url)


def response_line(writer: Optional[TextIO], code: int, message: str) -> Optional[DebugLine]:
    if writer is None:
        return None
    return DebugLine(writer, "<--", code, message)
