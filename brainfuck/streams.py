"""
Byte stream collaborators for the ',' and '.' instructions.

A source has `next()` returning the next byte, or None at end of input.
A sink has `write(byte)`. The engine maps None to 0 itself, so sources
never invent an end-of-input value.
"""

import sys
from typing import BinaryIO, Iterable, Iterator, Optional, Protocol, TextIO


class ByteSource(Protocol):
    def next(self) -> Optional[int]:
        ...


class ByteSink(Protocol):
    def write(self, byte: int) -> None:
        ...


class IterSource:
    """Source over any iterable of ints. Values are passed on unchecked."""

    def __init__(self, values: Iterable[int]):
        self._values: Iterator[int] = iter(values)

    def next(self) -> Optional[int]:
        return next(self._values, None)


class BytesSource(IterSource):
    def __init__(self, data: bytes):
        super().__init__(bytes(data))


class TextSource(BytesSource):
    """Source over a string, encoded before it is read."""

    def __init__(self, text: str, encoding: str = "utf-8"):
        super().__init__(text.encode(encoding))


class FileSource:
    """Source reading one byte at a time from a binary file object."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def next(self) -> Optional[int]:
        data = self.stream.read(1)
        return data[0] if data else None


class TextStreamSource:
    """Source reading characters from a text stream and handing out their bytes.

    Lets `,` share a text stream with line-based readers such as input(),
    which buffer ahead on the layer underneath.
    """

    def __init__(self, stream: TextIO, encoding: str = "utf-8"):
        self.stream = stream
        self.encoding = encoding
        self._pending = b""

    def next(self) -> Optional[int]:
        if not self._pending:
            self._pending = self.stream.read(1).encode(self.encoding)
            if not self._pending:
                return None
        byte, self._pending = self._pending[0], self._pending[1:]
        return byte


class BufferSink:
    """Sink that keeps everything written to it."""

    def __init__(self):
        self.buffer = bytearray()

    def write(self, byte: int) -> None:
        self.buffer.append(byte)

    def getvalue(self) -> bytes:
        return bytes(self.buffer)

    def text(self, encoding: str = "latin-1") -> str:
        return self.buffer.decode(encoding)


class FileSink:
    """Sink writing straight through to a binary file object."""

    def __init__(self, stream: BinaryIO, flush: bool = True):
        self.stream = stream
        self.flush = flush

    def write(self, byte: int) -> None:
        self.stream.write(bytes((byte,)))
        if self.flush:
            self.stream.flush()


def stdin_source() -> FileSource:
    return FileSource(sys.stdin.buffer)


def stdin_text_source() -> TextStreamSource:
    return TextStreamSource(sys.stdin, sys.stdin.encoding or "utf-8")


def stdout_sink() -> FileSink:
    return FileSink(sys.stdout.buffer)
