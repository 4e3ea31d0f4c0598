from __future__ import annotations

import sys
from typing import BinaryIO, Optional, Protocol


class InputPort(Protocol):
    def read_byte(self) -> Optional[int]:
        """Return the next input byte, or None at end of input."""


class OutputPort(Protocol):
    def write_byte(self, value: int) -> None:
        ...


class StreamInput:
    """Reads single bytes from a binary stream (stdin by default)."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream if stream is not None else sys.stdin.buffer

    def read_byte(self) -> Optional[int]:
        data = self.stream.read(1)
        return data[0] if data else None


class StreamOutput:
    """Writes single bytes to a binary stream, flushing after each one."""

    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream if stream is not None else sys.stdout.buffer

    def write_byte(self, value: int) -> None:
        self.stream.write(bytes((value,)))
        self.stream.flush()


class BufferInput:
    def __init__(self, data: bytes = b''):
        self._data = bytes(data)
        self._pos = 0

    def read_byte(self) -> Optional[int]:
        if self._pos >= len(self._data):
            return None
        value = self._data[self._pos]
        self._pos += 1
        return value


class BufferOutput:
    def __init__(self):
        self._data = bytearray()

    def write_byte(self, value: int) -> None:
        self._data.append(value)

    def getvalue(self) -> bytes:
        return bytes(self._data)
