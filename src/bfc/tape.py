from __future__ import annotations

import numpy as np

from .config import DEFAULT_TAPE_SIZE, check_tape_size


class Tape:
    """Circular array of unsigned 8-bit cells with a single cursor.

    Cursor motion wraps at both ends and cell arithmetic wraps modulo 256;
    nothing here ever clamps or faults.
    """

    def __init__(self, size: int = DEFAULT_TAPE_SIZE):
        self.size = check_tape_size(size)
        self.cells = np.zeros(self.size, dtype=np.uint8)
        self.cursor = 0

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Tape(size={self.size}, cursor={self.cursor}, cell={self.read()})"

    def read(self) -> int:
        return int(self.cells[self.cursor])

    def write(self, value: int) -> None:
        self.cells[self.cursor] = value & 0xFF

    def increment(self) -> None:
        self.write((self.read() + 1) % 256)

    def decrement(self) -> None:
        self.write((self.read() - 1) % 256)

    def move_right(self) -> None:
        self.cursor = (self.cursor + 1) % self.size

    def move_left(self) -> None:
        self.cursor = (self.cursor + self.size - 1) % self.size

    def snapshot(self, count: int = 100) -> bytes:
        """Return the first ``count`` cells, for diagnostics."""
        return self.cells[:count].tobytes()
