from __future__ import annotations

import logging
import time
from typing import Iterator, List, Tuple

import numpy as np

from .config import MAX_STACK_SIZE
from .errors import (
    BracketStackOverflow,
    UnmatchedClosingBracket,
    UnmatchedOpeningBracket,
    make_structural_error,
)

logger = logging.getLogger(__name__)

OPEN = ord('[')
CLOSE = ord(']')


class JumpTable:
    """Partner index of every bracket in a program.

    Backed by an ``int32`` array as long as the program; positions that are
    not brackets map to themselves.
    """

    def __init__(self, partners: np.ndarray):
        self._partners = partners
        self._partners.setflags(write=False)

    def __len__(self) -> int:
        return len(self._partners)

    def partner(self, index: int) -> int:
        return int(self._partners[index])

    def pairs(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(open, close)`` pairs ordered by the opening position."""
        for i in np.flatnonzero(self._partners > np.arange(len(self._partners))):
            yield int(i), int(self._partners[i])

    def as_array(self) -> np.ndarray:
        return self._partners


class BracketStack:
    """Fixed-capacity stack of pending '[' positions."""

    def __init__(self, capacity: int = MAX_STACK_SIZE):
        self.capacity = capacity
        self._items: List[int] = []

    def __len__(self) -> int:
        return len(self._items)

    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def push(self, position: int) -> None:
        self._items.append(position)

    def pop(self) -> int:
        return self._items.pop()

    def peek(self) -> int:
        return self._items[-1]


class BracketResolver:
    def __init__(self, capacity: int = MAX_STACK_SIZE):
        self.capacity = capacity

    def resolve(self, program: bytes) -> JumpTable:
        """Match every '[' with its ']' in a single left-to-right pass.

        Raises a StructuralError subclass on the first problem found; an
        extra ']' is reported where it occurs, an unclosed '[' only once the
        whole program has been scanned.
        """
        start = time.perf_counter()
        partners = np.arange(len(program), dtype=np.int32)
        stack = BracketStack(self.capacity)

        for pos, byte in enumerate(program):
            if byte == OPEN:
                if stack.is_full():
                    raise make_structural_error(
                        BracketStackOverflow,
                        message=f"Bracket stack depth exceeded ({self.capacity})",
                        program=program,
                        position=pos,
                        kind='overflow',
                        capacity=self.capacity,
                    )
                stack.push(pos)
            elif byte == CLOSE:
                if not stack:
                    raise make_structural_error(
                        UnmatchedClosingBracket,
                        message="Unmatched ']' in program",
                        program=program,
                        position=pos,
                        kind='closing',
                    )
                open_pos = stack.pop()
                partners[open_pos] = pos
                partners[pos] = open_pos

        if stack:
            raise make_structural_error(
                UnmatchedOpeningBracket,
                message="Unmatched '[' in program",
                program=program,
                position=stack.peek(),
                kind='opening',
            )

        logger.debug("Resolved brackets of %d bytes in %.2f ms", len(program), (time.perf_counter() - start) * 1000)
        return JumpTable(partners)


def resolve(program: bytes, capacity: int = MAX_STACK_SIZE) -> JumpTable:
    return BracketResolver(capacity).resolve(program)
