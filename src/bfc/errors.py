from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

CONTEXT_WIDTH = 40  # characters shown either side of the error column

_HINTS = {
    'closing': "Remove the extra ']' or add a matching '[' before it.",
    'opening': "Every '[' needs a ']' later in the program.",
    'overflow': 'Reduce the loop nesting depth of the program.',
}


def _locate(program: bytes, position: int) -> Tuple[int, int]:
    line_start = program.rfind(b'\n', 0, position) + 1
    return program.count(b'\n', 0, position) + 1, position - line_start + 1


def _clip(line: str, column: int, *, width: int = CONTEXT_WIDTH) -> Tuple[str, int]:
    # Returns the printable window of ``line`` around ``column`` and the
    # caret column within that window.
    start = max(0, column - 1 - width)
    end = column + width
    text = ''.join(ch if ' ' <= ch <= '~' else '?' for ch in line[start:end])
    caret = column - start
    if start > 0:
        text = '...' + text
        caret += 3
    if end < len(line):
        text += '...'
    return text, caret


def _build_context(lines: List[str], line_no_1: int, column: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        text, caret = _clip(lines[i - 1], column)
        out.append(f"{prefix} {i:4d} | {text}")
        if i == idx:
            out.append(f"       | {' ' * (caret - 1)}^")
    return "\n".join(out)


@dataclass
class BFCError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class ConfigError(BFCError):
    pass


@dataclass
class LoadError(BFCError):
    path: str


@dataclass
class StructuralError(BFCError):
    position: int
    line: int
    column: int
    context: str


@dataclass
class UnmatchedClosingBracket(StructuralError):
    pass


@dataclass
class UnmatchedOpeningBracket(StructuralError):
    pass


@dataclass
class BracketStackOverflow(StructuralError):
    capacity: int


def make_structural_error(cls, *, message: str, program: bytes, position: int, kind: str, **extra) -> StructuralError:
    line, column = _locate(program, position)
    lines = program.decode('latin-1').split('\n')
    ctx = _build_context(lines, line, column)
    hint = _HINTS[kind]
    return cls(
        message=f"StructuralError: {message} (line {line}, column {column})\n{ctx}\nHint: {hint}",
        position=position,
        line=line,
        column=column,
        context=ctx,
        **extra,
    )
