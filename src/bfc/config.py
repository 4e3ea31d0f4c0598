from __future__ import annotations

import enum
from dataclasses import dataclass

from .errors import ConfigError

DEFAULT_TAPE_SIZE = 30000  # cells
MAX_TAPE_SIZE = 60000

MAX_PATH_LENGTH = 1024  # includes the terminator, so 1023 usable characters
MAX_STACK_SIZE = 1024

EOF_SENTINEL = 0xFF


class EofPolicy(enum.Enum):
    """What ',' stores when the input port is exhausted."""

    SENTINEL = 'sentinel'  # 255, i.e. EOF (-1) truncated to a cell
    ZERO = 'zero'
    UNCHANGED = 'unchanged'


def check_tape_size(size: int) -> int:
    if size < 1:
        raise ConfigError(message='Tape size must be at least 1 cell.')
    if size > MAX_TAPE_SIZE:
        raise ConfigError(message=f'Tape size can not be bigger than {MAX_TAPE_SIZE}.')
    return size


@dataclass(frozen=True)
class RunOptions:
    tape_size: int = DEFAULT_TAPE_SIZE
    stack_capacity: int = MAX_STACK_SIZE
    eof: EofPolicy = EofPolicy.SENTINEL

    def __post_init__(self) -> None:
        check_tape_size(self.tape_size)
        if self.stack_capacity < 1:
            raise ConfigError(message='Bracket stack capacity must be at least 1.')
        if not isinstance(self.eof, EofPolicy):
            raise ConfigError(message=f'Unknown EOF policy: {self.eof!r}')
