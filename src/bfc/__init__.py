from .api import execute, run_bytes, run_file, run_string
from .config import DEFAULT_TAPE_SIZE, MAX_STACK_SIZE, MAX_TAPE_SIZE, EofPolicy, RunOptions
from .engine import Engine
from .errors import (
    BFCError,
    BracketStackOverflow,
    ConfigError,
    LoadError,
    StructuralError,
    UnmatchedClosingBracket,
    UnmatchedOpeningBracket,
)
from .ports import BufferInput, BufferOutput, StreamInput, StreamOutput
from .resolver import BracketResolver, JumpTable, resolve
from .tape import Tape

__all__ = [
    'execute',
    'run_bytes',
    'run_file',
    'run_string',
    'DEFAULT_TAPE_SIZE',
    'MAX_STACK_SIZE',
    'MAX_TAPE_SIZE',
    'EofPolicy',
    'RunOptions',
    'Engine',
    'BFCError',
    'BracketStackOverflow',
    'ConfigError',
    'LoadError',
    'StructuralError',
    'UnmatchedClosingBracket',
    'UnmatchedOpeningBracket',
    'BufferInput',
    'BufferOutput',
    'StreamInput',
    'StreamOutput',
    'BracketResolver',
    'JumpTable',
    'resolve',
    'Tape',
]
