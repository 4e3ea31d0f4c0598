from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Optional, Union

from .config import RunOptions
from .engine import Engine
from .loader import expand_path, load_program
from .ports import BufferInput, BufferOutput, InputPort, OutputPort, StreamInput, StreamOutput
from .resolver import BracketResolver
from .tape import Tape


def execute(program: bytes, input_port: InputPort, output_port: OutputPort, *, options: Optional[RunOptions] = None) -> Engine:
    """Resolve ``program`` and run it to completion against the given ports.

    Bracket errors are raised before the tape is allocated or any
    instruction runs.
    """
    opts = RunOptions() if options is None else options
    jumps = BracketResolver(opts.stack_capacity).resolve(program)
    engine = Engine(program, Tape(opts.tape_size), jumps, input_port, output_port, eof=opts.eof)
    engine.run()
    return engine


def run_bytes(
    program: bytes,
    *,
    options: Optional[RunOptions] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> None:
    execute(program, StreamInput(stdin), StreamOutput(stdout), options=options)


def run_string(source: Union[str, bytes], *, input_data: bytes = b'', options: Optional[RunOptions] = None) -> bytes:
    program = source.encode('utf-8') if isinstance(source, str) else source
    out = BufferOutput()
    execute(program, BufferInput(input_data), out, options=options)
    return out.getvalue()


def run_file(
    path: str | Path,
    *,
    options: Optional[RunOptions] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> None:
    program = load_program(expand_path(str(path)))
    run_bytes(program, options=options, stdin=stdin, stdout=stdout)
