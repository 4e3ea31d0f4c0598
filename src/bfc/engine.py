from __future__ import annotations

import logging
import time

import numpy as np
from numba import njit

from .config import EOF_SENTINEL, EofPolicy
from .ports import InputPort, OutputPort
from .resolver import JumpTable
from .tape import Tape

logger = logging.getLogger(__name__)

STOP_OUTPUT = 1
STOP_INPUT = 2
STOP_END = 3
STOP_BATCH = 4

DEFAULT_BATCH_STEPS = 100000


@njit(cache=True)
def run_batch(program, memory, pc, pointer, jumps, max_steps):
    """
    Execute up to ``max_steps`` instructions without doing any I/O.

    Stops in front of '.' and ',' so the caller can serve them, and returns
    ``(pc, pointer, stop_reason, steps)``.
    """
    mem_len = len(memory)
    prog_len = len(program)
    stop_reason = STOP_BATCH
    steps = 0

    while pc < prog_len and steps < max_steps:
        command = program[pc]

        if command == 62:  # '>'
            pointer = (pointer + 1) % mem_len
        elif command == 60:  # '<'
            pointer = (pointer + mem_len - 1) % mem_len
        elif command == 43:  # '+'
            memory[pointer] = (memory[pointer] + 1) & 255
        elif command == 45:  # '-'
            memory[pointer] = (memory[pointer] - 1) & 255
        elif command == 46:  # '.'
            stop_reason = STOP_OUTPUT
            break
        elif command == 44:  # ','
            stop_reason = STOP_INPUT
            break
        elif command == 91:  # '['
            if memory[pointer] == 0:
                pc = jumps[pc]
        elif command == 93:  # ']'
            if memory[pointer] != 0:
                pc = jumps[pc]

        pc += 1
        steps += 1

    if pc >= prog_len:
        stop_reason = STOP_END

    return pc, pointer, stop_reason, steps


class Engine:
    """Fetch-decode-execute loop over a resolved program.

    ``run`` drives the compiled kernel in batches and serves I/O between
    batches; ``step`` executes a single instruction in plain Python. Both
    leave the tape, cursor and instruction pointer in the same state.
    """

    def __init__(
        self,
        program: bytes,
        tape: Tape,
        jumps: JumpTable,
        input_port: InputPort,
        output_port: OutputPort,
        *,
        eof: EofPolicy = EofPolicy.SENTINEL,
        batch_steps: int = DEFAULT_BATCH_STEPS,
    ):
        if len(jumps) != len(program):
            raise ValueError('Jump table does not belong to this program')
        self.program = bytes(program)
        self.tape = tape
        self.jumps = jumps
        self.input_port = input_port
        self.output_port = output_port
        self.eof = eof
        self.batch_steps = batch_steps

        self.ip = 0
        self.steps = 0
        self._code = np.frombuffer(self.program, dtype=np.uint8)

    @property
    def finished(self) -> bool:
        return self.ip >= len(self.program)

    def _read_input(self) -> None:
        value = self.input_port.read_byte()
        if value is not None:
            self.tape.write(value)
        elif self.eof is EofPolicy.SENTINEL:
            self.tape.write(EOF_SENTINEL)
        elif self.eof is EofPolicy.ZERO:
            self.tape.write(0)

    def _write_output(self) -> None:
        self.output_port.write_byte(self.tape.read())

    def step(self) -> bool:
        if self.finished:
            return False

        command = self.program[self.ip]
        tape = self.tape

        if command == 62:  # '>'
            tape.move_right()
        elif command == 60:  # '<'
            tape.move_left()
        elif command == 43:  # '+'
            tape.increment()
        elif command == 45:  # '-'
            tape.decrement()
        elif command == 46:  # '.'
            self._write_output()
        elif command == 44:  # ','
            self._read_input()
        elif command == 91:  # '['
            if tape.read() == 0:
                self.ip = self.jumps.partner(self.ip)
        elif command == 93:  # ']'
            if tape.read() != 0:
                self.ip = self.jumps.partner(self.ip)

        self.ip += 1
        self.steps += 1
        return True

    def run(self) -> None:
        start = time.perf_counter()
        jumps = self.jumps.as_array()

        while True:
            ip, cursor, stop_reason, steps = run_batch(
                self._code, self.tape.cells, self.ip, self.tape.cursor,
                jumps, self.batch_steps
            )
            self.ip = int(ip)
            self.tape.cursor = int(cursor)
            self.steps += int(steps)

            if stop_reason == STOP_END:
                break
            if stop_reason == STOP_OUTPUT:
                self._write_output()
            elif stop_reason == STOP_INPUT:
                self._read_input()
            else:
                continue
            self.ip += 1
            self.steps += 1

        logger.debug("Executed %d steps in %.2f ms", self.steps, (time.perf_counter() - start) * 1000)
