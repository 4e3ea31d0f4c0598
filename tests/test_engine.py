#!/usr/bin/env python3
"""
Tests for the execution engine: the compiled batch loop and the
single-step path.
"""

import pytest

from bfc.config import EofPolicy
from bfc.engine import Engine
from bfc.ports import BufferInput, BufferOutput
from bfc.resolver import resolve
from bfc.tape import Tape

HELLO = b"++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."


def make_engine(program, *, input_data=b"", tape_size=30000, **kwargs):
    out = BufferOutput()
    engine = Engine(program, Tape(tape_size), resolve(program), BufferInput(input_data), out, **kwargs)
    return engine, out


def run_stepping(engine):
    while engine.step():
        pass


@pytest.fixture(params=["run", "step"])
def execute(request):
    """Run a program to completion through either execution path."""
    def _execute(program, **kwargs):
        engine, out = make_engine(program, **kwargs)
        if request.param == "run":
            engine.run()
        else:
            run_stepping(engine)
        return engine, out.getvalue()
    return _execute


def test_hello_world(execute):
    engine, output = execute(HELLO)
    assert output == b"Hello World!\n"
    assert engine.finished


def test_echo_one_byte(execute):
    _, output = execute(b",.", input_data=bytes([65]))
    assert output == bytes([65])


def test_increment_wraps(execute):
    engine, _ = execute(b"+" * 256)
    assert engine.tape.read() == 0


def test_decrement_wraps(execute):
    engine, output = execute(b"-.")
    assert output == b"\xff"


def test_move_left_from_zero_wraps(execute):
    engine, _ = execute(b"<+", tape_size=5)
    assert engine.tape.cursor == 4
    assert engine.tape.snapshot(5) == b"\x00\x00\x00\x00\x01"


def test_move_right_cycle(execute):
    engine, _ = execute(b"+" + b">" * 7 + b".", tape_size=7)
    assert engine.tape.cursor == 0


def test_other_bytes_are_ignored(execute):
    engine, output = execute(b"hello \x00\xff world+.\n")
    assert output == b"\x01"
    assert engine.tape.read() == 1


def test_skips_loop_on_zero(execute):
    _, output = execute(b"[.+]+.")
    assert output == b"\x01"


def test_nested_loops(execute):
    # 3 * 4 * 5 = 60
    program = b"+++[>++++[>+++++<-]<-]>>."
    _, output = execute(program)
    assert output == bytes([60])


def test_loop_body_repeats(execute):
    _, output = execute(b"+++[.-]")
    assert output == b"\x03\x02\x01"


def test_empty_program(execute):
    engine, output = execute(b"")
    assert output == b""
    assert engine.finished
    assert engine.steps == 0


@pytest.mark.parametrize(
    "policy, expected",
    [
        (EofPolicy.SENTINEL, 255),
        (EofPolicy.ZERO, 0),
        (EofPolicy.UNCHANGED, 7),
    ],
)
def test_eof_policy(execute, policy, expected):
    engine, _ = execute(b"+++++++,", eof=policy)
    assert engine.tape.read() == expected


def test_eof_is_consistent_across_reads(execute):
    _, output = execute(b",.,.,.", input_data=b"A")
    assert output == b"A\xff\xff"


def test_echo_until_end_of_input(execute):
    _, output = execute(b",+[-.,+]", input_data=b"abc")
    assert output == b"abc"


def test_paths_agree_on_state():
    program = b"++[>+++[>+<-]<-]>>[-<+>]<<,+.>>>>>>>>><<<<--"
    fast, fast_out = make_engine(program, input_data=b"\x10", tape_size=9)
    slow, slow_out = make_engine(program, input_data=b"\x10", tape_size=9)
    fast.run()
    run_stepping(slow)
    assert fast_out.getvalue() == slow_out.getvalue()
    assert fast.tape.snapshot(9) == slow.tape.snapshot(9)
    assert fast.tape.cursor == slow.tape.cursor
    assert fast.steps == slow.steps
    assert fast.ip == slow.ip == len(program)


def test_small_batches_give_same_result():
    engine, out = make_engine(HELLO, batch_steps=3)
    engine.run()
    assert out.getvalue() == b"Hello World!\n"


def test_step_reports_end():
    engine, _ = make_engine(b"+")
    assert engine.step() is True
    assert engine.step() is False
    assert engine.tape.read() == 1


def test_run_can_resume_after_steps():
    engine, out = make_engine(HELLO)
    for _ in range(50):
        engine.step()
    engine.run()
    assert out.getvalue() == b"Hello World!\n"


def test_rejects_foreign_jump_table():
    with pytest.raises(ValueError):
        Engine(b"[]+", Tape(10), resolve(b"[]"), BufferInput(), BufferOutput())
