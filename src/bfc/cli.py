from __future__ import annotations

import argparse
import logging
import os
import re
import sys
import time
from typing import BinaryIO, List, Optional

from .api import run_bytes
from .config import DEFAULT_TAPE_SIZE, RunOptions, check_tape_size
from .errors import BFCError, ConfigError
from .loader import expand_path, load_program

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = 'BFC_LOG_LEVEL'


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise ConfigError(message=f'Invalid arguments: {message}')


def _tape_size(value: str) -> int:
    if not re.fullmatch(r'[0-9]+', value):
        raise argparse.ArgumentTypeError(f'Could not understand tape size {value!r}, expected a decimal number of cells.')
    return check_tape_size(int(value))


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog='bfc',
        description='Run a brainfuck program on a circular byte tape.',
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument('-t', dest='tape_size', type=_tape_size, default=DEFAULT_TAPE_SIZE, metavar='N',
                        help=f'tape size in cells (default {DEFAULT_TAPE_SIZE})')
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse the command line into ``tape_size`` and ``path``.

    Unknown dash flags are ignored. Every other word is a program path and
    the last one wins.
    """
    args, extras = build_parser().parse_known_args(sys.argv[1:] if argv is None else argv)
    paths = [arg for arg in extras if not arg.startswith('-')]
    ignored = [arg for arg in extras if arg.startswith('-')]
    if ignored:
        logger.debug("Ignoring unknown flags: %s", ' '.join(ignored))
    if not paths:
        raise ConfigError(message='No program file given. Usage: bfc [-tN] <file>')
    args.path = expand_path(paths[-1])
    return args


def _setup_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, 'WARNING').upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format='%(levelname)s %(name)s: %(message)s')


def main(argv: Optional[List[str]] = None, *, stdin: Optional[BinaryIO] = None, stdout: Optional[BinaryIO] = None) -> int:
    _setup_logging()
    try:
        args = parse_args(argv)
        options = RunOptions(tape_size=args.tape_size)
        program = load_program(args.path)

        start = time.perf_counter()
        run_bytes(program, options=options, stdin=stdin, stdout=stdout)
        logger.debug("Run took %.2f ms", (time.perf_counter() - start) * 1000)
    except BFCError as e:
        print(e, file=sys.stderr)
        return 1
    except BrokenPipeError:
        if stdout is None:
            # The reader is gone; send whatever is still buffered to devnull.
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, sys.stdout.fileno())
        print('Output stream closed before the program finished.', file=sys.stderr)
        return 1
    return 0
