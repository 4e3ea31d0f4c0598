from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from .config import MAX_PATH_LENGTH
from .errors import ConfigError, LoadError

logger = logging.getLogger(__name__)


def expand_path(path: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Expand a leading ``~/`` from ``HOME`` and cap the result length.

    Only the ``~/`` form is recognised; ``~user`` is left alone. Paths are
    cut to ``MAX_PATH_LENGTH - 1`` characters.
    """
    env = os.environ if environ is None else environ
    if path.startswith('~/'):
        home = env.get('HOME')
        if home is None:
            raise ConfigError(message='HOME environment variable not set, can not expand "~/".')
        path = home + path[1:]
    return path[:MAX_PATH_LENGTH - 1]


def load_program(path: str | Path) -> bytes:
    p = Path(path)
    try:
        program = p.read_bytes()
    except FileNotFoundError:
        raise LoadError(message=f'Could not open file "{p}", perhaps it does not exist?', path=str(p)) from None
    except IsADirectoryError:
        raise LoadError(message=f'Could not open file "{p}", it is a directory.', path=str(p)) from None
    except MemoryError:
        raise LoadError(message=f'Out of memory reading program "{p}".', path=str(p)) from None
    except OSError as e:
        raise LoadError(message=f'Could not read file "{p}": {e.strerror or e}', path=str(p)) from e
    logger.debug("Loaded %d bytes from %s", len(program), p)
    return program
