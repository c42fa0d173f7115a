from __future__ import annotations

import logging
import threading
from itertools import count

from clisk import config

logger = logging.getLogger(__name__)


class SymbolGenerator:
    """Monotonic source of fresh names, safe to share between threads."""

    __slots__ = ("_counter", "_lock")

    def __init__(self, start: int = 1):
        self._counter = count(start)
        self._lock = threading.Lock()

    def gen_sym(self, prefix: str = "G") -> str:
        with self._lock:
            n = next(self._counter)
        name = f"{prefix}{config.get_gensym_separator()}{n}"
        logger.debug("gensym %s", name)
        return name


# Process-wide generator; never reset so names stay unique for the whole run.
_generator = SymbolGenerator()


def gen_sym(prefix: str = "G") -> str:
    return _generator.gen_sym(prefix)
