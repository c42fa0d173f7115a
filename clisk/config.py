from __future__ import annotations

import os
from typing import Optional


_DEFAULT_RECURSION_LIMIT = 10000
_DEFAULT_GENSYM_SEPARATOR = "__"


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def get_recursion_limit() -> int:
    return int_from_env('CLISK_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)


def get_gensym_separator() -> str:
    return os.environ.get('CLISK_GENSYM_SEPARATOR', _DEFAULT_GENSYM_SEPARATOR)


def use_color(stream_is_tty: bool, override: Optional[bool] = None) -> bool:
    """Colour output unless disabled by flag, NO_COLOR or CLISK_COLOR=0."""
    if override is not None:
        return override
    if 'NO_COLOR' in os.environ:
        return False
    raw = os.environ.get('CLISK_COLOR')
    if raw is not None:
        return raw.strip().lower() not in ('0', 'false', 'no', 'off', '')
    return stream_is_tty
