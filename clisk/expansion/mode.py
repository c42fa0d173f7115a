from __future__ import annotations

from enum import Enum

from clisk.types.node import is_form


class Mode(Enum):
    """How the expander treats ordinary code.

    PRESERVING rebuilds code and only applies macros; REDUCING also resolves
    atoms and applies functions, evaluating at expansion time. `quote` switches
    to PRESERVING, `unquote` to REDUCING.
    """

    PRESERVING = "preserving"
    REDUCING = "reducing"


def expand_items(items: list, env, mode: Mode, expand_fn) -> list:
    """Expand every element, dropping (skip x) forms."""
    return [expand_fn(item, env, mode) for item in items if not is_form(item, "skip")]
