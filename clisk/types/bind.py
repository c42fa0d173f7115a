from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Binding:
    name: str
    value: object


def bind_arguments(formals: Sequence[str], supplied_args: Sequence) -> list[Binding]:
    """
    Pair formal parameter names with supplied values, positionally.

    Only as many bindings as there are supplied values are produced, so a
    short argument list yields the prefix used by partial application.
    Callers are responsible for rejecting surplus arguments.
    """
    return [Binding(name, value) for name, value in zip(formals, supplied_args)]
