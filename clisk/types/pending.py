"""Two-phase binding for `let`.

Every name of a let form is first bound to a PendingBinding holding its raw
init expression; the placeholders share one environment that contains all of
them, so an init expression can refer to itself and to its siblings. Forcing
a placeholder reduces its expression once and remembers the result.
"""

from __future__ import annotations

from typing import Callable, Optional, Type

from clisk.types.bind import Binding
from clisk.types.environment import Environment
from clisk.types.errors import ClispError


class PendingBinding:
    __slots__ = ("name", "node", "env", "reduce", "error", "_value", "_done", "_forcing")

    def __init__(self, name: str, node, reduce: Callable, error: Type[ClispError]):
        self.name = name
        self.node = node
        self.env: Optional[Environment] = None
        self.reduce = reduce
        self.error = error
        self._value = None
        self._done = False
        self._forcing = False

    @property
    def forcing(self) -> bool:
        return self._forcing

    def force(self):
        if self._done:
            return self._value
        if self._forcing:
            raise self.error(f"Cyclic binding {self.name}", self.node.span)
        self._forcing = True
        try:
            self._value = self.reduce(self.node, self.env)
            self._done = True
        finally:
            self._forcing = False
        return self._value

    def __str__(self):
        return f"<pending {self.name}>"


def bind_recursive(
    env: Environment, pairs: list[tuple], reduce: Callable, error: Type[ClispError]
) -> list[PendingBinding]:
    """Bind every (name atom, init) pair to a placeholder that sees all of them."""
    pending = [PendingBinding(key.value, init, reduce, error) for key, init in pairs]
    recursive_env = env.extend(Binding(p.name, p) for p in pending)
    for p in pending:
        p.env = recursive_env
    return pending
