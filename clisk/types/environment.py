"""Lexical environment shared by the macro expander and the evaluator.

An Environment is a persistent chain of frames. `extend` creates a new frame
whose `outer` is the current one; frames are never mutated once built, so
closures can share their captured environment with callers. Lookup walks from
the newest frame outwards: the most recent binding of a name wins.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Iterator, Optional

from clisk.types.bind import Binding
from clisk.types.errors import UnboundSymbolError


class Environment:
    """Persistent mapping from names to nodes with shadowing via `outer`."""

    __slots__ = ("vars", "outer")

    def __init__(self, bindings: Iterable[Binding] = (), outer: Optional[Environment] = None):
        self.vars: dict[str, object] = {}
        # Later bindings of the same name in one frame replace earlier ones
        for binding in bindings:
            self.vars[binding.name] = binding.value
        self.outer: Optional[Environment] = outer

    def extend(self, bindings: Iterable[Binding]) -> Environment:
        """Return `self ++ bindings` without touching `self`."""
        bindings = list(bindings)
        if not bindings:
            return self
        return Environment(bindings, self)

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest frame in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: str, default=None):
        env = self.find(name)
        if env is None:
            return default
        return env.vars[name]

    def lookup(self, name: str):
        """Look up the value bound to `name`.

        Raises UnboundSymbolError if not found.
        """
        env = self.find(name)
        if env is None:
            raise UnboundSymbolError(name)
        return env.vars[name]

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def frames(self) -> Iterator[Environment]:
        env: Optional[Environment] = self
        while env is not None:
            yield env
            env = env.outer

    def bindings(self, excluding: Optional[Environment] = None) -> list[Binding]:
        """Every binding in the chain, oldest first (shadowed ones included).

        Frames that also belong to the chain of `excluding` are left out.
        """
        shared = set() if excluding is None else {id(frame) for frame in excluding.frames()}
        result: list[Binding] = []
        for frame in reversed(list(self.frames())):
            if id(frame) in shared:
                continue
            result.extend(Binding(k, v) for k, v in frame.vars.items())
        return result

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            for frame in self.frames():
                frame_buf = StringIO()
                frame._write_vars(frame_buf)
                chain.append(frame_buf.getvalue())
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
