"""Closure values: user functions and macros."""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import ClassVar, Optional

from clisk.types.environment import Environment
from clisk.types.span import Span


@dataclass
class Function:
    """A first-class function with formal parameters, body, and closure env."""

    kind: ClassVar[str] = "function"
    body: object
    arguments: tuple[str, ...]
    env: Environment = field(compare=False)
    span: Optional[Span] = field(default=None, compare=False)

    def __post_init__(self):
        self.arguments = tuple(self.arguments)

    @property
    def arity(self) -> int:
        return len(self.arguments)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(fn [")
            buffer.write(" ".join(self.arguments))
            buffer.write("] ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()


@dataclass
class Macro:
    """A macro transformer; its env holds the gensym names of its parameters."""

    kind: ClassVar[str] = "macro"
    body: object
    arguments: tuple[str, ...]
    env: Environment = field(compare=False)
    name: str = "anonymous"
    span: Optional[Span] = field(default=None, compare=False)

    def __post_init__(self):
        self.arguments = tuple(self.arguments)

    @property
    def arity(self) -> int:
        return len(self.arguments)

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(f"(defmacro {self.name} [")
            buffer.write(" ".join(self.arguments))
            buffer.write("] ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()
