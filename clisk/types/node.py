"""Syntax tree nodes shared by the reader, the macro expander and the evaluator.

The three passes work on closely related trees:

    - ParserNode: what the reader produces; every node carries a span
    - MacroNode:  ParserNode plus closures, intrinsics and macros
    - EvalNode:   MacroNode without macros (see verify_no_macros)

All three use the same classes, so the reader -> expander mapping is the
identity. Spans are diagnostics only and never take part in equality.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Optional, Union

from clisk.types.span import Span

if TYPE_CHECKING:
    from clisk.types.intrinsic import IntrinsicFunction
    from clisk.types.lambda_fn import Function, Macro


TRUE = "true"
FALSE = "false"
NIL = "nil"


@dataclass
class Atom:
    kind: ClassVar[str] = "atom"
    value: str
    span: Optional[Span] = field(default=None, compare=False)

    def __str__(self):
        return self.value


@dataclass
class Number:
    kind: ClassVar[str] = "number"
    value: float
    span: Optional[Span] = field(default=None, compare=False)

    def __post_init__(self):
        self.value = float(self.value)

    def __str__(self):
        return format_number(self.value)


@dataclass
class String:
    kind: ClassVar[str] = "string"
    value: str
    span: Optional[Span] = field(default=None, compare=False)

    def __str__(self):
        return f'"{self.value}"'


@dataclass
class ListNode:
    kind: ClassVar[str] = "list"
    value: list
    span: Optional[Span] = field(default=None, compare=False)

    def __str__(self):
        return "(" + " ".join(str(x) for x in self.value) + ")"


@dataclass
class Vector:
    kind: ClassVar[str] = "vector"
    value: list
    span: Optional[Span] = field(default=None, compare=False)

    def __str__(self):
        return "[" + " ".join(str(x) for x in self.value) + "]"


@dataclass
class Map:
    """Flat interleaved key, value, key, value sequence."""

    kind: ClassVar[str] = "map"
    value: list
    span: Optional[Span] = field(default=None, compare=False)

    def __str__(self):
        return "{" + " ".join(str(x) for x in self.value) + "}"

    def pairs(self) -> list[tuple]:
        return list(zip(self.value[0::2], self.value[1::2]))


COLLECTIONS = (ListNode, Vector, Map)

ParserNode = Union[Atom, Number, String, ListNode, Vector, Map]
EvalNode = Union[Atom, Number, String, ListNode, Vector, Map, "Function", "IntrinsicFunction"]
MacroNode = Union[EvalNode, "Macro"]


def format_number(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def boolean(flag: bool, span: Optional[Span] = None) -> Atom:
    return Atom(TRUE if flag else FALSE, span)


def is_boolean(node) -> bool:
    return isinstance(node, Atom) and node.value in (TRUE, FALSE)


def is_nil(node) -> bool:
    return isinstance(node, Atom) and node.value == NIL


def is_keyword(node) -> bool:
    return isinstance(node, Atom) and node.value.startswith(":")


def is_form(node, *names: str) -> bool:
    """True for a non-empty list whose head is an atom named one of `names`."""
    return (
        isinstance(node, ListNode)
        and len(node.value) > 0
        and isinstance(node.value[0], Atom)
        and node.value[0].value in names
    )


def with_children(node, children: list):
    """Copy of a collection node with new children, keeping tag and span."""
    return type(node)(children, node.span)
