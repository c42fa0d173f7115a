"""
  Reader: recursive-descent scanner and parser

- Works directly on characters so that every node carries its source span
- Emits span-annotated nodes from clisk.types.node:

    - ( ... )  -> ListNode
    - [ ... ]  -> Vector
    - { ... }  -> Map (flat key, value, key, value)
    - numbers  -> Number (always float)
    - "..."    -> String (contents verbatim, \\" does not terminate)
    - symbols  -> Atom (true / false / nil / :keywords included)
    - 'x ~x #_x -> (quote x) (unquote x) (skip x)

- Whitespace is space, tab, newline, carriage return and comma;
  ; starts a comment running to the end of the line.
- Errors are ParseError with `last_position`, the offset to resume reading
  from; parse_all uses it to keep reading a multi-expression file.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Union

from clisk.reader.reader_macros import reader_macros
from clisk.types.errors import ParseError, ParseErrorKind
from clisk.types.node import Atom, ListNode, Map, Number, String, Vector, ParserNode
from clisk.types.span import Span

logger = logging.getLogger(__name__)

WHITESPACE = frozenset(" \t\n\r,")
DIGITS = frozenset("0123456789")

ATOM_FIRST_RE = re.compile(r"[!$%&|*+\-/:<=>?^_\w]")
ATOM_REST_RE = re.compile(r"[!$%&|*+\-/:<=>?^_\w.]*")

COLLECTIONS = {
    "(": (")", ListNode, ParseErrorKind.LIST_DOESNT_END),
    "[": ("]", Vector, ParseErrorKind.VECTOR_DOESNT_END),
    "{": ("}", Map, ParseErrorKind.MAP_DOESNT_END),
}


class Reader:
    def __init__(self, source: str):
        self.source = source
        self.length = len(source)

    def char_at(self, position: int) -> str:
        if 0 <= position < self.length:
            return self.source[position]
        return ""

    def is_whitespace(self, position: int) -> bool:
        return self.char_at(position) in WHITESPACE

    def skip_trivia(self, position: int, origin: int, strict: bool = True) -> int:
        """Skip whitespace and comments.

        A comment that reaches the end of input without a newline raises
        `No expressions found` from `origin` when strict, else ends the skip.
        """
        source = self.source
        while position < self.length:
            char = source[position]
            if char in WHITESPACE:
                position += 1
            elif char == ";":
                newline = source.find("\n", position + 1)
                if newline == -1:
                    if strict:
                        raise ParseError(
                            ParseErrorKind.NO_EXPRESSIONS, Span(origin, self.length), self.length
                        )
                    return self.length
                position = newline + 1
            else:
                break
        return position

    def parse_expr(self, position: int) -> tuple[ParserNode, int]:
        """Read one expression starting at or after `position`.

        Returns the node and the offset just past it.
        """
        start = self.skip_trivia(position, position)
        if start >= self.length:
            raise ParseError(ParseErrorKind.NO_EXPRESSIONS, Span(position, self.length), self.length)

        char = self.source[start]

        # ------------------------
        # Dispatch reader macros first
        # ------------------------
        prefix = reader_macros.match(self.source, start)
        if prefix is not None:
            return reader_macros.dispatch(prefix, self, start)

        if char == "-":
            return self._parse_minus(start)
        if char == ".":
            if self.char_at(start + 1) in DIGITS:
                return self._parse_number(start, start + 1, "0.")
            return Atom(".", Span(start, start + 1)), start + 1
        if char in COLLECTIONS:
            return self._parse_collection(start)
        if char in DIGITS:
            return self._parse_number(start, start, "")
        if char == '"':
            return self._parse_string(start)
        if char == "#":
            if self.is_whitespace(start + 1):
                raise ParseError(ParseErrorKind.SKIP_WHITESPACE, Span(start, start + 2), start + 2)
            return self._parse_atom(start)
        if ATOM_FIRST_RE.match(char):
            return self._parse_atom(start)

        logger.debug("unexpected character %r at %d", char, start)
        raise ParseError(ParseErrorKind.UNEXPECTED_CHARACTER, Span(start, start + 1), start + 1)

    def _parse_minus(self, start: int) -> tuple[ParserNode, int]:
        following = self.char_at(start + 1)
        preceding = self.char_at(start - 1)
        if following in DIGITS:
            return self._parse_number(start, start + 1, "-")
        if following == "-":
            raise ParseError(ParseErrorKind.INVALID_NUMBER, Span(start, start + 2), start + 2)
        # A lone minus is only an operator right after an opening paren
        if (following == "" or following in WHITESPACE) and preceding != "(":
            raise ParseError(ParseErrorKind.INVALID_NUMBER, Span(start, start + 1), start + 1)
        return Atom("-", Span(start, start + 1)), start + 1

    def _parse_number(self, start: int, position: int, text: str) -> tuple[Number, int]:
        seen_dot = "." in text
        while position < self.length:
            char = self.source[position]
            if char in DIGITS:
                text += char
            elif char == "." and not seen_dot:
                seen_dot = True
                text += char
            else:
                break
            position += 1
        end = position
        # If the number ends with a dot, leave the dot unread
        if text.endswith("."):
            text = text[:-1]
            end -= 1
        return Number(float(text), Span(start, end)), end

    def _parse_string(self, start: int) -> tuple[String, int]:
        position = start + 1
        while position < self.length:
            char = self.source[position]
            if char == "\\" and position + 1 < self.length:
                position += 2
                continue
            if char == '"':
                return String(self.source[start + 1:position], Span(start, position + 1)), position + 1
            position += 1
        raise ParseError(ParseErrorKind.STRING_DOESNT_END, Span(start, self.length), self.length)

    def _parse_atom(self, start: int) -> tuple[Atom, int]:
        end = ATOM_REST_RE.match(self.source, start + 1).end()
        return Atom(self.source[start:end], Span(start, end)), end

    def _parse_collection(self, start: int) -> tuple[ParserNode, int]:
        closer, node_type, unterminated = COLLECTIONS[self.source[start]]
        items: list[ParserNode] = []
        position = self.skip_trivia(start + 1, start + 1)
        while position < self.length and self.source[position] != closer:
            item, end = self.parse_expr(position)
            items.append(item)
            position = self.skip_trivia(end, end)
        if position >= self.length:
            raise ParseError(unterminated, Span(start, position + 1), position + 1)
        return node_type(items, Span(start, position + 1)), position + 1

    def parse_all(self) -> Iterator[Union[ParserNode, ParseError]]:
        """Yield every top-level expression, or the error that replaced it."""
        position = self.skip_trivia(0, 0, strict=False)
        while position < self.length:
            try:
                node, position = self.parse_expr(position)
                yield node
            except ParseError as e:
                logger.debug("parse error %s at %s, resuming at %d", e.message, e.span, e.last_position)
                yield e
                position = e.last_position
            position = self.skip_trivia(position, position, strict=False)


def parse_one(source: str, position: int = 0) -> tuple[ParserNode, int]:
    """Parse one expression; returns the node and the offset just past it."""
    return Reader(source).parse_expr(position)


def parse_to_ast(source: str) -> ParserNode:
    """Parse the first expression of `source`."""
    if source.strip() == "":
        raise ParseError(ParseErrorKind.NO_EXPRESSIONS, Span(0, len(source)), len(source))
    node, _ = parse_one(source)
    return node


def parse_all(source: str) -> list[Union[ParserNode, ParseError]]:
    """Parse every top-level expression, keeping going after errors."""
    return list(Reader(source).parse_all())


def read_all(source: str) -> list[ParserNode]:
    """Parse every top-level expression; raises the first ParseError."""
    nodes = []
    for item in Reader(source).parse_all():
        if isinstance(item, ParseError):
            raise item
        nodes.append(item)
    return nodes
