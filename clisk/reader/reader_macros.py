from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from clisk.types.errors import ParseError, ParseErrorKind
from clisk.types.node import Atom, ListNode
from clisk.types.span import Span

if TYPE_CHECKING:
    from clisk.reader.parser import Reader


class ReaderMacros:
    """
    Registry of prefix reader macros.
    Each prefix (like ' or ~) wraps the next parsed expression as
    (name expression). A prefix directly followed by whitespace is an error.
    """

    def __init__(self):
        self.macros: dict[str, tuple[str, ParseErrorKind]] = {}

    def define(self, prefix: str, name: str, whitespace_error: ParseErrorKind) -> None:
        """Register a reader macro for a given character or sequence."""
        self.macros[prefix] = (name, whitespace_error)

    def match(self, source: str, position: int) -> Optional[str]:
        """Longest registered prefix starting at `position`, if any."""
        for prefix in sorted(self.macros, key=len, reverse=True):
            if source.startswith(prefix, position):
                return prefix
        return None

    def dispatch(self, prefix: str, reader: Reader, position: int) -> tuple[ListNode, int]:
        name, whitespace_error = self.macros[prefix]
        after = position + len(prefix)
        if reader.is_whitespace(after):
            raise ParseError(whitespace_error, Span(position, after + 1), after + 1)
        expression, end = reader.parse_expr(after)
        wrapped = ListNode(
            [Atom(name, Span(position, after)), expression],
            Span(position, expression.span.end),
        )
        return wrapped, end


# -------------------------
# Single global instance
# -------------------------
reader_macros: ReaderMacros = ReaderMacros()

QUOTE_FORMS: dict[str, tuple[str, ParseErrorKind]] = {
    "'": ("quote", ParseErrorKind.QUOTE_WHITESPACE),
    "~": ("unquote", ParseErrorKind.UNQUOTE_WHITESPACE),
    "#_": ("skip", ParseErrorKind.SKIP_WHITESPACE),
}

for key, (name, whitespace_error) in QUOTE_FORMS.items():
    reader_macros.define(key, name, whitespace_error)
