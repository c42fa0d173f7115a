from __future__ import annotations

from enum import Enum
from typing import Optional

from clisk.types.span import Span


class ClispError(Exception):
    """ Base class for all user-facing clisk errors"""

    def __init__(self, message: str, span: Optional[Span] = None):
        super().__init__(message)
        self.message = message
        self.span = span

    def __repr__(self):
        return f"{type(self).__name__}({self.message!r}, span={self.span!r})"


class ParseErrorKind(str, Enum):
    NO_EXPRESSIONS = "No expressions found"
    STRING_DOESNT_END = "String literal doesn't end"
    LIST_DOESNT_END = "List doesn't end"
    VECTOR_DOESNT_END = "Vector doesn't end"
    MAP_DOESNT_END = "Map doesn't end"
    QUOTE_WHITESPACE = "Quote can't be followed by whitespace"
    UNQUOTE_WHITESPACE = "Unquote can't be followed by whitespace"
    SKIP_WHITESPACE = "Skip can't be followed by whitespace"
    INVALID_NUMBER = "Invalid number format"
    UNEXPECTED_CHARACTER = "Unexpected character"


class ParseError(ClispError):
    """ Raised by the reader; `last_position` is where scanning resumes"""

    def __init__(self, kind: ParseErrorKind, span: Span, last_position: int):
        super().__init__(kind.value, span)
        self.kind = kind
        self.last_position = last_position


class MacroExpansionError(ClispError):
    """ Raised when macro expansion fails"""


class EvaluationError(ClispError):
    """ Raised when evaluation fails"""


class StackDepthError(EvaluationError):
    """ Raised when a program recurses deeper than the host stack allows"""

    def __init__(self, span: Optional[Span] = None):
        super().__init__("Maximum recursion depth exceeded", span)


class IntrinsicError(ClispError):
    """ Raised by intrinsic functions; re-raised by the caller's pass"""


class ModuleError(ClispError):
    """ Raised when a module header is malformed"""


class UnboundSymbolError(KeyError):
    """ Raised when looking up a name that is not bound"""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


# Internal fault: indicates a bug in clisk rather than bad input.

class ResidualMacroError(AssertionError):
    """ Raised when macro syntax survives expansion"""
