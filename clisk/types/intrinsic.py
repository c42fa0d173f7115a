from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, Optional

from clisk.types.span import Span


@dataclass
class IntrinsicFunction:
    """Host-provided function.

    `callback` takes the already evaluated argument nodes and returns a node,
    or raises IntrinsicError.
    """

    kind: ClassVar[str] = "intrinsicFunction"
    name: str
    callback: Callable[[list], object] = field(compare=False)
    span: Optional[Span] = field(default=None, compare=False)

    def __call__(self, args: list):
        return self.callback(args)

    def __str__(self):
        return f"<intrinsic {self.name}>"
