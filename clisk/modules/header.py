"""Module headers.

A clisk file starts either with an executable header or a module header:

    (executable ["./lib" unqualified] ["./other" as other])
    (module [exported names...] imports...)
    [name expression]
    ...

Files without a header are executables with no imports. Import forms:

    ["url" unqualified]          every public name of the module
    ["url" unqualified [a b]]    only the listed names
    ["url" as name]              names qualified by `name`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from clisk.types.errors import ModuleError
from clisk.types.node import Atom, ListNode, ParserNode, String, Vector
from clisk.types.span import Span

logger = logging.getLogger(__name__)


class ImportKind(str, Enum):
    UNQUALIFIED = "unqualified"
    QUALIFIED = "qualified"
    UNQUALIFIED_ALLOWLIST = "unqualifiedAllowlist"


@dataclass
class ImportedName:
    name: str
    span: Optional[Span] = None


@dataclass
class Import:
    url: str
    kind: ImportKind
    span: Optional[Span] = None
    name: Optional[str] = None
    bindings: list[ImportedName] = field(default_factory=list)


@dataclass
class Definition:
    name: str
    expression: ParserNode
    name_span: Optional[Span]
    expression_span: Optional[Span]
    is_public: bool


@dataclass
class Module:
    url: str
    imports: list[Import]
    is_executable: bool
    expressions: list[ParserNode] = field(default_factory=list)
    definitions: list[Definition] = field(default_factory=list)


def _header_kind(node) -> Optional[str]:
    if isinstance(node, ListNode) and node.value and isinstance(node.value[0], Atom):
        if node.value[0].value in ("executable", "module"):
            return node.value[0].value
    return None


def parse_module(url: str, expressions: list[ParserNode]) -> Module:
    """Split parsed top-level forms into header, imports and body."""
    header = expressions[0] if expressions else None
    kind = _header_kind(header)
    if kind is None:
        return Module(url, [], True, expressions=list(expressions))

    logger.debug("%s: %s header", url, kind)
    if kind == "executable":
        return Module(url, parse_imports(header.value[1:]), True, expressions=list(expressions[1:]))

    if len(header.value) < 2:
        raise ModuleError("Module doesn't have exports", header.span)
    exports = header.value[1]
    if not isinstance(exports, Vector):
        raise ModuleError("Expected module exports vector", exports.span)
    for export in exports.value:
        if not isinstance(export, Atom):
            raise ModuleError(f"Expected atom, got {export.kind}", export.span)
    exported = {export.value for export in exports.value}

    imports = parse_imports(header.value[2:])
    definitions = [parse_definition(node, exported) for node in expressions[1:]]

    defined = {d.name for d in definitions}
    for export in exports.value:
        if export.value not in defined:
            raise ModuleError(f"Can't find definition of {export.value}", export.span)

    return Module(url, imports, False, definitions=definitions)


def parse_definition(node: ParserNode, exported: set[str]) -> Definition:
    if not isinstance(node, Vector) or len(node.value) != 2 or not isinstance(node.value[0], Atom):
        raise ModuleError("Invalid binding", node.span)
    name, expression = node.value
    return Definition(name.value, expression, name.span, expression.span, name.value in exported)


def parse_imports(imports: list[ParserNode]) -> list[Import]:
    for node in imports:
        if not isinstance(node, Vector):
            raise ModuleError(f"Expected vector found {node.kind}", node.span)
    return [parse_import(node) for node in imports]


def parse_import(node: Vector) -> Import:
    items = node.value
    if len(items) < 1:
        raise ModuleError("Expected import declaration", node.span)
    if len(items) < 2:
        raise ModuleError("Import declaration doesn't have kind descriptor", node.span)

    url, discriminator = items[0], items[1]
    if not isinstance(url, String):
        raise ModuleError(f"Expected module url string got {url.kind}", url.span)
    if not isinstance(discriminator, Atom):
        raise ModuleError(f"Expected atom got {discriminator.kind}", discriminator.span)

    if discriminator.value == "as":
        if len(items) < 3:
            raise ModuleError("Expected module name in import definition", node.span)
        name = items[2]
        if not isinstance(name, Atom):
            raise ModuleError(f"Expected atom got {name.kind}", name.span)
        return Import(url.value, ImportKind.QUALIFIED, node.span, name=name.value)

    if discriminator.value != "unqualified":
        raise ModuleError(f"Expected as or unqualified got {discriminator.value}", discriminator.span)

    if len(items) < 3:
        return Import(url.value, ImportKind.UNQUALIFIED, node.span)
    allowlist = items[2]
    if not isinstance(allowlist, Vector):
        raise ModuleError(f"Expected vector got {allowlist.kind}", allowlist.span)
    for item in allowlist.value:
        if not isinstance(item, Atom):
            raise ModuleError(f"Expected atom got {item.kind}", item.span)
    bindings = [ImportedName(item.value, item.span) for item in allowlist.value]
    return Import(url.value, ImportKind.UNQUALIFIED_ALLOWLIST, node.span, bindings=bindings)
