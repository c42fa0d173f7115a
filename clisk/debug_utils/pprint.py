from __future__ import annotations

import json
import logging

from clisk.types.intrinsic import IntrinsicFunction
from clisk.types.lambda_fn import Function, Macro
from clisk.types.node import COLLECTIONS, Atom, ListNode, Map, Number, String, Vector, is_boolean, is_keyword, is_nil

logger = logging.getLogger(__name__)

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_ATOM = "\033[94m"
COLOR_KEYWORD = "\033[35m"
COLOR_CONSTANT = "\033[33m"
COLOR_NUMBER = "\033[36m"
COLOR_STRING = "\033[32m"
COLOR_FUNCTION = "\033[92m"
COLOR_INTRINSIC = "\033[95m"
COLOR_MACRO = "\033[91m"
COLOR_SPECIAL_FORM = "\033[90m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "max_depth": 8,
    "display_legend": False,
    "color_atoms": True,
    "color_keywords": True,
    "color_constants": True,
    "color_literals": True,
    "color_functions": True,
    "color_intrinsics": True,
    "color_macros": True,
    "color_special_forms": True,
}

SPECIAL_FORMS = {"fn", "let", "if", "defmacro", "macro", "quote", "unquote", "skip", "executable", "module"}

OPENERS = {ListNode: ("(", ")"), Vector: ("[", "]"), Map: ("{", "}")}


def plain_options(options: dict = DEFAULT_OPTIONS) -> dict:
    """Copy of `options` with every colour switched off."""
    return {k: (False if k.startswith("color_") else v) for k, v in options.items()}


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{RESET}" if enabled else text


# ----------------- Colorize utility -----------------
def colorize(node, options: dict = DEFAULT_OPTIONS) -> str:
    """Render a leaf node (or a closure) as a single, possibly coloured, token."""
    if isinstance(node, Atom):
        name = str(node)
        if is_keyword(node):
            return _paint(name, COLOR_KEYWORD, options.get("color_keywords", True))
        if is_boolean(node) or is_nil(node):
            return _paint(name, COLOR_CONSTANT, options.get("color_constants", True))
        if name in SPECIAL_FORMS:
            return _paint(name, COLOR_SPECIAL_FORM, options.get("color_special_forms", True))
        return _paint(name, COLOR_ATOM, options.get("color_atoms", True))
    if isinstance(node, Number):
        return _paint(str(node), COLOR_NUMBER, options.get("color_literals", True))
    if isinstance(node, String):
        return _paint(str(node), COLOR_STRING, options.get("color_literals", True))
    if isinstance(node, Function):
        return _paint(f"<fn [{' '.join(node.arguments)}]>", COLOR_FUNCTION, options.get("color_functions", True))
    if isinstance(node, IntrinsicFunction):
        return _paint(str(node), COLOR_INTRINSIC, options.get("color_intrinsics", True))
    if isinstance(node, Macro):
        return _paint(f"<macro {node.name}>", COLOR_MACRO, options.get("color_macros", True))
    return str(node)


def legend(options: dict = DEFAULT_OPTIONS) -> str:
    items = [
        _paint("atom", COLOR_ATOM, True),
        _paint(":keyword", COLOR_KEYWORD, True),
        _paint("true/false/nil", COLOR_CONSTANT, True),
        _paint("number", COLOR_NUMBER, True),
        _paint('"string"', COLOR_STRING, True),
        _paint("<fn>", COLOR_FUNCTION, True),
        _paint("<intrinsic>", COLOR_INTRINSIC, True),
        _paint("<macro>", COLOR_MACRO, True),
        _paint("special form", COLOR_SPECIAL_FORM, True),
    ]
    return "Color Key: " + " | ".join(items) + "\n"


# ----------------- Pretty printer -----------------
def pprint_expr(node, indent: int = 0, options: dict = DEFAULT_OPTIONS, _current_depth: int = 0) -> str:
    legend_str = legend(options) if options.get("display_legend", False) and indent == 0 else ""

    if _current_depth >= options.get("max_depth", 8):
        return legend_str + "…"

    if not isinstance(node, COLLECTIONS):
        return legend_str + colorize(node, options)

    opener, closer = OPENERS[type(node)]
    if not node.value:
        return legend_str + opener + closer

    parts = [pprint_expr(item, indent + 1, options, _current_depth + 1) for item in node.value]

    single_line = opener + " ".join(parts) + closer
    if "\n" not in single_line and len(single_line) + indent * 2 <= options.get("max_line_length", 80):
        return legend_str + single_line

    aligned_lines = [opener + parts[0]]
    for part in parts[1:]:
        aligned_lines.append("  " * (indent + 1) + part)
    aligned_lines[-1] += closer
    return legend_str + "\n".join(aligned_lines)


# ----------------- Load JSON config -----------------
def load_options_from_json(json_str: str) -> dict:
    try:
        user_opts = json.loads(json_str)
    except json.JSONDecodeError as e:
        logger.warning("ignoring invalid printer options: %s", e)
        return dict(DEFAULT_OPTIONS)
    if not isinstance(user_opts, dict):
        logger.warning("ignoring printer options that are not an object: %r", user_opts)
        return dict(DEFAULT_OPTIONS)
    return {**DEFAULT_OPTIONS, **user_opts}
