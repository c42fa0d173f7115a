from __future__ import annotations

from clisk.types.errors import ResidualMacroError
from clisk.types.lambda_fn import Macro
from clisk.types.node import COLLECTIONS, EvalNode, MacroNode, is_form, with_children

RESIDUAL_FORMS = ("defmacro", "macro", "quote", "unquote", "skip")


def verify_no_macros(node: MacroNode) -> EvalNode:
    """
    Check that expansion removed every macro construct and return the tree
    as an EvalNode.

    Raises ResidualMacroError, an internal fault, when a Macro value or a
    list headed by a macro-only form is found. Function bodies are not
    inspected.
    """
    if isinstance(node, Macro):
        raise ResidualMacroError(f"Macro {node.name} survived expansion at {node.span}")
    if is_form(node, *RESIDUAL_FORMS):
        raise ResidualMacroError(f"({node.value[0].value} ...) survived expansion at {node.span}")
    if isinstance(node, COLLECTIONS):
        return with_children(node, [verify_no_macros(item) for item in node.value])
    return node
