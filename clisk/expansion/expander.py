"""Macro expander for clisk.

Rewrites parsed code into macro-free code. Macros are ordinary values bound
in the environment (usually through `let`); applying one runs its body at
expansion time in PRESERVING mode, where `quote` builds code and `unquote`
drops back to REDUCING mode to compute pieces of it. Special forms are
dispatched through MACRO_FORMS.
"""

from __future__ import annotations

import logging

from clisk.evaluation.apply import call_intrinsic
from clisk.expansion.mode import Mode, expand_items
from clisk.expansion.special_forms import MACRO_FORMS
from clisk.types.bind import bind_arguments
from clisk.types.environment import Environment
from clisk.types.errors import MacroExpansionError
from clisk.types.intrinsic import IntrinsicFunction
from clisk.types.lambda_fn import Function, Macro
from clisk.types.node import Atom, ListNode, Map, MacroNode, ParserNode, Vector, is_boolean, is_form, is_nil, with_children
from clisk.types.pending import PendingBinding

logger = logging.getLogger(__name__)


def expand(node: ParserNode, env: Environment, evaluating: bool = False) -> MacroNode:
    """
    Expand all macros in `node`.

    `evaluating` starts the expansion in REDUCING mode, as if the node were
    wrapped in an unquote. Raises MacroExpansionError on failure.
    """
    mode = Mode.REDUCING if evaluating else Mode.PRESERVING
    try:
        return expand0(node, env, mode)
    except RecursionError:
        raise MacroExpansionError("Maximum recursion depth exceeded", node.span) from None


def expand0(node: MacroNode, env: Environment, mode: Mode) -> MacroNode:
    match node:
        case ListNode(value=[Atom(value=head), *_]) if head in MACRO_FORMS:
            return MACRO_FORMS[head](node, env, mode, expand0)
        case ListNode(value=[_, *_]):
            return expand_application(node, env, mode)
        case ListNode() | Vector() | Map():
            return with_children(node, expand_items(node.value, env, mode, expand0))
        case Atom():
            return resolve_atom(node, env, mode)
    return node


def resolve_atom(atom: Atom, env: Environment, mode: Mode) -> MacroNode:
    if is_boolean(atom) or is_nil(atom):
        return atom
    frame = env.find(atom.value)
    if frame is None:
        return atom

    value = frame.vars[atom.value]
    if isinstance(value, PendingBinding):
        # A let name used inside its own init cannot be a macro yet
        if value.forcing and mode is Mode.PRESERVING:
            return atom
        value = value.force()
    if mode is Mode.REDUCING and is_form(value, "fn"):
        # Bound functions are kept as code; reducing calls need the closure
        return expand0(value, frame, mode)
    if mode is Mode.REDUCING or isinstance(value, Macro):
        return value
    return atom


def expand_application(node: ListNode, env: Environment, mode: Mode) -> MacroNode:
    items = expand_items(node.value, env, mode, expand0)
    if not items:
        return with_children(node, items)
    head = items[0]
    if mode is Mode.REDUCING or isinstance(head, Macro):
        return apply_expanded(head, items[1:], node, env, mode)
    return with_children(node, items)


def apply_expanded(head, args: list, node: ListNode, env: Environment, mode: Mode) -> MacroNode:
    if isinstance(head, IntrinsicFunction):
        return call_intrinsic(head, args, node.span, MacroExpansionError)

    if not isinstance(head, (Function, Macro)):
        span = head.span if head.span is not None else node.span
        raise MacroExpansionError(f"Expression not callable, got {head.kind}", span)

    if len(args) != head.arity:
        raise MacroExpansionError(f"Expected {head.arity} arguments, got {len(args)}", node.span)

    call_env = head.env.extend(bind_arguments(head.arguments, args))
    if isinstance(head, Macro):
        logger.debug("expanding macro %s at %s", head.name, node.span)
        result = expand0(head.body, call_env, Mode.PRESERVING)
    else:
        result = expand0(head.body, call_env, mode)

    # A macro may expand into another macro definition
    while is_form(result, "defmacro", "macro"):
        result = expand0(result, env, mode)
    return result
