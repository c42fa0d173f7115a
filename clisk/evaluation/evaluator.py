"""Core evaluator for clisk.

A direct tree walker over macro-free nodes. Special forms are looked up in
SPECIAL_FORMS before ordinary application; vectors and maps evaluate their
elements; atoms resolve through the environment.
"""

from __future__ import annotations

from clisk.evaluation.apply import apply_list
from clisk.evaluation.special_forms import SPECIAL_FORMS
from clisk.types.environment import Environment
from clisk.types.errors import EvaluationError, StackDepthError
from clisk.types.node import Atom, EvalNode, ListNode, Map, Vector, is_boolean, is_form, is_keyword, is_nil, with_children
from clisk.types.pending import PendingBinding


def evaluate(node: EvalNode, env: Environment) -> EvalNode:
    """
    Evaluate `node` in `env`.

    Raises EvaluationError on failure; running out of host stack surfaces as
    StackDepthError instead of crashing the process.
    """
    try:
        return evaluate0(node, env)
    except RecursionError:
        raise StackDepthError(node.span) from None


def evaluate0(node: EvalNode, env: Environment) -> EvalNode:
    match node:
        case ListNode(value=[Atom(value=head), *_]) if head in SPECIAL_FORMS:
            return SPECIAL_FORMS[head](node, env, evaluate0)
        case ListNode(value=[_, *_]):
            return apply_list(node, env, evaluate0)
        case Vector() | Map():
            return with_children(node, [evaluate0(item, env) for item in node.value])
        case Atom():
            return resolve_atom(node, env)

    # Numbers, strings, closures, intrinsics and the empty list
    return node


def resolve_atom(atom: Atom, env: Environment) -> EvalNode:
    if is_boolean(atom) or is_nil(atom):
        return atom

    frame = env.find(atom.value)
    if frame is None:
        if is_keyword(atom):
            return atom
        raise EvaluationError(f"Unknown atom {atom.value}", atom.span)

    value = frame.vars[atom.value]
    if isinstance(value, PendingBinding):
        value = value.force()
    if is_form(value, "fn"):
        return evaluate0(value, env)
    return value
