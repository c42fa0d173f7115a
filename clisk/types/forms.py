"""Shape validation of the special forms shared by the expander and evaluator.

Each helper takes the error class of the calling pass so that the same
checks surface as MacroExpansionError or EvaluationError.
"""

from __future__ import annotations

from typing import Type

from clisk.types.errors import ClispError
from clisk.types.node import Atom, ListNode, Vector, TRUE, is_boolean


def atom_arguments(args_node, error: Type[ClispError], what: str) -> list[str]:
    if not isinstance(args_node, Vector):
        raise error(f"{what} arguments should be in vector", args_node.span)
    for arg in args_node.value:
        if not isinstance(arg, Atom):
            raise error("Invalid argument", arg.span)
    return [arg.value for arg in args_node.value]


def fn_parts(node: ListNode, error: Type[ClispError]) -> tuple[list[str], object]:
    """(fn [args...] body) -> (argument names, body)"""
    if len(node.value) != 3:
        raise error("Non complete function definition", node.span)
    return atom_arguments(node.value[1], error, "Function"), node.value[2]


def macro_parts(node: ListNode, error: Type[ClispError]) -> tuple[str, list[str], object]:
    """
    (defmacro name [args...] body) or (macro [args...] body)
    -> (name, argument names, body)
    """
    head = node.value[0].value
    if head == "defmacro":
        if len(node.value) != 4:
            raise error("Non complete macro definition", node.span)
        name_node = node.value[1]
        if not isinstance(name_node, Atom):
            raise error(f"Expected atom, got {name_node.kind}", name_node.span)
        name, args_node, body = name_node.value, node.value[2], node.value[3]
    else:
        if len(node.value) != 3:
            raise error("Non complete macro definition", node.span)
        name, args_node, body = "anonymous", node.value[1], node.value[2]
    return name, atom_arguments(args_node, error, "Macro"), body


def let_parts(node: ListNode, error: Type[ClispError]) -> tuple[list[tuple[Atom, object]], object]:
    """(let [name init ...] body) -> ([(name atom, init)], body)"""
    if len(node.value) != 3:
        raise error("Non complete let definition", node.span)
    bindings = node.value[1]
    if not isinstance(bindings, Vector):
        raise error("Let bindings should be in vector", bindings.span)
    if len(bindings.value) % 2 != 0:
        raise error("Incomplete let binding", bindings.span)
    pairs = list(zip(bindings.value[0::2], bindings.value[1::2]))
    for key, _ in pairs:
        if not isinstance(key, Atom):
            raise error(f"Expected atom, got {key.kind}", key.span)
    return pairs, node.value[2]


def single_argument(node: ListNode, error: Type[ClispError]):
    """(quote x), (unquote x), (skip x) -> x"""
    if len(node.value) != 2:
        name = node.value[0].value
        raise error(f"{name} takes 1 argument, got {len(node.value) - 1}", node.span)
    return node.value[1]


def if_condition(condition, condition_node, node: ListNode, error: Type[ClispError]) -> bool:
    """
    Validate an already reduced if-condition and the if arity, in that order,
    and return which branch to take.
    """
    if not is_boolean(condition):
        span = condition.span if condition.span is not None else condition_node.span
        raise error(f"Expected true or false, got {condition.kind}", span)
    if len(node.value) != 4:
        raise error(f"If takes 3 arguments, got {len(node.value) - 1}", node.span)
    return condition.value == TRUE
