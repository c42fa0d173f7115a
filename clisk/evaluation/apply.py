"""Application engine for clisk.

Centralizes what happens once the elements of a list have been evaluated:
- keyword map lookup, `(:key {:key value})`
- calls into intrinsic functions
- partial application of user functions when arguments are missing
- full application, with closures returned from a call seeing the call's
  environment

The macro expander reuses `call_intrinsic` so that intrinsic failures are
reported by whichever pass made the call.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Type

from clisk.types.bind import bind_arguments
from clisk.types.environment import Environment
from clisk.types.errors import ClispError, EvaluationError, IntrinsicError
from clisk.types.intrinsic import IntrinsicFunction
from clisk.types.lambda_fn import Function
from clisk.types.node import ListNode, Map, is_keyword

logger = logging.getLogger(__name__)


def call_intrinsic(fn: IntrinsicFunction, args: list, span, error: Type[ClispError]):
    try:
        return fn(args)
    except IntrinsicError as e:
        raise error(e.message, e.span if e.span is not None else span) from e


def lookup_keyword(keyword, target, node: ListNode):
    if not isinstance(target, Map):
        span = target.span if target.span is not None else node.span
        raise EvaluationError(f"Expected map, got {target.kind}", span)
    for key, value in target.pairs():
        if key == keyword:
            return value
    raise EvaluationError(f"Key not found: {keyword.value}", node.span)


def rebind_closure(result: Function, call_env: Environment) -> Function:
    """
    Rebind a closure returned from a call to the call's environment.

    Every binding of the call environment that the closure does not already
    share is layered over the closure's own environment, so the call wins
    for names bound in both. Names bound only by the closure, such as the
    prefix of a partial application, stay visible. A closure created inside
    the body shares the whole call environment and is returned as is.
    """
    env = result.env.extend(call_env.bindings(excluding=result.env))
    if env is result.env:
        return result
    return replace(result, env=env)


def apply_function(fn: Function, args: list, node: ListNode, evaluate_fn: Callable):
    provided = len(args)
    arity = fn.arity

    if provided < arity:
        # Bind the prefix; the result expects the remaining arguments
        env = fn.env.extend(bind_arguments(fn.arguments, args))
        return Function(fn.body, fn.arguments[provided:], env, node.span)

    if provided > arity:
        raise EvaluationError(f"Expected {arity} arguments, got {provided}", node.span)

    call_env = fn.env.extend(bind_arguments(fn.arguments, args))
    result = evaluate_fn(fn.body, call_env)
    if isinstance(result, Function):
        return rebind_closure(result, call_env)
    return result


def apply(head, args: list, node: ListNode, evaluate_fn: Callable):
    if isinstance(head, IntrinsicFunction):
        return call_intrinsic(head, args, node.span, EvaluationError)
    if isinstance(head, Function):
        return apply_function(head, args, node, evaluate_fn)
    span = head.span if head.span is not None else node.value[0].span
    raise EvaluationError(f"Expression not callable, got {head.kind}", span)


def apply_list(node: ListNode, env: Environment, evaluate_fn: Callable):
    """Evaluate every element of a non-empty list, then apply the head."""
    values = [evaluate_fn(item, env) for item in node.value]
    head, args = values[0], values[1:]
    if is_keyword(head) and len(values) == 2:
        return lookup_keyword(head, args[0], node)
    logger.debug("apply %s to %d argument(s)", head, len(args))
    return apply(head, args, node, evaluate_fn)
