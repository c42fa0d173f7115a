from __future__ import annotations

from clisk import EvaluatorFn
from clisk.types.bind import Binding
from clisk.types.environment import Environment
from clisk.types.errors import EvaluationError
from clisk.types.forms import let_parts
from clisk.types.node import ListNode
from clisk.types.pending import bind_recursive


def let_form(node: ListNode, env: Environment, evaluate_fn: EvaluatorFn):
    """
    (let [name init ...] body)

    Each init is evaluated in an environment where every name of the form is
    bound to its own pending init, which allows self and mutual recursion.
    The body then sees the names bound to their evaluated values only.
    """
    pairs, body = let_parts(node, EvaluationError)
    pending = bind_recursive(env, pairs, evaluate_fn, EvaluationError)
    values = [Binding(p.name, p.force()) for p in pending]
    return evaluate_fn(body, env.extend(values))
