from clisk import EvaluatorFn
from clisk.types.environment import Environment
from clisk.types.errors import EvaluationError
from clisk.types.forms import fn_parts
from clisk.types.lambda_fn import Function
from clisk.types.node import ListNode


def lambda_form(node: ListNode, env: Environment, evaluate_fn: EvaluatorFn) -> Function:
    # (fn [a b] body) closes over the current environment; no duplicate
    # argument check, the last duplicate wins when bound.
    arguments, body = fn_parts(node, EvaluationError)
    return Function(body, arguments, env, node.span)
