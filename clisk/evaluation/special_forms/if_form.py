from clisk import EvaluatorFn
from clisk.types.environment import Environment
from clisk.types.errors import EvaluationError
from clisk.types.forms import if_condition
from clisk.types.node import ListNode


def if_form(node: ListNode, env: Environment, evaluate_fn: EvaluatorFn):
    if len(node.value) < 2:
        raise EvaluationError(f"If takes 3 arguments, got {len(node.value) - 1}", node.span)

    condition = evaluate_fn(node.value[1], env)
    # Strict booleans: the condition must be the atom true or false
    if if_condition(condition, node.value[1], node, EvaluationError):
        return evaluate_fn(node.value[2], env)
    return evaluate_fn(node.value[3], env)
