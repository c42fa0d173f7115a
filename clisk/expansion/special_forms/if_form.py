from clisk import ExpanderFn
from clisk.expansion.mode import Mode, expand_items
from clisk.types.errors import MacroExpansionError
from clisk.types.forms import if_condition
from clisk.types.node import ListNode


def if_form(node: ListNode, env, mode: Mode, expand_fn: ExpanderFn):
    if mode is Mode.PRESERVING:
        return ListNode(expand_items(node.value, env, mode, expand_fn), node.span)

    # Reducing: only the chosen branch is expanded
    if len(node.value) < 2:
        raise MacroExpansionError(f"If takes 3 arguments, got {len(node.value) - 1}", node.span)
    condition = expand_fn(node.value[1], env, mode)
    if if_condition(condition, node.value[1], node, MacroExpansionError):
        return expand_fn(node.value[2], env, mode)
    return expand_fn(node.value[3], env, mode)
