from clisk import ExpanderFn
from clisk.expansion.mode import Mode
from clisk.types.bind import Binding
from clisk.types.errors import MacroExpansionError
from clisk.types.forms import fn_parts
from clisk.types.lambda_fn import Function
from clisk.types.node import Atom, ListNode


def lambda_form(node: ListNode, env, mode: Mode, expand_fn: ExpanderFn):
    """
    (fn [args...] body)

    When reducing, builds a Function closing over the expansion environment.
    When preserving, the form stays code: its body is expanded with every
    argument bound to itself, so arguments shadow outer macros and let names.
    A let name bound to such code turns into a Function again when a reducing
    expansion looks it up.
    """
    arguments, body = fn_parts(node, MacroExpansionError)
    if mode is Mode.REDUCING:
        return Function(body, arguments, env, node.span)

    args_node = node.value[1]
    inner = env.extend(Binding(arg.value, Atom(arg.value, arg.span)) for arg in args_node.value)
    return ListNode([node.value[0], args_node, expand_fn(body, inner, mode)], node.span)
