from __future__ import annotations

from clisk import ExpanderFn
from clisk.expansion.mode import Mode
from clisk.types.bind import Binding
from clisk.types.errors import MacroExpansionError
from clisk.types.forms import let_parts
from clisk.types.lambda_fn import Macro
from clisk.types.node import ListNode, Vector
from clisk.types.pending import bind_recursive


def let_form(node: ListNode, env, mode: Mode, expand_fn: ExpanderFn):
    """
    (let [name init ...] body)

    Inits are expanded with every name of the form visible, like the
    evaluator does. Bindings that expand to macros exist only at expansion
    time: they are removed from the emitted let, and a let left without
    bindings is replaced by its body. A reducing let is replaced by its
    body's value.
    """
    pairs, body = let_parts(node, MacroExpansionError)
    pending = bind_recursive(
        env, pairs, lambda init, init_env: expand_fn(init, init_env, mode), MacroExpansionError
    )
    expanded = [(key, p.force()) for (key, _), p in zip(pairs, pending)]

    new_body = expand_fn(body, env.extend(Binding(key.value, value) for key, value in expanded), mode)

    runtime = [(key, value) for key, value in expanded if not isinstance(value, Macro)]
    # When reducing, the body is already a value
    if not runtime or mode is Mode.REDUCING:
        return new_body
    bindings = Vector([item for pair in runtime for item in pair], node.value[1].span)
    return ListNode([node.value[0], bindings, new_body], node.span)
