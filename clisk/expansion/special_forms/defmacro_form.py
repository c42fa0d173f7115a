"""Special forms: defmacro and macro.

Both produce a Macro value at expansion time. Each formal parameter is bound
in the macro's environment to a freshly generated atom, so names introduced by
a macro body never capture names at the use site.
"""

from __future__ import annotations

import logging

from clisk import ExpanderFn
from clisk.expansion.mode import Mode
from clisk.types.bind import Binding
from clisk.types.environment import Environment
from clisk.types.errors import MacroExpansionError
from clisk.types.forms import macro_parts
from clisk.types.lambda_fn import Macro
from clisk.types.node import Atom, ListNode
from clisk.types.symbol import gen_sym

logger = logging.getLogger(__name__)


def defmacro_form(node: ListNode, env: Environment, mode: Mode, expand_fn: ExpanderFn) -> Macro:
    name, arguments, body = macro_parts(node, MacroExpansionError)
    renamed = [Binding(arg, Atom(gen_sym(arg), node.span)) for arg in arguments]
    logger.debug("macro %s [%s]", name, " ".join(b.value.value for b in renamed))
    return Macro(body, arguments, env.extend(renamed), name, node.span)
