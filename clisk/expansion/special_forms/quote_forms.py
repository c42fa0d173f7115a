from clisk import ExpanderFn
from clisk.expansion.mode import Mode
from clisk.types.errors import MacroExpansionError
from clisk.types.forms import single_argument
from clisk.types.node import NIL, Atom


def quote_form(node, env, mode, expand_fn: ExpanderFn):
    # 'x rebuilds x as code; the quote itself disappears
    return expand_fn(single_argument(node, MacroExpansionError), env, Mode.PRESERVING)


def unquote_form(node, env, mode, expand_fn: ExpanderFn):
    # ~x evaluates x now and splices in the result
    return expand_fn(single_argument(node, MacroExpansionError), env, Mode.REDUCING)


def skip_form(node, env, mode, expand_fn: ExpanderFn):
    # Inside a collection #_x is dropped before reaching here
    single_argument(node, MacroExpansionError)
    return Atom(NIL, node.span)
