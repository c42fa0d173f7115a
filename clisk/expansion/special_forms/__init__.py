"""Registry of special forms for the clisk macro expander.

Handlers take (node, env, mode, expand_fn) and return the expanded node.
"""

from clisk.expansion.special_forms.defmacro_form import defmacro_form
from clisk.expansion.special_forms.quote_forms import quote_form, unquote_form, skip_form
from clisk.expansion.special_forms.lambda_form import lambda_form
from clisk.expansion.special_forms.let_form import let_form
from clisk.expansion.special_forms.if_form import if_form

MACRO_FORMS = {
    "defmacro": defmacro_form,
    "macro": defmacro_form,
    "quote": quote_form,
    "unquote": unquote_form,
    "skip": skip_form,
    "fn": lambda_form,
    "let": let_form,
    "if": if_form,
}
