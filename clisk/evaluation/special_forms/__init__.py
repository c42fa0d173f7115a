"""Registry of special forms for the clisk evaluator.

Maps head atom names to handler functions that implement non-standard
evaluation rules. The evaluator consults this table before ordinary
function application.
"""

from clisk.evaluation.special_forms.lambda_form import lambda_form
from clisk.evaluation.special_forms.let_form import let_form
from clisk.evaluation.special_forms.if_form import if_form

SPECIAL_FORMS = {
    "fn": lambda_form,
    "let": let_form,
    "if": if_form,
}
