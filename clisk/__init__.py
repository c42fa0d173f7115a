# Core type aliases for clisk.
#
# The node classes themselves live in clisk.types.node; these aliases name the
# callables that special forms receive so they can recurse into the pass that
# invoked them.

import logging
from typing import Any, Callable

# (node, env) -> value, passed to evaluator special forms
EvaluatorFn = Callable[[Any, Any], Any]
# (node, env, mode) -> node, passed to expander special forms
ExpanderFn = Callable[[Any, Any, Any], Any]

logging.getLogger(__name__).addHandler(logging.NullHandler())
