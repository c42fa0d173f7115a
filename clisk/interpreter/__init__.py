from __future__ import annotations

import logging

from clisk.builtin.env_builtin import register
from clisk.evaluation.evaluator import evaluate
from clisk.expansion.expander import expand
from clisk.expansion.verify import verify_no_macros
from clisk.modules.header import Module, parse_module
from clisk.reader.parser import read_all
from clisk.types.environment import Environment
from clisk.types.errors import ModuleError
from clisk.types.node import NIL, Atom, EvalNode, ParserNode

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading, macro expansion and evaluation of clisk code.

    Every top-level form runs through Reader -> Expander -> verify_no_macros
    -> Evaluator against the same base environment, the intrinsics by
    default. With `expand_macros=False` the expander is skipped and forms
    are evaluated as read.
    """

    def __init__(self, expand_macros: bool = True, env: Environment | None = None):
        self.expand_macros = expand_macros
        self.env: Environment = env if env is not None else register(Environment())

    def read(self, code: str) -> list[ParserNode]:
        return read_all(code)

    def expand_node(self, node: ParserNode) -> EvalNode:
        return verify_no_macros(expand(node, self.env))

    def eval_node(self, node: ParserNode) -> EvalNode:
        if self.expand_macros:
            node = self.expand_node(node)
        return evaluate(node, self.env)

    def expand(self, code: str) -> list[EvalNode]:
        return [self.expand_node(node) for node in self.read(code)]

    def eval_all(self, code: str) -> list[EvalNode]:
        return [self.eval_node(node) for node in self.read(code)]

    def eval(self, code: str) -> EvalNode:
        """Evaluate every form in `code` and return the last value, nil if none."""
        results = self.eval_all(code)
        if not results:
            return Atom(NIL)
        return results[-1]

    def load(self, code: str, url: str = "<input>") -> Module:
        return parse_module(url, self.read(code))

    def load_executable(self, code: str, url: str = "<input>") -> Module:
        """
        Read a program file: an optional `(executable ...)` header followed by
        forms. Importable modules and imports are rejected with ModuleError.
        """
        module = self.load(code, url)
        if not module.is_executable:
            raise ModuleError(f"{url} is a module, not an executable")
        if module.imports:
            raise ModuleError("Imports are not supported", module.imports[0].span)
        return module

    def run(self, code: str, url: str = "<input>") -> EvalNode:
        module = self.load_executable(code, url)
        logger.debug("running %s: %d form(s)", url, len(module.expressions))
        result: EvalNode = Atom(NIL)
        for node in module.expressions:
            result = self.eval_node(node)
        return result
