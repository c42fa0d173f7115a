import pytest

from clisk.builtin.env_builtin import intrinsics_environment
from clisk.evaluation.evaluator import evaluate
from clisk.expansion.expander import expand
from clisk.expansion.verify import verify_no_macros
from clisk.reader.parser import parse_to_ast


@pytest.fixture
def env():
    """Base environment holding every intrinsic."""
    return intrinsics_environment()


@pytest.fixture
def parse_and_eval(env):
    """Read one expression and evaluate it without macro expansion."""

    def _run(source: str):
        return evaluate(parse_to_ast(source), env)

    return _run


@pytest.fixture
def parse_and_expand(env):
    def _run(source: str, evaluating: bool = False):
        return expand(parse_to_ast(source), env, evaluating)

    return _run


@pytest.fixture
def run(env):
    """Full chain: read, expand, verify, evaluate."""

    def _run(source: str):
        return evaluate(verify_no_macros(expand(parse_to_ast(source), env)), env)

    return _run
