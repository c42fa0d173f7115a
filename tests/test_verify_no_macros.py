import pytest

from clisk.expansion.verify import verify_no_macros
from clisk.reader.parser import parse_to_ast
from clisk.types.environment import Environment
from clisk.types.errors import ResidualMacroError
from clisk.types.lambda_fn import Function, Macro
from clisk.types.node import Atom, ListNode, Number, Vector


def test_macro_free_tree_is_returned():
    node = parse_to_ast("(let [a [1 {:b 2}]] (+ a 1))")
    assert verify_no_macros(node) == node


def test_expanded_program_passes(parse_and_expand):
    expanded = parse_and_expand("(let [inc (defmacro inc [x] '(+ ~x 1)) y 2] (inc y))")
    assert verify_no_macros(expanded) == expanded


def test_function_bodies_are_not_inspected():
    fn = Function(parse_to_ast("(quote a)"), ["a"], Environment())
    assert verify_no_macros(fn) is fn


@pytest.mark.parametrize("source", ["(quote a)", "(unquote a)", "(skip a)", "(macro [a] a)", "(defmacro m [a] a)"])
def test_residual_forms_are_rejected(source):
    with pytest.raises(ResidualMacroError):
        verify_no_macros(ListNode([Number(1), Vector([parse_to_ast(source)])]))


def test_macro_value_is_rejected():
    macro = Macro(Atom("a"), ["a"], Environment(), "m")
    with pytest.raises(ResidualMacroError, match="Macro m"):
        verify_no_macros(ListNode([Atom("f"), macro]))


def test_residual_error_is_an_assertion():
    with pytest.raises(AssertionError):
        verify_no_macros(parse_to_ast("'a"))
