import pytest

from clisk.interpreter import Interpreter
from clisk.types.errors import EvaluationError, MacroExpansionError, ModuleError, ParseError
from clisk.types.node import Atom, ListNode, Number, String


def test_eval_returns_last_value():
    itp = Interpreter()
    assert itp.eval("(+ 1 2) (* 2 3)") == Number(6)


def test_eval_of_empty_source_is_nil():
    assert Interpreter().eval("; nothing here") == Atom("nil")


def test_eval_all_runs_every_form():
    itp = Interpreter()
    assert itp.eval_all('1 "two" (+ 1 2)') == [Number(1), String("two"), Number(3)]


def test_forms_do_not_share_bindings():
    itp = Interpreter()
    itp.eval("(let [a 1] a)")
    with pytest.raises(EvaluationError):
        itp.eval("a")


def test_macros_are_expanded_before_evaluation():
    itp = Interpreter()
    source = "(let [swap (defmacro swap [f a b] '(~f ~b ~a))] (swap / 2 10))"
    assert itp.eval(source) == Number(5)


def test_expand_returns_macro_free_code():
    itp = Interpreter()
    [expanded] = itp.expand("(let [m (defmacro m [x] '(* ~x 2))] (m 4))")
    assert expanded == ListNode([Atom("*"), Number(4), Number(2)])


def test_without_expansion_macro_forms_are_not_understood():
    itp = Interpreter(expand_macros=False)
    assert itp.eval("(+ 1 2)") == Number(3)
    with pytest.raises(EvaluationError):
        itp.eval("'a")


def test_errors_propagate():
    itp = Interpreter()
    with pytest.raises(ParseError):
        itp.eval("(+ 1")
    with pytest.raises(MacroExpansionError):
        itp.eval("((macro [a] a))")
    with pytest.raises(EvaluationError):
        itp.eval("(missing 1)")


def test_run_skips_executable_header():
    itp = Interpreter()
    assert itp.run("(executable) (+ 1 2) (+ 3 4)") == Number(7)
    assert itp.run("") == Atom("nil")


def test_run_rejects_modules_and_imports():
    itp = Interpreter()
    with pytest.raises(ModuleError, match="is a module, not an executable"):
        itp.run("(module [a]) [a 1]", "lib.clsk")
    with pytest.raises(ModuleError, match="Imports are not supported"):
        itp.run('(executable ["lib.clsk" unqualified]) (+ 1 2)')


def test_load_returns_module():
    module = Interpreter().load("(module [a]) [a 1] [b 2]", "lib.clsk")
    assert module.url == "lib.clsk"
    assert [d.name for d in module.definitions] == ["a", "b"]
