import pytest

from clisk.evaluation.evaluator import evaluate
from clisk.reader.parser import parse_to_ast
from clisk.types.bind import Binding
from clisk.types.errors import EvaluationError, StackDepthError
from clisk.types.lambda_fn import Function
from clisk.types.node import Atom, ListNode, Map, Number, String, Vector
from clisk.types.span import Span


# -----------------------------------------------------
# Literals and atoms
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("5", Number(5)),
        ('"hello"', String("hello")),
        ("true", Atom("true")),
        ("false", Atom("false")),
        ("nil", Atom("nil")),
        (":free-keyword", Atom(":free-keyword")),
        ("()", ListNode([])),
        ("[1 (+ 1 1) 3]", Vector([Number(1), Number(2), Number(3)])),
        ("{:a (+ 1 2)}", Map([Atom(":a"), Number(3)])),
    ],
)
def test_self_evaluating(parse_and_eval, source, expected):
    assert parse_and_eval(source) == expected


def test_unknown_atom(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval("(+ 1 missing)")
    assert info.value.message == "Unknown atom missing"
    assert info.value.span == Span(5, 12)


def test_bound_keyword_resolves(env):
    env = env.extend([Binding(":k", Number(9))])
    assert evaluate(parse_to_ast(":k"), env) == Number(9)


# -----------------------------------------------------
# Intrinsic application
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 3 (- 5 2 1))", Number(5)),
        ("(* 3 2 (/ 6 2 1))", Number(18)),
        ("(> 5 1)", Atom("true")),
        ("(< 5 1)", Atom("false")),
        ('(string/concat "t" "d" "k")', String("tdk")),
    ],
)
def test_primitive_functions(parse_and_eval, source, expected):
    assert parse_and_eval(source) == expected


def test_intrinsic_error_points_at_argument(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval('(+ 1 "2")')
    assert info.value.message == "Expected number, received string"
    assert info.value.span == Span(5, 8)


def test_first_error_wins(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval("(+ first-missing second-missing)")
    assert info.value.message == "Unknown atom first-missing"


def test_not_callable(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval("(1 2)")
    assert info.value.message == "Expression not callable, got number"
    assert info.value.span == Span(1, 2)


# -----------------------------------------------------
# Functions
# -----------------------------------------------------

def test_defining_functions(parse_and_eval):
    fn = parse_and_eval("(fn [a b] (+ a b))")
    assert isinstance(fn, Function)
    assert fn.arguments == ("a", "b")
    assert fn.body == ListNode([Atom("+"), Atom("a"), Atom("b")])
    assert fn.body.span == Span(10, 17)
    assert [child.span for child in fn.body.value] == [Span(11, 12), Span(13, 14), Span(15, 16)]


def test_calling_function(parse_and_eval):
    assert parse_and_eval("((fn [a b] (+ a b)) 2 3)") == Number(5)


def test_closure_captures_defining_environment(parse_and_eval):
    assert parse_and_eval("(let [x 10 add-x (fn [y] (+ x y))] (let [x 1] (add-x 5)))") == Number(15)


def test_partial_application(parse_and_eval):
    partial = parse_and_eval("((fn [a b] (- a b)) 10)")
    assert isinstance(partial, Function)
    assert partial.arguments == ("b",)
    assert parse_and_eval("(((fn [a b] (- a b)) 10) 4)") == parse_and_eval("((fn [a b] (- a b)) 10 4)")


def test_partial_application_through_let(parse_and_eval):
    source = "(let [add (fn [a b] (+ a b)) inc (add 1)] (inc 41))"
    assert parse_and_eval(source) == Number(42)


def test_partial_application_returned_from_call(parse_and_eval):
    source = "(let [add (fn [a b] (+ a b)) make-inc (fn [] (add 1))] ((make-inc) 5))"
    assert parse_and_eval(source) == Number(6)


def test_returned_closure_keeps_its_arguments(parse_and_eval):
    assert parse_and_eval("(((fn [a] (fn [b] (* a b))) 6) 7)") == Number(42)


def test_returned_closure_sees_call_arguments(parse_and_eval):
    assert parse_and_eval("(let [x 1 g (fn [] x)] (((fn [x] g) 2)))") == Number(2)


def test_too_many_arguments(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval("((fn [a] a) 1 2)")
    assert info.value.message == "Expected 1 arguments, got 2"
    assert info.value.span == Span(0, 16)


@pytest.mark.parametrize(
    "source,message",
    [
        ("(fn [a])", "Non complete function definition"),
        ("(fn (a) a)", "Function arguments should be in vector"),
        ("(fn [1] a)", "Invalid argument"),
    ],
)
def test_malformed_fn(parse_and_eval, source, message):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval(source)
    assert info.value.message == message


# -----------------------------------------------------
# if
# -----------------------------------------------------

def test_if_takes_branch(parse_and_eval):
    result = parse_and_eval("(if true 5 3)")
    assert result == Number(5)
    assert result.span == Span(9, 10)


def test_nested_if_condition(parse_and_eval):
    result = parse_and_eval("(if (if true false true) 5 3)")
    assert result == Number(3)
    assert result.span == Span(27, 28)


def test_if_with_comparison(parse_and_eval):
    assert parse_and_eval("(if (= 5 5) 5 3)") == Number(5)


def test_if_only_evaluates_taken_branch(parse_and_eval):
    assert parse_and_eval("(if false missing 3)") == Number(3)


def test_if_condition_must_be_boolean(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval("(if 1 5 3)")
    assert info.value.message == "Expected true or false, got number"
    assert info.value.span == Span(4, 5)


def test_if_condition_checked_before_arity(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval("(if 1 5)")
    assert info.value.message == "Expected true or false, got number"

    with pytest.raises(EvaluationError) as info:
        parse_and_eval("(if true 5)")
    assert info.value.message == "If takes 3 arguments, got 2"


def test_if_without_condition(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval("(if)")
    assert info.value.message == "If takes 3 arguments, got 0"


# -----------------------------------------------------
# let
# -----------------------------------------------------

def test_single_binding_let(parse_and_eval):
    result = parse_and_eval("(let [a 5] a)")
    assert result == Number(5)
    assert result.span == Span(8, 9)
    assert parse_and_eval("(let [a (fn [a] (+ a a))] (a 5))") == Number(10)


def test_multiple_bindings_let(parse_and_eval):
    assert parse_and_eval("(let [a 5 b 10] (+ a b))") == Number(15)
    assert parse_and_eval("(let [a (fn [a] (+ a a)) b (fn [a b] (+ a b))] (b (a 5) 7))") == Number(17)


def test_recursive_function_in_let(parse_and_eval):
    source = "(let [a (fn [n] (if (= n 0) 7 (+ 1 (a (- n 1)))))] (a 5))"
    assert parse_and_eval(source) == Number(12)


def test_mutually_recursive_bindings(parse_and_eval):
    source = """
    (let [even? (fn [n] (if (= n 0) true (odd? (- n 1))))
          odd?  (fn [n] (if (= n 0) false (even? (- n 1))))]
      (even? 10))
    """
    assert parse_and_eval(source) == Atom("true")


def test_binding_can_use_later_sibling(parse_and_eval):
    assert parse_and_eval("(let [a (+ b 1) b 2] a)") == Number(3)


def test_let_shadows_outer_binding(parse_and_eval):
    assert parse_and_eval("(let [a 1] (let [a 2] a))") == Number(2)
    assert parse_and_eval("(let [a 1] (let [b (+ a 1)] b))") == Number(2)


def test_cyclic_binding(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval("(let [a b b a] a)")
    assert info.value.message.startswith("Cyclic binding")


@pytest.mark.parametrize(
    "source,message",
    [
        ("(let [a 1])", "Non complete let definition"),
        ("(let (a 1) a)", "Let bindings should be in vector"),
        ("(let [a 1 b] a)", "Incomplete let binding"),
        ("(let [1 2] 3)", "Expected atom, got number"),
    ],
)
def test_malformed_let(parse_and_eval, source, message):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval(source)
    assert info.value.message == message


# -----------------------------------------------------
# Keyword map lookup
# -----------------------------------------------------

def test_keyword_lookup(parse_and_eval):
    assert parse_and_eval("(:b {:a 1 :b (+ 1 1)})") == Number(2)


def test_keyword_lookup_missing_key(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval("(:c {:a 1})")
    assert info.value.message == "Key not found: :c"


def test_keyword_lookup_requires_map(parse_and_eval):
    with pytest.raises(EvaluationError) as info:
        parse_and_eval("(:a [1 2])")
    assert info.value.message == "Expected map, got vector"


# -----------------------------------------------------
# Stack depth
# -----------------------------------------------------

def test_unbounded_recursion_is_reported(parse_and_eval):
    with pytest.raises(StackDepthError) as info:
        parse_and_eval("(let [loop (fn [n] (+ 1 (loop n)))] (loop 1))")
    assert info.value.message == "Maximum recursion depth exceeded"
    assert isinstance(info.value, EvaluationError)
