"""Intrinsic functions for the clisk runtime environment.

This module defines arithmetic, comparison, string, collection and predicate
intrinsics and the `register` helper that exposes them to clisk code. Every
intrinsic takes the list of already evaluated argument nodes and returns a
node, or raises IntrinsicError pointing at the offending argument.
"""

from __future__ import annotations

import operator
from functools import reduce
from typing import Callable

from clisk.types.bind import Binding
from clisk.types.environment import Environment
from clisk.types.errors import IntrinsicError
from clisk.types.intrinsic import IntrinsicFunction
from clisk.types.node import (
    COLLECTIONS,
    TRUE,
    Atom,
    ListNode,
    Map,
    Number,
    String,
    Vector,
    boolean,
    is_boolean,
    is_nil,
)


def _expect_arity(args: list, n: int) -> None:
    if len(args) != n:
        raise IntrinsicError(f"Expected {n} arguments, got {len(args)}")


def _numbers(args: list) -> list[float]:
    for arg in args:
        if not isinstance(arg, Number):
            raise IntrinsicError(f"Expected number, received {arg.kind}", arg.span)
    return [arg.value for arg in args]


def _strings(args: list) -> list[str]:
    for arg in args:
        if not isinstance(arg, String):
            raise IntrinsicError(f"Expected string, received {arg.kind}", arg.span)
    return [arg.value for arg in args]


def _sequence(arg) -> ListNode | Vector:
    if not isinstance(arg, (ListNode, Vector)):
        raise IntrinsicError(f"Expected collection, got {arg.kind}", arg.span)
    return arg


# -------------------------------
# Arithmetic
# -------------------------------
def number_fold(op: Callable[[float, float], float]) -> Callable[[list], Number]:
    """Left fold over one or more numbers: (- 10 3 2) => 5, (- 5) => 5."""

    def fold(args: list) -> Number:
        values = _numbers(args)
        if not values:
            raise IntrinsicError("Expected at least 1 argument, got 0")
        return Number(reduce(op, values))

    return fold


def divide(args: list) -> Number:
    values = _numbers(args)
    if not values:
        raise IntrinsicError("Expected at least 1 argument, got 0")
    result = values[0]
    for arg, value in zip(args[1:], values[1:]):
        if value == 0:
            raise IntrinsicError("Division by zero", arg.span)
        result /= value
    return Number(result)


# -------------------------------
# Comparison
# -------------------------------
def comparison(op: Callable[[float, float], bool]) -> Callable[[list], Atom]:
    """Chain a binary comparison over adjacent arguments; true for fewer than two."""

    def compare(args: list) -> Atom:
        values = _numbers(args)
        return boolean(all(op(a, b) for a, b in zip(values, values[1:])))

    return compare


# -------------------------------
# Strings
# -------------------------------
def string_concat(args: list) -> String:
    return String("".join(_strings(args)))


# -------------------------------
# Collections and predicates
# -------------------------------
def is_empty(args: list) -> Atom:
    _expect_arity(args, 1)
    arg = args[0]
    if not isinstance(arg, (*COLLECTIONS, String)):
        raise IntrinsicError(f"Expected collection, got {arg.kind}", arg.span)
    return boolean(len(arg.value) == 0)


def nil_p(args: list) -> Atom:
    _expect_arity(args, 1)
    return boolean(is_nil(args[0]))


def get(args: list):
    """(get [a b c] 1) => b, (get {:a 1} :a) => 1"""
    _expect_arity(args, 2)
    collection, key = args
    if isinstance(collection, Map):
        for k, value in collection.pairs():
            if k == key:
                return value
        raise IntrinsicError(f"Key not found: {key}", key.span)

    _sequence(collection)
    index = _numbers([key])[0]
    if not index.is_integer() or not 0 <= index < len(collection.value):
        raise IntrinsicError("Index out of bounds", key.span)
    return collection.value[int(index)]


def type_of(args: list) -> Atom:
    _expect_arity(args, 1)
    return Atom(args[0].kind)


def logical_and(args: list) -> Atom:
    for arg in args:
        if not is_boolean(arg):
            raise IntrinsicError(f"Expected true or false, got {arg.kind}", arg.span)
    return boolean(all(arg.value == TRUE for arg in args))


def first(args: list):
    _expect_arity(args, 1)
    seq = _sequence(args[0])
    if not seq.value:
        raise IntrinsicError(f"Can't take first of empty {seq.kind}", seq.span)
    return seq.value[0]


def rest(args: list):
    _expect_arity(args, 1)
    seq = _sequence(args[0])
    if not seq.value:
        raise IntrinsicError(f"Can't take rest of empty {seq.kind}", seq.span)
    return type(seq)(seq.value[1:], seq.span)


INTRINSICS: dict[str, Callable[[list], object]] = {
    "+": number_fold(operator.add),
    "-": number_fold(operator.sub),
    "*": number_fold(operator.mul),
    "/": divide,
    "=": comparison(operator.eq),
    "!=": comparison(operator.ne),
    ">": comparison(operator.gt),
    "<": comparison(operator.lt),
    ">=": comparison(operator.ge),
    "<=": comparison(operator.le),
    "string/concat": string_concat,
    "empty?": is_empty,
    "nil?": nil_p,
    "get": get,
    "type": type_of,
    "and": logical_and,
    "first": first,
    "rest": rest,
}


def intrinsic_bindings() -> list[Binding]:
    return [Binding(name, IntrinsicFunction(name, fn)) for name, fn in INTRINSICS.items()]


def register(env: Environment) -> Environment:
    """Return `env` extended with every intrinsic."""
    return env.extend(intrinsic_bindings())


def intrinsics_environment() -> Environment:
    return register(Environment())
