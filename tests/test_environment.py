import pytest

from clisk.types.bind import Binding, bind_arguments
from clisk.types.environment import Environment
from clisk.types.errors import UnboundSymbolError
from clisk.types.node import Number


def test_lookup_walks_outwards():
    outer = Environment([Binding("a", Number(1))])
    inner = outer.extend([Binding("b", Number(2))])
    assert inner.lookup("a") == Number(1)
    assert inner.lookup("b") == Number(2)
    assert "b" not in outer


def test_newest_binding_wins():
    env = Environment([Binding("a", Number(1))]).extend([Binding("a", Number(2))])
    assert env.lookup("a") == Number(2)


def test_later_binding_in_same_frame_wins():
    env = Environment([Binding("a", Number(1)), Binding("a", Number(3))])
    assert env.lookup("a") == Number(3)


def test_extend_does_not_mutate():
    base = Environment([Binding("a", Number(1))])
    base.extend([Binding("a", Number(2))])
    assert base.lookup("a") == Number(1)


def test_extend_with_nothing_returns_same_env():
    base = Environment()
    assert base.extend([]) is base


def test_unbound_lookup():
    with pytest.raises(UnboundSymbolError) as info:
        Environment().lookup("missing")
    assert info.value.name == "missing"
    assert Environment().get("missing", Number(0)) == Number(0)


def test_bindings_oldest_first():
    env = Environment([Binding("a", Number(1))]).extend([Binding("b", Number(2)), Binding("a", Number(3))])
    assert [(b.name, b.value.value) for b in env.bindings()] == [("a", 1), ("b", 2), ("a", 3)]
    assert Environment(env.bindings()).lookup("a") == Number(3)


def test_bindings_excluding_shared_frames():
    base = Environment([Binding("a", Number(1))])
    left = base.extend([Binding("b", Number(2))])
    right = base.extend([Binding("c", Number(3))])
    assert [b.name for b in left.bindings(excluding=right)] == ["b"]
    assert left.bindings(excluding=left) == []


def test_frames_newest_first():
    base = Environment()
    inner = base.extend([Binding("x", Number(1))])
    assert list(inner.frames()) == [inner, base]


@pytest.mark.parametrize(
    "formals,supplied,expected",
    [
        (["a", "b"], [Number(1), Number(2)], [("a", 1), ("b", 2)]),
        (["a", "b"], [Number(1)], [("a", 1)]),
        (["a"], [], []),
    ],
)
def test_bind_arguments_positional_prefix(formals, supplied, expected):
    assert [(b.name, b.value.value) for b in bind_arguments(formals, supplied)] == expected
