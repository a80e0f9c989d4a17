import typing as ty

import pytest

import frayed as fry
from frayed.base import check_frayed


class Countdown:
    """Plain iterator, yielding n, ..., 1 and then a double boundary."""

    def __init__(self, n: int) -> None:
        self.n = n

    def __iter__(self) -> "Countdown":
        return self

    def __next__(self) -> int:
        if self.n <= 0:
            raise StopIteration
        self.n = self.n - 1
        return self.n + 1


def test_mark() -> None:
    """Tests that marking wraps plain iterators as frayed."""
    marked = fry.mark([1, 2, 3])
    assert isinstance(marked, fry.FrayedIter)
    assert fry.is_frayed(marked)
    assert list(marked) == [1, 2, 3]


def test_plain_iterators_unmarked() -> None:
    """Tests that having ``__next__`` is not enough to be frayed."""
    assert not fry.is_frayed(iter([1, 2]))
    assert not fry.is_frayed(Countdown(2))
    assert not fry.is_frayed(x for x in range(2))


def test_register() -> None:
    """Tests declaring conformance for an existing type."""

    class Registered(Countdown):
        pass

    fry.Frayed.register(Registered)
    assert fry.is_frayed(Registered(2))
    defray = fry.defray(Registered(2))
    assert [list(sub) for sub in defray] == [[2, 1]]


def test_check_frayed() -> None:
    """Tests that gated operations refuse unmarked iterators."""
    with pytest.raises(TypeError, match="Countdown"):
        check_frayed(Countdown(1))
    for func in (fry.defray, fry.peekable, fry.subsequences):
        with pytest.raises(TypeError):
            func(Countdown(1))  # type: ignore


def test_abstract() -> None:
    """Tests that ``Frayed`` cannot be instantiated without
    ``__next__``.
    """

    class Incomplete(fry.Frayed[int]):
        pass

    with pytest.raises(TypeError):
        Incomplete()  # type: ignore


def test_subclass_methods() -> None:
    """Tests the convenience methods inherited from ``Frayed``."""

    class Pairs(fry.Frayed[ty.Tuple[int, int]]):
        def __init__(self) -> None:
            self.calls = 0

        def __next__(self) -> ty.Tuple[int, int]:
            self.calls = self.calls + 1
            if self.calls in (1, 2, 4):
                return (self.calls, -self.calls)
            raise StopIteration

    assert isinstance(Pairs().defray(), fry.Defray)
    assert Pairs().peekable().peek() == (1, -1)
    groups = [list(sub) for sub in Pairs().defray()]
    assert groups == [[(1, -1), (2, -2)], [(4, -4)]]


def test_frayed_iter_repr() -> None:
    """Tests the representation of marked iterators."""
    assert repr(fry.mark(())).startswith("FrayedIter(<tuple_iterator")
