import pytest

import frayed as fry
from frayed.sources import Delimited


def test_peek_element() -> None:
    """Tests that peeking does not consume the element."""
    peekable = fry.peekable(Delimited([1, 0, 2], 0))
    assert peekable.peek() == 1
    assert peekable.peek() == 1
    assert next(peekable) == 1
    assert peekable.at_boundary()


def test_peek_boundary() -> None:
    """Tests that a peeked boundary is replayed, not lost."""
    peekable = fry.peekable(Delimited([1, 0, 2], 0))
    assert next(peekable) == 1
    assert peekable.at_boundary()
    assert peekable.peek("boundary") == "boundary"
    with pytest.raises(StopIteration):
        peekable.peek()
    with pytest.raises(StopIteration):
        next(peekable)
    assert peekable.peek() == 2
    assert list(peekable) == [2]
    assert peekable.at_boundary()


def test_peekable_defray() -> None:
    """Tests that peeking keeps the frayed structure intact."""
    peekable = Delimited("ab-c", "-").peekable()
    assert peekable.peek() == "a"
    assert list(fry.Defray(peekable).map("".join)) == ["ab", "c"]


def test_peekable_unmarked() -> None:
    """Tests that plain iterators are refused."""
    with pytest.raises(TypeError):
        fry.Peekable(iter("abc"))  # type: ignore
