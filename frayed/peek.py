"""
``frayed.peek``
===============

Look-ahead over a frayed iterator, which remembers peeked boundaries as
well as peeked elements.
"""
import typing as ty

from frayed import base

__all__ = ["Peekable"]


T = ty.TypeVar("T")

_BOUNDARY: ty.Any = object()
_EMPTY: ty.Any = object()


class Peekable(base.Frayed[T]):
    """Frayed iterator wrapper, allowing the next element or boundary to
    be inspected without consuming it.

    :group: Tools

    Parameters
    ----------
    producer : Frayed
        The frayed iterator to wrap.

    Raises
    ------
    TypeError
        If ``producer`` is not marked as frayed.
    """

    def __init__(self, producer: base.Frayed[T]) -> None:
        base.check_frayed(producer)
        self._producer = producer
        self._stash: ty.Any = _EMPTY

    def _fill(self) -> None:
        if self._stash is not _EMPTY:
            return
        try:
            self._stash = next(self._producer)
        except StopIteration:
            self._stash = _BOUNDARY

    def __next__(self) -> T:
        if self._stash is _EMPTY:
            return next(self._producer)
        item, self._stash = self._stash, _EMPTY
        if item is _BOUNDARY:
            raise StopIteration
        return item

    def peek(self, default: ty.Any = _EMPTY) -> ty.Any:
        """Returns the next element without consuming it.

        Parameters
        ----------
        default : Any, optional
            Returned if the next result is a boundary.

        Raises
        ------
        StopIteration
            If the next result is a boundary, and no ``default`` was
            given. The boundary is not consumed.
        """
        self._fill()
        if self._stash is _BOUNDARY:
            if default is _EMPTY:
                raise StopIteration
            return default
        return self._stash

    def at_boundary(self) -> bool:
        """Whether the next call to ``next()`` will signal a boundary."""
        self._fill()
        return self._stash is _BOUNDARY

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._producer!r})"
