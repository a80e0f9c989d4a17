"""
``frayed.prefix``
=================

Combinator repeating a fixed prefix at the start of every sub-sequence
of a frayed iterator.
"""
import typing as ty

from frayed import base
from frayed.peek import Peekable

__all__ = ["Prefix"]


T = ty.TypeVar("T")

_NOTHING: ty.Any = object()


class Prefix(base.Frayed[T]):
    """Frayed iterator yielding a fresh pass over ``prefix`` at the
    start of every sub-sequence of ``producer``.

    :group: Tools

    Parameters
    ----------
    prefix : Iterable
        Re-iterable collection of elements, eg. a tuple or list.
    producer : Frayed
        The frayed iterator whose sub-sequences will be prefixed.
    prefix_empty : bool
        If ``True``, emits the prefix as a sub-sequence of its own
        when ``producer`` has no sub-sequences at all. Default is
        ``False``.

    Raises
    ------
    TypeError
        If ``prefix`` is a one-shot iterator, or ``producer`` is not
        marked as frayed.

    Notes
    -----
    The first element of ``producer`` is read on initialisation, to
    find out whether it holds any sub-sequences.
    """

    def __init__(
        self,
        prefix: ty.Iterable[T],
        producer: base.Frayed[T],
        prefix_empty: bool = False,
    ) -> None:
        if iter(prefix) is prefix:
            raise TypeError(
                "prefix must be re-iterable, eg. a tuple or list, so that "
                "it can be repeated for every sub-sequence."
            )
        self._prefix = prefix
        self._producer = Peekable(producer)
        self._consume: ty.Optional[ty.Iterator[T]] = None
        if prefix_empty or not self._producer.at_boundary():
            self._consume = iter(prefix)

    def _step(self) -> T:
        try:
            return next(self._producer)
        except StopIteration:
            if self._producer.at_boundary():
                self._consume = None
            else:
                self._consume = iter(self._prefix)
            raise

    def __next__(self) -> T:
        if self._consume is not None:
            item = next(self._consume, _NOTHING)
            if item is not _NOTHING:
                return item
            self._consume = None
        return self._step()
