"""
``frayed.tools``
================

Extension operations, gated on the ``Frayed`` marker. These work for
virtual subclasses registered with ``Frayed.register()``, which do not
inherit the ``Frayed`` convenience methods.
"""
import typing as ty

from frayed import base
from frayed.defray import Defray, Subsequence
from frayed.peek import Peekable
from frayed.prefix import Prefix

__all__ = ["defray", "subsequences", "peekable", "prefix"]


T = ty.TypeVar("T")


def defray(producer: base.Frayed[T]) -> Defray[T]:
    """Wraps a frayed iterator in a new ``Defray`` adapter.

    :group: Tools

    Raises
    ------
    TypeError
        If ``producer`` is not marked as frayed.
    """
    return Defray(producer)


def subsequences(
    source: ty.Union[base.Frayed[T], Defray[T]]
) -> ty.Iterator[Subsequence[T]]:
    """Iterates over the sub-sequences of a frayed iterator, or of a
    live ``Defray`` adapter, for nested iteration.

    :group: Tools

    Examples
    --------
    >>> for sub in subsequences(frayed.sources.Delimited([1, 0, 2, 3], 0)):
    ...     print(list(sub))
    [1]
    [2, 3]
    """
    if not isinstance(source, Defray):
        source = Defray(source)
    return iter(source)


def peekable(producer: base.Frayed[T]) -> Peekable[T]:
    """Wraps a frayed iterator with look-ahead.

    :group: Tools
    """
    return Peekable(producer)


def prefix(
    prefix: ty.Iterable[T],
    producer: base.Frayed[T],
    prefix_empty: bool = False,
) -> Prefix[T]:
    """Prepends the elements of ``prefix`` to every sub-sequence of
    ``producer``. See ``Prefix`` for details.

    :group: Tools
    """
    return Prefix(prefix, producer, prefix_empty)
