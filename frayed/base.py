"""
``frayed.base``
===============

Capability marker for frayed iterators, and the opt-in wrapper which
applies it to arbitrary iterators.

A frayed iterator raises ``StopIteration`` once at the end of each
sub-sequence, and twice in a row at the end of the whole sequence.
"""
from abc import ABC, abstractmethod
from collections.abc import Iterator
import typing as ty


__all__ = ["Frayed", "FrayedIter", "mark", "is_frayed", "check_frayed"]


T = ty.TypeVar("T")

if ty.TYPE_CHECKING:
    from frayed.defray import Defray
    from frayed.peek import Peekable


class Frayed(ABC, Iterator, ty.Generic[T]):
    """Marker interface for iterators obeying the frayed convention.

    Subclassing, or registering with ``Frayed.register()``, is a
    promise: the convention is never verified at runtime.

    :group: Marker
    """

    @abstractmethod
    def __next__(self) -> T:
        pass

    def defray(self) -> "Defray[T]":
        """Wraps this iterator in a cursor-sharing ``Defray`` adapter."""
        from frayed.defray import Defray

        return Defray(self)

    def peekable(self) -> "Peekable[T]":
        """Wraps this iterator in a ``Peekable``."""
        from frayed.peek import Peekable

        return Peekable(self)


class FrayedIter(Frayed[T]):
    """Explicitly marks a plain iterator as frayed.

    :group: Marker

    Parameters
    ----------
    iterable : Iterable
        Source of elements. Its iterator is expected to raise
        ``StopIteration`` once per sub-sequence boundary, and may then
        resume. Generators are fused, so a marked generator only ever
        holds one sub-sequence.
    """

    def __init__(self, iterable: ty.Iterable[T]) -> None:
        self.iterator: ty.Iterator[T] = iter(iterable)

    def __next__(self) -> T:
        return next(self.iterator)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.iterator!r})"


def mark(iterable: ty.Iterable[T]) -> FrayedIter[T]:
    """Marks the iterator of ``iterable`` as frayed, enabling the
    extension operations for it.

    :group: Marker
    """
    return FrayedIter(iterable)


def is_frayed(obj: ty.Any) -> bool:
    """Returns ``True`` if ``obj`` is marked as a frayed iterator.

    :group: Marker
    """
    return isinstance(obj, Frayed)


def check_frayed(obj: ty.Any) -> None:
    """Raises ``TypeError`` if ``obj`` is not marked as frayed.

    :group: Marker
    """
    if not is_frayed(obj):
        name = obj.__class__.__name__
        raise TypeError(
            f"{name} object is not marked as frayed. Subclass "
            "frayed.Frayed, register the type with Frayed.register(), "
            "or wrap it with frayed.mark()."
        )
