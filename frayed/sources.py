"""
``frayed.sources``
==================

Frayed iterators over common Python data layouts. These let generators,
text files, and flat NumPy arrays be consumed as sequences of
sub-sequences, without collecting each sub-sequence into a container.
"""
import typing as ty

import numpy as np
import numpy.typing as npt

from frayed import base

__all__ = ["Delimited", "lines", "RaggedSource"]


T = ty.TypeVar("T")

_UNSET: ty.Any = object()


class Delimited(base.Frayed[T]):
    """Frayed iterator splitting an ordinary iterable at delimiter
    elements.

    :group: Sources

    Parameters
    ----------
    iterable : Iterable
        Any iterable, including generators.
    delimiter : Any, optional
        Elements equal to this value mark sub-sequence boundaries.
    predicate : callable, optional
        Elements for which this returns ``True`` mark sub-sequence
        boundaries. Mutually exclusive with ``delimiter``.

    Raises
    ------
    ValueError
        If neither or both of ``delimiter`` and ``predicate`` are
        passed.

    Notes
    -----
    Delimiters are never yielded. Leading delimiters are skipped, and
    runs of consecutive delimiters count as one boundary, as a frayed
    iterator cannot express an empty sub-sequence. The end of
    ``iterable`` is the end of the super-sequence.

    Examples
    --------
    >>> list(frayed.defray(Delimited("ab,c,,d", ",")).map("".join))
    ['ab', 'c', 'd']
    """

    def __init__(
        self,
        iterable: ty.Iterable[T],
        delimiter: ty.Any = _UNSET,
        predicate: ty.Optional[ty.Callable[[T], bool]] = None,
    ) -> None:
        if (delimiter is _UNSET) == (predicate is None):
            raise ValueError(
                "Exactly one of delimiter or predicate must be passed."
            )
        if predicate is None:
            predicate = lambda item: item == delimiter  # noqa: E731
        self._iterator = iter(iterable)
        self._predicate = predicate
        self._at_boundary = True

    def __next__(self) -> T:
        for item in self._iterator:
            if not self._predicate(item):
                self._at_boundary = False
                return item
            if not self._at_boundary:
                self._at_boundary = True
                raise StopIteration
        self._at_boundary = True
        raise StopIteration


def _is_blank(line: str) -> bool:
    return not line.strip()


def lines(text: ty.Iterable[str], strip: bool = True) -> Delimited[str]:
    """Frayed iterator over blank-line separated groups of lines.

    :group: Sources

    Parameters
    ----------
    text : Iterable[str]
        Lines of text, eg. an open text file.
    strip : bool
        Whether to remove trailing whitespace from the lines. Newline
        characters are always removed. Default is ``True``.

    Returns
    -------
    Delimited[str]
        Lines of each group, with a boundary in place of each run of
        blank lines.
    """
    if strip:
        stripped = map(str.rstrip, text)
    else:
        stripped = (line.rstrip("\r\n") for line in text)
    return Delimited(stripped, predicate=_is_blank)


class RaggedSource(base.Frayed[ty.Any]):
    """Frayed iterator over the rows of a flat array, grouped into
    consecutive blocks of given lengths.

    :group: Sources

    Parameters
    ----------
    values : ndarray
        Flat data, eg. particles from many events concatenated together.
    counts : ndarray[int]
        Length of each block. Must be positive, and sum to
        ``len(values)``.

    Raises
    ------
    ValueError
        If ``counts`` is not a one-dimensional array of positive
        integers summing to the length of ``values``.

    Notes
    -----
    For multi-dimensional ``values``, the rows yielded are views into
    the array, not copies.
    """

    def __init__(self, values: npt.ArrayLike, counts: npt.ArrayLike) -> None:
        values = np.asarray(values)
        counts = np.asarray(counts)
        if counts.size and not np.issubdtype(counts.dtype, np.integer):
            raise ValueError(
                f"counts must be integers, not {counts.dtype}."
            )
        counts = counts.astype(np.int64)
        if counts.ndim != 1:
            raise ValueError("counts must be a one-dimensional array.")
        if np.any(counts <= 0):
            raise ValueError(
                "counts must be positive, frayed iterators cannot "
                "represent empty sub-sequences."
            )
        total = int(counts.sum())
        if total != len(values):
            raise ValueError(
                f"counts sum to {total}, but values has length {len(values)}."
            )
        self.values = values
        self.counts = counts
        self._ends = np.cumsum(counts)
        self._block = 0
        self._pos = 0
        self._at_boundary = False

    def __len__(self) -> int:
        """The number of sub-sequences."""
        return len(self.counts)

    def __next__(self) -> ty.Any:
        if self._block == len(self._ends):
            raise StopIteration
        if self._at_boundary:
            self._at_boundary = False
            self._block = self._block + 1
            if self._block == len(self._ends):
                raise StopIteration
        if self._pos == self._ends[self._block]:
            self._at_boundary = True
            raise StopIteration
        row = self.values[self._pos]
        self._pos = self._pos + 1
        return row
