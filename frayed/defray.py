"""
``frayed.defray``
=================

Re-exposes a frayed iterator as an iterator of iterators, without
buffering any elements.

All sub-sequences share the single cursor of the underlying frayed
iterator, which is owned by a ``Defray`` instance. Only one
``Subsequence`` is live at a time: requesting the next one invalidates
the previous, and skips over whatever it left unread.
"""
import enum
import logging
import typing as ty
from collections.abc import Iterator

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from frayed import base

__all__ = ["CursorState", "Defray", "Subsequence"]


T = ty.TypeVar("T")
B = ty.TypeVar("B")

logger = logging.getLogger(__name__)

_BOUNDARY: ty.Any = object()
_NOTHING: ty.Any = object()


class CursorState(enum.Enum):
    """Status of the cursor shared between outer and inner iteration.

    :group: Defray
    """

    ACTIVE = enum.auto()
    BOUNDARY = enum.auto()
    DONE = enum.auto()


class Subsequence(Iterator, ty.Generic[T]):
    """Iterator over the elements of a single sub-sequence.

    Instances are created by ``Defray.next_subsequence()``, and proxy
    their ``__next__`` calls to the parent's cursor. Once finished, a
    ``Subsequence`` stays finished.

    :group: Defray

    Notes
    -----
    A ``Subsequence`` finishes either when it reaches the boundary of
    its sub-sequence, or when its parent moves on to a later
    sub-sequence, whichever happens first.
    """

    def __init__(
        self,
        parent: "Defray[T]",
        generation: int,
        index: int,
        first: ty.Any = _NOTHING,
    ) -> None:
        self._parent = parent
        self._generation = generation
        self._first = first
        self._finished = first is _NOTHING
        self.index = index

    @property
    def finished(self) -> bool:
        """Whether the sub-sequence will yield no further elements."""
        if self._parent.generation != self._generation:
            self._finished = True
        return self._finished

    def _advance(self) -> ty.Any:
        if self._first is not _NOTHING:
            item, self._first = self._first, _NOTHING
            return item
        item = self._parent._step(self._generation)
        if item is _BOUNDARY:
            self._finished = True
        return item

    def __next__(self) -> T:
        if self.finished:
            raise StopIteration
        item = self._advance()
        if item is _BOUNDARY:
            raise StopIteration
        return item

    def peek(self, default: ty.Any = _NOTHING) -> ty.Any:
        """Returns the next element without consuming it.

        Parameters
        ----------
        default : Any, optional
            Returned if the sub-sequence has no more elements.

        Raises
        ------
        StopIteration
            If the sub-sequence has no more elements, and no
            ``default`` was given.
        """
        if not self.finished and self._first is _NOTHING:
            item = self._parent._step(self._generation)
            if item is _BOUNDARY:
                self._finished = True
            else:
                self._first = item
        if self._finished:
            if default is _NOTHING:
                raise StopIteration
            return default
        return self._first

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"{name}(index={self.index}, finished={self.finished})"


class Defray(ty.Generic[T]):
    """Cursor-sharing adapter, turning a frayed iterator into a lazy
    sequence of ``Subsequence`` iterators.

    :group: Defray

    Parameters
    ----------
    producer : Frayed
        Iterator marked as frayed. The adapter takes ownership of it,
        and should be the only caller of its ``__next__`` method from
        then on.

    Raises
    ------
    TypeError
        If ``producer`` is not marked as frayed.

    Notes
    -----
    The adapter is not thread-safe. Consumers may abandon a
    ``Subsequence`` at any point; the next call to
    ``next_subsequence()`` will fast-forward the cursor to the start of
    the following sub-sequence.

    Examples
    --------
    >>> groups = frayed.sources.Delimited([1, 2, 0, 4, 5, 0, 7], 0)
    >>> [list(sub) for sub in Defray(groups)]
    [[1, 2], [4, 5], [7]]
    """

    def __init__(self, producer: base.Frayed[T]) -> None:
        base.check_frayed(producer)
        self._producer: ty.Optional[base.Frayed[T]] = producer
        self._state = CursorState.ACTIVE
        self._generation = 0
        self._issued = 0
        self._live: ty.Optional[Subsequence[T]] = None
        self._pending: ty.Any = _NOTHING
        self._skipping: ty.Optional[int] = None

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def generation(self) -> int:
        """Token of the live ``Subsequence``. Incremented each time the
        live ``Subsequence`` is invalidated.
        """
        return self._generation

    @property
    def producer(self) -> ty.Optional[base.Frayed[T]]:
        """The owned frayed iterator. Calling ``next()`` on it directly
        will corrupt the adapter's view of the sub-sequences.
        """
        return self._producer

    def _pull(self) -> ty.Any:
        """Makes exactly one call to the producer, and transitions the
        cursor state according to the result.
        """
        if self._state is CursorState.DONE:
            return _BOUNDARY
        try:
            item = next(self._producer)  # type: ignore
        except StopIteration:
            if self._state is CursorState.BOUNDARY:
                self._state = CursorState.DONE
                logger.debug("Frayed iterator exhausted.")
            else:
                self._state = CursorState.BOUNDARY
            return _BOUNDARY
        self._state = CursorState.ACTIVE
        return item

    def _step(self, generation: int) -> ty.Any:
        stale = generation != self._generation
        if stale or self._pending is not _NOTHING:
            return _BOUNDARY
        if self._state is not CursorState.ACTIVE:
            return _BOUNDARY
        return self._pull()

    def _release(self, live: Subsequence[T]) -> None:
        self._live = None
        self._generation += 1
        if self._state is not CursorState.ACTIVE:
            return
        if self._pending is not _NOTHING:
            return
        self._skipping = live.index

    def _fast_forward(self) -> None:
        """Discards the rest of an abandoned sub-sequence. Resumes where
        it left off if a previous attempt was interrupted by the
        producer raising.
        """
        skipped = 0
        while self._pull() is not _BOUNDARY:
            skipped = skipped + 1
        logger.debug(
            "Fast-forwarded %d element(s) of abandoned sub-sequence %d.",
            skipped,
            self._skipping,
        )
        self._skipping = None

    def _issue(self, first: ty.Any) -> Subsequence[T]:
        subsequence = Subsequence(self, self._generation, self._issued, first)
        self._issued = self._issued + 1
        self._live = subsequence
        return subsequence

    def next_subsequence(self) -> ty.Optional[Subsequence[T]]:
        """Returns an iterator over the next sub-sequence, or ``None``
        if there are no more.

        Any previously returned ``Subsequence`` is finished by this
        call. If it had not reached its boundary, the remainder of its
        sub-sequence is read and discarded.

        If the producer raises, the exception propagates, and calling
        this again picks up from where the failed call stopped.
        """
        if self._live is not None:
            self._release(self._live)
        if self._skipping is not None:
            self._fast_forward()
        if self._state is CursorState.DONE:
            return None
        if self._pending is not _NOTHING:
            first, self._pending = self._pending, _NOTHING
            return self._issue(first)
        leading = self._issued == 0 and self._state is CursorState.BOUNDARY
        if not leading:
            first = self._pull()
            if first is not _BOUNDARY:
                return self._issue(first)
            if self._state is CursorState.DONE:
                return None
        # single leading boundary: an empty sub-sequence, unless it ends
        # the whole sequence
        first = self._pull()
        if first is _BOUNDARY:
            return None
        self._pending = first
        return self._issue(_NOTHING)

    def __iter__(self) -> ty.Iterator[Subsequence[T]]:
        subsequence = self.next_subsequence()
        while subsequence is not None:
            yield subsequence
            subsequence = self.next_subsequence()

    def map(
        self, func: ty.Callable[[Subsequence[T]], B]
    ) -> ty.Iterator[B]:
        """Lazily applies ``func`` to each sub-sequence, in order.

        Each ``Subsequence`` is only valid for the duration of the call
        to ``func``, so ``func`` should consume what it needs of it
        before returning.

        Parameters
        ----------
        func : callable
            Function receiving a ``Subsequence``.

        Returns
        -------
        Iterator
            The results of ``func``.
        """
        return map(func, self)

    def into_inner(self) -> ty.Optional[base.Frayed[T]]:
        """Releases the frayed iterator, consuming the adapter.

        The iterator is returned in its current state: a partially read
        sub-sequence is not rewound, and an element the adapter had
        already read ahead is lost. Afterwards the adapter, and any
        ``Subsequence`` it issued, will report no more data.
        """
        producer = self._producer
        logger.debug("Releasing %r at cursor state %s.", producer, self._state)
        self._producer = None
        self._live = None
        self._pending = _NOTHING
        self._skipping = None
        self._generation += 1
        self._state = CursorState.DONE
        return producer

    def __rich__(self) -> Tree:
        name = self.__class__.__name__
        tree = Tree(f"{name}(state=[yellow]{self._state.name}[default])")
        tree.add(f"[blue]generation [default]= [green]{self._generation}")
        producer = escape(repr(self._producer))
        tree.add(f"[blue]producer [default]= [green]{producer}")
        return tree

    def __repr__(self) -> str:
        console = Console(color_system=None)
        with console.capture() as capture:
            console.print(self)
        return capture.get()
