"""
``frayed``
==========

Represents a sequence of sub-sequences with a single flat iterator,
which signals the end of each sub-sequence by raising ``StopIteration``
once, and the end of everything by raising it twice in a row. Provides
the ``Defray`` adapter to consume such iterators with nested for-loops,
without buffering.
"""
import logging

from ._version import __version__
from . import base
from . import sources
from . import tools
from .base import Frayed, FrayedIter, mark, is_frayed
from .defray import CursorState, Defray, Subsequence
from .peek import Peekable
from .prefix import Prefix
from .tools import defray, subsequences, peekable, prefix


__all__ = [
    "__version__",
    "base",
    "sources",
    "tools",
    "Frayed",
    "FrayedIter",
    "mark",
    "is_frayed",
    "CursorState",
    "Defray",
    "Subsequence",
    "Peekable",
    "Prefix",
    "defray",
    "subsequences",
    "peekable",
    "prefix",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
