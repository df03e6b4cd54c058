"""
:py:mod:`iunpack.outcome`
=========================

The result of a destructuring attempt is either a :py:class:`Match` or a
:py:class:`Mismatch`. Matches are truthy and mismatches are falsy so an
outcome may be tested directly::

    >>> from iunpack import destructure
    >>> outcome = destructure("a, b", [1, 2])
    >>> if outcome:
    ...     print(outcome.bindings["a"])
    1

.. autoclass:: Match
    :members:

.. autoclass:: Mismatch

.. autoclass:: MatchState
"""

from collections import namedtuple, OrderedDict

__all__ = [
    "Match",
    "Mismatch",
    "MatchState",
]


class Match(namedtuple("Match", "names,values")):
    """
    A successful match.

    Attributes
    ==========
    names : (str, ...)
        The names bound by the pattern, in pattern order.
    values : (value, ...)
        The value bound to each name.
    """

    __slots__ = ()

    def __bool__(self):
        return True

    @classmethod
    def from_bindings(cls, bindings):
        """
        Construct a :py:class:`Match` from a sequence of ``(name, value)``
        pairs.
        """
        return cls(
            tuple(name for name, _ in bindings),
            tuple(value for _, value in bindings),
        )

    @property
    def bindings(self):
        """
        An :py:class:`~collections.OrderedDict` mapping names to values.
        """
        return OrderedDict(zip(self.names, self.values))


class Mismatch(namedtuple("Mismatch", "depth")):
    """
    A failed match.

    Attributes
    ==========
    depth : int
        The number of elements pulled from the source and accepted by a slot
        before the failure occurred. When the only problem was an excess
        element after a fixed-length pattern, this is the pattern's arity.
    """

    __slots__ = ()

    def __bool__(self):
        return False


class MatchState(object):
    """
    The mutable state of a single destructuring attempt.

    Attributes
    ==========
    source
        The source being consumed (see :py:mod:`iunpack.sources`).
    depth : int
        The number of elements consumed and accepted so far.
    bindings : [(name, value), ...]
        The bindings made so far, in pattern order.
    """

    def __init__(self, source):
        self.source = source
        self.depth = 0
        self.bindings = []

    def mismatch(self):
        return Mismatch(self.depth)
