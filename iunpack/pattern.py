"""
:py:mod:`iunpack.pattern`
=========================

A :py:class:`Pattern` describes the shape a sequence must have to be
destructured: a fixed-length prefix of slots, at most one variable-length
middle region and a fixed-length suffix of slots.

Patterns are usually written using the syntax described in
:py:mod:`iunpack.syntax`, but may equally be built directly::

    >>> from iunpack.pattern import Pattern
    >>> from iunpack.slots import Bind, InRange
    >>> from iunpack.middle import CollectAll

    >>> p = Pattern(
    ...     prefix=[Bind("a"), Bind("b")],
    ...     middle=CollectAll("c"),
    ...     suffix=[InRange(0, 10, name="d")],
    ... )
    >>> str(p)
    'a, b, *c, d @ 0..10'

Once constructed a pattern is never modified and may be reused for any
number of destructuring attempts.


Strategies
----------

The shape of a pattern determines how a source is consumed. This choice is
made once, when the pattern is constructed, and recorded as a
:py:class:`Strategy`:

==========================  ===================================================
Strategy                    Pattern shape
==========================  ===================================================
``Strategy.fixed``          No middle. The source must yield exactly as many
                            elements as there are slots.
``Strategy.bidirectional``  A collecting or discarding middle (``*``) over a
                            source which supports taking from the back.
``Strategy.forward_window`` A forward-only middle (``**``) followed by suffix
                            slots, matched with a single-pass sliding window.
``Strategy.forward_rest``   A forward-only middle with no suffix slots.
``Strategy.resumable``      An ``*=name`` middle: the source itself is bound.
==========================  ===================================================

.. autoclass:: Strategy
    :members:

.. autoclass:: Pattern
    :members:
"""

from enum import Enum

from iunpack.exceptions import InvalidPatternError

from iunpack.slots import Slot

from iunpack.middle import (
    CollectAll,
    CollectNone,
    ExposeRemaining,
    container_name,
)

__all__ = [
    "Strategy",
    "Pattern",
]


class Strategy(Enum):
    """
    The destructuring strategies, see the module documentation.
    """

    fixed = "fixed"
    bidirectional = "bidirectional"
    forward_window = "forward_window"
    forward_rest = "forward_rest"
    resumable = "resumable"


class Pattern(object):
    """
    An immutable destructuring pattern.

    Parameters
    ==========
    prefix : [:py:class:`~iunpack.slots.Slot`, ...]
        The slots matched against the first elements of the sequence.
    middle : :py:class:`~iunpack.middle.CollectAll`, :py:class:`~iunpack.middle.CollectNone`, :py:class:`~iunpack.middle.ExposeRemaining` or None
        What to do with elements between the prefix and suffix. If None, the
        pattern has no middle region and any suffix slots are simply appended
        to the prefix.
    suffix : [:py:class:`~iunpack.slots.Slot`, ...]
        The slots matched against the last elements of the sequence.
    bidirectional : bool
        If True (the default), a middle region is found by consuming the
        suffix from the back of the source, which must therefore support
        this. If False, only forward consumption is used.

    Attributes
    ==========
    prefix : (:py:class:`~iunpack.slots.Slot`, ...)
    middle
    suffix : (:py:class:`~iunpack.slots.Slot`, ...)
    bidirectional : bool
    strategy : :py:class:`Strategy`
    names : (str, ...)
        The names bound by this pattern, in the order their values appear in
        a :py:class:`~iunpack.outcome.Match`.

    Raises
    ======
    :py:exc:`~iunpack.exceptions.InvalidPatternError`
        If a slot is not a :py:class:`~iunpack.slots.Slot`, a name is bound
        more than once or an :py:class:`~iunpack.middle.ExposeRemaining`
        middle is combined with forward-only consumption.
    """

    def __init__(self, prefix=(), middle=None, suffix=(), bidirectional=True):
        prefix = tuple(prefix)
        suffix = tuple(suffix)

        for slot in prefix + suffix:
            if not isinstance(slot, Slot):
                raise InvalidPatternError("{!r} is not a slot".format(slot))

        if middle is None:
            prefix += suffix
            suffix = ()
        elif not isinstance(middle, (CollectAll, CollectNone, ExposeRemaining)):
            raise InvalidPatternError(
                "{!r} is not a middle specification".format(middle)
            )

        if isinstance(middle, ExposeRemaining) and not bidirectional:
            raise InvalidPatternError(
                "The remaining source can only be exposed when consuming "
                "from both ends"
            )

        self.prefix = prefix
        self.middle = middle
        self.suffix = suffix
        self.bidirectional = bool(bidirectional)

        names = ()
        for slot in prefix:
            names += slot.names()
        if middle is not None and middle.name is not None:
            names += (middle.name,)
        for slot in suffix:
            names += slot.names()

        seen = set()
        for name in names:
            if name in seen:
                raise InvalidPatternError("Name '{}' bound more than once".format(name))
            seen.add(name)
        self.names = names

        if middle is None:
            self.strategy = Strategy.fixed
        elif isinstance(middle, ExposeRemaining):
            self.strategy = Strategy.resumable
        elif self.bidirectional:
            self.strategy = Strategy.bidirectional
        elif suffix:
            self.strategy = Strategy.forward_window
        else:
            self.strategy = Strategy.forward_rest

    @property
    def requires_bidirectional(self):
        """
        True if sources matched against this pattern must support taking
        elements from the back.
        """
        return self.strategy in (Strategy.bidirectional, Strategy.resumable)

    def _key(self):
        return (
            self.prefix,
            self.middle,
            self.suffix,
            self.bidirectional if self.middle is not None else None,
        )

    def __eq__(self, other):
        return isinstance(other, Pattern) and self._key() == other._key()

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return "<{} {!r}>".format(type(self).__name__, str(self))

    def __str__(self):
        items = [str(slot) for slot in self.prefix]

        marker = "*" if self.bidirectional else "**"
        if isinstance(self.middle, CollectAll):
            if self.middle.container is list:
                items.append("{}{}".format(marker, self.middle.name))
            else:
                items.append(
                    "{}{}: {}".format(
                        marker,
                        self.middle.name,
                        container_name(self.middle.container),
                    )
                )
        elif isinstance(self.middle, CollectNone):
            items.append(marker)
        elif isinstance(self.middle, ExposeRemaining):
            items.append("*={}".format(self.middle.name))

        items.extend(str(slot) for slot in self.suffix)

        return ", ".join(items)

    def explain_mismatch(self, depth):
        """
        Produce a human readable sentence describing the possible causes of
        a :py:class:`~iunpack.outcome.Mismatch` with the given depth.

        A mismatch deliberately does not record its cause: several causes
        produce the same depth. This method works backward from the depth and
        this pattern's arities to list the candidates.
        """
        num_prefix = len(self.prefix)
        num_suffix = len(self.suffix)

        if depth < num_prefix:
            return (
                "The sequence ended after {} element(s) or element {} "
                "was rejected by the slot '{}'.".format(
                    depth, depth, self.prefix[depth]
                )
            )

        if self.strategy is Strategy.fixed and depth == num_prefix:
            return "The sequence has more than {} element(s).".format(num_prefix)

        if self.strategy is Strategy.forward_window:
            if depth < num_prefix + num_suffix:
                return (
                    "The sequence ended after {} element(s) but at least {} "
                    "are required.".format(depth, num_prefix + num_suffix)
                )
            elif depth == num_prefix + num_suffix:
                return (
                    "One of the last {} element(s) was rejected by the "
                    "slots '{}'.".format(
                        num_suffix, ", ".join(map(str, self.suffix))
                    )
                )

        if self.requires_bidirectional and depth < num_prefix + num_suffix:
            from_end = depth - num_prefix
            return (
                "The sequence ended after {} element(s) or element {} from "
                "the end was rejected by the slot '{}'.".format(
                    depth,
                    from_end + 1,
                    self.suffix[num_suffix - 1 - from_end],
                )
            )

        raise ValueError(
            "A depth of {} cannot be produced by the pattern '{}'".format(
                depth, self
            )
        )
