"""
:py:mod:`iunpack.sources`
=========================

Sources are the objects elements are pulled from during a destructuring
attempt. Two capability levels exist:

Forward sources
    Provide a ``take_next()`` method which returns the next element or
    :py:data:`EXHAUSTED` once no elements remain.

Bidirectional sources
    Additionally provide a ``take_last()`` method which removes and returns
    the last remaining element (or :py:data:`EXHAUSTED`).

Any iterable may be used as a forward source (see :py:class:`ForwardSource`)
while any :py:class:`~collections.abc.Sequence` may be used as a
bidirectional one (see :py:class:`SequenceSource`). User defined types which
implement ``take_next`` (and optionally ``take_last``) are used as-is.

A source is consumed destructively and exactly once. Exceptions raised by the
underlying iterable are not caught: they propagate to the caller of
:py:func:`~iunpack.coordinator.destructure` unchanged.

.. autodata:: EXHAUSTED

.. autoclass:: ForwardSource
    :members:

.. autoclass:: SequenceSource
    :members:

.. autofunction:: as_source

.. autofunction:: is_bidirectional

.. autofunction:: sequence_length
"""

from collections.abc import Sequence

from sentinels import Sentinel

from iunpack.exceptions import SourceCapabilityError

__all__ = [
    "EXHAUSTED",
    "ForwardSource",
    "SequenceSource",
    "as_source",
    "is_bidirectional",
    "sequence_length",
]


EXHAUSTED = Sentinel("EXHAUSTED")
"""
Returned by ``take_next()`` and ``take_last()`` when a source has no elements
left.
"""


class ForwardSource(object):
    """
    A single-pass, forward-only source wrapping any Python iterable.

    Instances are themselves iterators over whatever elements have not yet
    been taken.
    """

    def __init__(self, iterable):
        self._iterator = iter(iterable)

    def take_next(self):
        """
        Remove and return the next element, or :py:data:`EXHAUSTED`.
        """
        return next(self._iterator, EXHAUSTED)

    def __iter__(self):
        return self

    def __next__(self):
        element = self.take_next()
        if element is EXHAUSTED:
            raise StopIteration()
        return element

    def __repr__(self):
        return "<{} over {!r}>".format(type(self).__name__, self._iterator)


class SequenceSource(object):
    """
    A bidirectional source over a :py:class:`~collections.abc.Sequence`.

    Elements are taken from either end of a window into the sequence which
    narrows as elements are taken; the underlying sequence is never modified.

    Once a pattern has consumed its prefix and suffix, the remaining window
    is the middle region. When bound by an ``*=name`` marker, the caller
    receives the source itself: iterating over it yields the remaining
    elements front to back, :py:func:`reversed` yields them back to front
    and :py:attr:`remaining` (or :py:func:`len`) gives the number remaining.
    """

    def __init__(self, sequence):
        self._sequence = sequence
        self._front = 0
        self._back = sequence_length(sequence)

    def take_next(self):
        """
        Remove and return the first remaining element, or
        :py:data:`EXHAUSTED`.
        """
        if self._front >= self._back:
            return EXHAUSTED
        element = self._sequence[self._front]
        self._front += 1
        return element

    def take_last(self):
        """
        Remove and return the last remaining element, or
        :py:data:`EXHAUSTED`.
        """
        if self._front >= self._back:
            return EXHAUSTED
        self._back -= 1
        return self._sequence[self._back]

    @property
    def remaining(self):
        """
        The number of elements left. Unlike :py:func:`len`, this is not
        limited to ``sys.maxsize``.
        """
        return self._back - self._front

    def __len__(self):
        return self.remaining

    def __iter__(self):
        return self

    def __next__(self):
        element = self.take_next()
        if element is EXHAUSTED:
            raise StopIteration()
        return element

    def __reversed__(self):
        while True:
            element = self.take_last()
            if element is EXHAUSTED:
                return
            yield element

    def __repr__(self):
        return "<{} with {} remaining>".format(type(self).__name__, self.remaining)


def sequence_length(sequence):
    """
    Return the length of a sequence. Ranges longer than ``sys.maxsize``, for
    which :py:func:`len` raises :py:exc:`OverflowError`, have their length
    computed from their bounds.
    """
    try:
        return len(sequence)
    except OverflowError:
        if not isinstance(sequence, range):
            raise
        if sequence.step > 0:
            distance = sequence.stop - sequence.start
            step = sequence.step
        else:
            distance = sequence.start - sequence.stop
            step = -sequence.step
        return max(0, (distance + step - 1) // step)


def is_bidirectional(source):
    """
    Does the provided source support taking elements from the back?
    """
    return callable(getattr(source, "take_last", None))


def as_source(iterable, bidirectional=False):
    """
    Wrap an iterable in a source object.

    Parameters
    ==========
    iterable : iterable or source
        The elements to match. Objects which already provide a ``take_next``
        method are returned unchanged.
    bidirectional : bool
        If True, the returned source must support ``take_last``.

    Raises
    ======
    :py:exc:`~iunpack.exceptions.SourceCapabilityError`
        If ``bidirectional`` is True but the iterable can only be consumed
        from the front.
    """
    if callable(getattr(iterable, "take_next", None)):
        source = iterable
    elif bidirectional and isinstance(iterable, Sequence):
        source = SequenceSource(iterable)
    else:
        source = ForwardSource(iterable)

    if bidirectional and not is_bidirectional(source):
        raise SourceCapabilityError(
            "{} cannot be consumed from the back".format(type(iterable).__name__)
        )

    return source
