"""
:py:mod:`iunpack.window`
========================

The single-pass tail window: matches a fixed-length suffix against a source
which can only be consumed forward, in one pass and constant space.


Algorithm
---------

Once the prefix has been matched, a circular buffer of ``k`` elements (the
suffix length) is filled from the source. Thereafter each new element
evicts the element at the buffer's cursor, is stored in its place, and the
cursor advances (modulo ``k``)::

    stream:    p0 p1 | 2  3  4  5  6  7
                     |
    filled:    [2, 3]          cursor=0
    push 4:    [4, 3]  evict 2 cursor=1
    push 5:    [4, 5]  evict 3 cursor=0
    push 6:    [6, 5]  evict 4 cursor=1
    push 7:    [6, 7]  evict 5 cursor=0

Evicted elements leave the buffer in the order they appeared in the stream
and together form the middle region. When the source is exhausted the
buffer holds exactly the last ``k`` elements, rotated left by the cursor
position; undoing the rotation gives them in stream order, after which the
suffix slots are applied.

Because the position of a failing suffix slot within the window is not
tracked, any rejection by a suffix slot reports a depth of ``prefix length +
suffix length``.

.. autoclass:: TailWindow
    :members:

.. autofunction:: match_suffix_in_window
"""

from iunpack.sources import EXHAUSTED

from iunpack.slots import REJECTED

__all__ = [
    "TailWindow",
    "match_suffix_in_window",
]


class TailWindow(object):
    """
    A fixed-size circular buffer retaining the most recent ``size``
    elements of a stream.
    """

    def __init__(self, size):
        if size < 1:
            raise ValueError("Window size must be at least 1 (got {})".format(size))
        self.size = size
        self._buffer = []
        self._cursor = 0

    def fill(self, source):
        """
        Pull elements from ``source`` until the window is full or the source
        is exhausted. Returns the number of elements held.
        """
        while len(self._buffer) < self.size:
            element = source.take_next()
            if element is EXHAUSTED:
                break
            self._buffer.append(element)
        return len(self._buffer)

    def push(self, element):
        """
        Store a new element in a full window, returning the oldest element
        which it replaces.
        """
        evicted = self._buffer[self._cursor]
        self._buffer[self._cursor] = element
        self._cursor = (self._cursor + 1) % self.size
        return evicted

    def contents(self):
        """
        Return the elements in the window as a list in stream order.
        """
        return self._buffer[self._cursor :] + self._buffer[: self._cursor]


def match_suffix_in_window(state, slots, collector=None):
    """
    Match ``slots`` against the last elements of the forward-only
    ``state.source``, consuming it entirely.

    Parameters
    ==========
    state : :py:class:`~iunpack.outcome.MatchState`
    slots : [:py:class:`~iunpack.slots.Slot`, ...]
        The (non-empty) suffix slots, left-to-right.
    collector : :py:class:`~iunpack.middle.Collector` or None
        If given, receives every middle element in stream order. If None,
        middle elements are dropped.

    Returns True on success. On failure returns False with ``state.depth``
    being the depth to report.
    """
    window = TailWindow(len(slots))

    held = window.fill(state.source)
    state.depth += held
    if held < window.size:
        return False

    while True:
        element = state.source.take_next()
        if element is EXHAUSTED:
            break
        evicted = window.push(element)
        if collector is not None:
            collector.insert(evicted)

    bindings = []
    for slot, element in zip(slots, window.contents()):
        bound = slot.test_and_bind(element)
        if bound is REJECTED:
            return False
        bindings.extend(bound)

    state.bindings.extend(bindings)
    return True
