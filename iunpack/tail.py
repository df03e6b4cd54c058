"""
:py:mod:`iunpack.tail`
======================

The bidirectional tail extractor: consumes suffix slots from the back of a
source which supports taking elements from both ends.
"""

from iunpack.sources import EXHAUSTED

from iunpack.slots import REJECTED

__all__ = [
    "match_suffix_from_back",
]


def match_suffix_from_back(state, slots):
    """
    Match ``slots`` (given in left-to-right order) against the last elements
    of ``state.source``.

    Elements are taken from the back, so the rightmost slot is tried first.
    Each accepted element increments ``state.depth``. Once every slot has
    accepted an element, the bindings are added to ``state`` in
    left-to-right order and True is returned. Returns False on exhaustion or
    rejection.

    On success, whatever remains in the source is the middle region.
    """
    extracted = []
    for slot in reversed(slots):
        element = state.source.take_last()
        if element is EXHAUSTED:
            return False

        bound = slot.test_and_bind(element)
        if bound is REJECTED:
            return False

        extracted.append(bound)
        state.depth += 1

    for bound in reversed(extracted):
        state.bindings.extend(bound)

    return True
