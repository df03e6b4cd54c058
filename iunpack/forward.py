"""
:py:mod:`iunpack.forward`
=========================

The forward matcher: consumes prefix slots one element at a time from the
front of a source.
"""

from iunpack.sources import EXHAUSTED

from iunpack.slots import REJECTED

__all__ = [
    "match_prefix",
    "check_exhausted",
]


def match_prefix(state, slots):
    """
    Pull one element from the front of ``state.source`` for each slot, in
    order, binding the results into ``state``.

    Returns True if every slot accepted its element. Returns False as soon as
    the source is exhausted or a slot rejects its element, in which case
    ``state.depth`` is the index of the failing slot (plus whatever depth the
    state already had).
    """
    for slot in slots:
        element = state.source.take_next()
        if element is EXHAUSTED:
            return False

        bound = slot.test_and_bind(element)
        if bound is REJECTED:
            return False

        state.bindings.extend(bound)
        state.depth += 1

    return True


def check_exhausted(state):
    """
    Return True if the source has no more elements. Performs a single pull:
    if an element is present it is lost.
    """
    return state.source.take_next() is EXHAUSTED
