"""
:py:mod:`iunpack.coordinator`
=============================

The destructuring coordinator combines the forward matcher
(:py:mod:`iunpack.forward`), tail extractor (:py:mod:`iunpack.tail`), tail
window (:py:mod:`iunpack.window`) and middle collectors
(:py:mod:`iunpack.middle`) according to the
:py:class:`~iunpack.pattern.Strategy` of a pattern.

Three entry points are provided:

* :py:func:`destructure` returns a :py:class:`~iunpack.outcome.Match` or
  :py:class:`~iunpack.outcome.Mismatch`.
* :py:func:`iunpack` passes the outcome to a success or failure
  continuation and returns whatever that continuation returns.
* :py:func:`unpack` returns the bound values or raises
  :py:exc:`~iunpack.exceptions.MismatchError`.

For example::

    >>> from iunpack import iunpack
    >>> iunpack("a, b, *c, d, e", range(8), lambda a, b, c, d, e: (a, b, c, d, e))
    (0, 1, [2, 3, 4, 5], 6, 7)

    >>> iunpack("a, b, c, d, e", range(3), print, on_mismatch=lambda depth: depth)
    3

.. autofunction:: destructure

.. autofunction:: iunpack

.. autofunction:: unpack
"""

import logging

from iunpack.exceptions import MismatchError

from iunpack.sources import as_source

from iunpack.pattern import Strategy

from iunpack.middle import make_collector

from iunpack.outcome import Match, MatchState

from iunpack.forward import match_prefix, check_exhausted

from iunpack.tail import match_suffix_from_back

from iunpack.window import match_suffix_in_window

from iunpack.syntax import compile_pattern

__all__ = [
    "destructure",
    "iunpack",
    "unpack",
]


def destructure(pattern, iterable, containers=None):
    """
    Match the elements of ``iterable`` against ``pattern``.

    Parameters
    ==========
    pattern : :py:class:`~iunpack.pattern.Pattern` or str
        The pattern (or pattern string, see :py:mod:`iunpack.syntax`).
    iterable : iterable or source
        The elements to match. Patterns which take their suffix from the back
        (``*`` middle markers) require a sequence or bidirectional source.
    containers : {name: type, ...} or None
        Extra container kinds which a pattern string may name, see
        :py:func:`~iunpack.syntax.parse_pattern`. Ignored for
        :py:class:`~iunpack.pattern.Pattern` objects.

    Returns
    =======
    outcome : :py:class:`~iunpack.outcome.Match` or :py:class:`~iunpack.outcome.Mismatch`

    Raises
    ======
    :py:exc:`~iunpack.exceptions.SourceCapabilityError`
        If the pattern needs a bidirectional source but ``iterable`` only
        supports forward iteration.
    """
    pattern = compile_pattern(pattern, containers)
    state = MatchState(as_source(iterable, pattern.requires_bidirectional))

    outcome = _run_strategy(pattern, state)
    logging.debug(
        "Destructured with '%s' (%s strategy): %r",
        pattern,
        pattern.strategy.name,
        outcome,
    )
    return outcome


def _run_strategy(pattern, state):
    if not match_prefix(state, pattern.prefix):
        return state.mismatch()

    if pattern.strategy is Strategy.fixed:
        if not check_exhausted(state):
            return state.mismatch()
        return Match.from_bindings(state.bindings)

    # Position of the middle's binding, between the prefix and suffix
    # bindings
    middle_index = len(state.bindings)

    if pattern.strategy is Strategy.resumable:
        if not match_suffix_from_back(state, pattern.suffix):
            return state.mismatch()
        state.bindings.insert(middle_index, (pattern.middle.name, state.source))
        return Match.from_bindings(state.bindings)

    collector = make_collector(pattern.middle)

    if pattern.strategy is Strategy.bidirectional:
        if not match_suffix_from_back(state, pattern.suffix):
            return state.mismatch()
        if collector is not None:
            collector.drain(state.source)
    elif pattern.strategy is Strategy.forward_window:
        if not match_suffix_in_window(state, pattern.suffix, collector):
            return state.mismatch()
    elif pattern.strategy is Strategy.forward_rest:
        # NB: When discarding, the rest of the source is left unconsumed
        if collector is not None:
            collector.drain(state.source)

    if collector is not None:
        state.bindings.insert(middle_index, (pattern.middle.name, collector.finish()))

    return Match.from_bindings(state.bindings)


def iunpack(
    pattern, iterable, on_match, on_mismatch=None, default=None, containers=None
):
    """
    Destructure ``iterable`` and continue with whichever of the success or
    failure continuations applies.

    Parameters
    ==========
    pattern : :py:class:`~iunpack.pattern.Pattern` or str
    iterable : iterable or source
    on_match : callable
        On success, called with the bound values as positional arguments, in
        pattern order.
    on_mismatch : callable or None
        On failure, called with the mismatch depth.
    default
        On failure, when ``on_mismatch`` is None, returned as-is.
    containers : {name: type, ...} or None
        As for :py:func:`destructure`.

    Returns
    =======
    The value returned by the continuation which ran.
    """
    outcome = destructure(pattern, iterable, containers)
    if outcome:
        return on_match(*outcome.values)
    elif on_mismatch is not None:
        return on_mismatch(outcome.depth)
    else:
        return default


def unpack(pattern, iterable, containers=None):
    """
    Destructure ``iterable``, returning the tuple of bound values in pattern
    order. ``containers`` is as for :py:func:`destructure`.

    Raises
    ======
    :py:exc:`~iunpack.exceptions.MismatchError`
        If the sequence does not match.
    """
    pattern = compile_pattern(pattern, containers)
    outcome = destructure(pattern, iterable)
    if not outcome:
        raise MismatchError(pattern, outcome.depth)
    return outcome.values
