"""
The :py:mod:`iunpack` module destructures sequences produced by iterables
against patterns with a fixed-length prefix, an optional variable-length
middle and a fixed-length suffix::

    >>> from iunpack import unpack
    >>> unpack("first, *middle, last", [1, 2, 3, 4])
    (1, [2, 3], 4)

Unlike Python's own starred assignment, patterns may also:

* check elements as well as binding them (``0 | 1, 2..=10, 'x'``),
* collect the middle into any container (``*middle: set``),
* expose the unconsumed middle as a live source (``*=rest``) rather than
  materialising it,
* extract a suffix from a forward-only iterator in a single pass and
  constant space (``first, **middle, last``),
* report *how far* matching got when it fails, rather than raising.


Main components
---------------

Patterns (:py:mod:`iunpack.pattern`) are built from slots
(:py:mod:`iunpack.slots`) and a middle specification
(:py:mod:`iunpack.middle`), or parsed from text (:py:mod:`iunpack.syntax`).

Elements are pulled from sources (:py:mod:`iunpack.sources`) which support
either forward consumption alone or consumption from both ends.

The coordinator (:py:mod:`iunpack.coordinator`) picks a strategy for each
pattern and drives the forward matcher (:py:mod:`iunpack.forward`), the
bidirectional tail extractor (:py:mod:`iunpack.tail`) and the single-pass
tail window (:py:mod:`iunpack.window`), producing an outcome
(:py:mod:`iunpack.outcome`).


Failures
--------

A sequence which does not fit a pattern produces a
:py:class:`~iunpack.outcome.Mismatch` carrying a single number, its *depth*:
the count of elements pulled from the source and accepted by a slot before
the failure. Too few elements, too many elements and rejected elements all
produce a mismatch; see
:py:meth:`~iunpack.pattern.Pattern.explain_mismatch` to work backward from
a depth to its possible causes.
"""

from iunpack.version import __version__

from iunpack.exceptions import *

from iunpack.sources import *

from iunpack.slots import *

from iunpack.middle import *

from iunpack.pattern import *

from iunpack.outcome import *

from iunpack.syntax import *

from iunpack.coordinator import *
