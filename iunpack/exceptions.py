"""
:py:mod:`iunpack.exceptions`
============================

Exception types used in this library.

Note that a sequence which does not fit a pattern is *not* an exceptional
condition: :py:func:`~iunpack.coordinator.destructure` reports it by
returning a :py:class:`~iunpack.outcome.Mismatch`. The only function which
raises on a mismatch is :py:func:`~iunpack.coordinator.unpack`, which raises
:py:exc:`MismatchError` in the same way Python's own unpacking assignment
raises :py:exc:`ValueError`.
"""

__all__ = [
    "PatternSyntaxError",
    "UnknownContainerError",
    "InvalidPatternError",
    "SourceCapabilityError",
    "MismatchError",
]


class PatternSyntaxError(ValueError):
    """
    Thrown when a pattern string is provided which could not be parsed.
    """


class UnknownContainerError(PatternSyntaxError):
    """
    Thrown when a pattern string names a container type (e.g. ``*rest: bag``)
    which is not in the container registry.
    """


class InvalidPatternError(ValueError):
    """
    Thrown when a :py:class:`~iunpack.pattern.Pattern` is constructed whose
    parts cannot be combined, for example when the same name is bound twice.
    """


class SourceCapabilityError(TypeError):
    """
    Thrown when a pattern needs to consume elements from the back of a source
    which only supports forward iteration.

    Use a :py:class:`~collections.abc.Sequence` (e.g. a :py:class:`list` or
    :py:class:`range`) or a forward-only middle marker (``**``) instead.
    """


class MismatchError(ValueError):
    """
    Thrown by :py:func:`~iunpack.coordinator.unpack` when a sequence does not
    fit a pattern.

    Attributes
    ==========
    pattern : :py:class:`~iunpack.pattern.Pattern`
        The pattern which was not matched.
    depth : int
        The number of elements consumed and accepted before the failure.
    """

    def __init__(self, pattern, depth):
        super(MismatchError, self).__init__(pattern, depth)
        self.pattern = pattern
        self.depth = depth

    def __str__(self):
        return "Sequence does not match '{}' (depth {})".format(
            self.pattern, self.depth
        )

    def explain(self):
        """
        Produce a human readable explanation of the possible causes of the
        mismatch. See :py:meth:`~iunpack.pattern.Pattern.explain_mismatch`.
        """
        return self.pattern.explain_mismatch(self.depth)
