"""
:py:mod:`iunpack.slots`
=======================

A slot is a single fixed position in the prefix or suffix of a
:py:class:`~iunpack.pattern.Pattern`. Each slot is offered exactly one
element via :py:meth:`Slot.test_and_bind` which either accepts the element,
returning the (possibly empty) tuple of ``(name, value)`` bindings it
produces, or returns :py:data:`REJECTED`.

A rejected element is never offered to another slot: the whole match fails
at that position.

The following slot types are provided:

* :py:class:`Bind` -- accepts any element and binds it to a name.
* :py:class:`Discard` -- accepts any element and binds nothing (``_``).
* :py:class:`Guard` -- accepts elements satisfying a predicate, optionally
  binding them to a name. Specialised forms are:

  * :py:class:`Literal` -- equality with a constant.
  * :py:class:`InRange` -- membership of a half-open or closed range.
  * :py:class:`OneOf` -- any one of several (unnamed) alternative slots.
  * :py:class:`Nested` -- the element is itself an iterable which matches a
    nested pattern, whose bindings are added to those of the enclosing
    pattern.

Each guard's predicate is evaluated exactly once per element offered.

Slots display in the pattern syntax (see :py:mod:`iunpack.syntax`). Slots with
no textual form display inside angle brackets, which the parser rejects: a
:py:class:`Guard` shows its description (``<is_even>``), a :py:class:`Literal`
whose value has no literal syntax shows ``<== inf>`` and a range with such a
bound shows ``<0..inf>``.

.. autodata:: REJECTED

.. autofunction:: literal_text

.. autoclass:: Slot
    :members:

.. autoclass:: Bind

.. autoclass:: Discard

.. autoclass:: Guard
    :members: accepts, bind_as

.. autoclass:: Literal

.. autoclass:: InRange

.. autoclass:: OneOf

.. autoclass:: Nested
"""

from copy import copy

from ast import literal_eval

from collections.abc import Iterable, Sequence

from sentinels import Sentinel

from iunpack.exceptions import InvalidPatternError

__all__ = [
    "REJECTED",
    "literal_text",
    "Slot",
    "Bind",
    "Discard",
    "Guard",
    "Literal",
    "InRange",
    "OneOf",
    "Nested",
]


REJECTED = Sentinel("REJECTED")
"""
Returned by :py:meth:`Slot.test_and_bind` when a slot does not accept the
element offered to it.
"""


def literal_text(value):
    """
    Return the pattern syntax for a literal value, or None if the value has no
    literal form (e.g. ``float("inf")`` or a tuple).
    """
    if value is None or type(value) in (bool, int, float, str):
        text = repr(value)
        try:
            parsed = literal_eval(text)
        except (ValueError, SyntaxError):
            return None
        if parsed == value:
            return text
    return None


class Slot(object):
    """
    Base class for all slots.
    """

    def names(self):
        """
        Return the tuple of names this slot binds, in binding order.
        """
        return ()

    def test_and_bind(self, element):
        """
        Offer an element to this slot.

        Returns a tuple of ``(name, value)`` pairs if the element is
        accepted, or :py:data:`REJECTED` otherwise.
        """
        raise NotImplementedError()

    def _key(self):
        raise NotImplementedError()

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return "{}({})".format(
            type(self).__name__, ", ".join(map(repr, self._key()))
        )


class Bind(Slot):
    """
    A bare bind: accepts any element and binds it to ``name``.
    """

    def __init__(self, name):
        self.name = name

    def names(self):
        return (self.name,)

    def test_and_bind(self, element):
        return ((self.name, element),)

    def _key(self):
        return (self.name,)

    def __str__(self):
        return self.name


class Discard(Slot):
    """
    Accepts any element without binding it.
    """

    def test_and_bind(self, element):
        return ()

    def _key(self):
        return ()

    def __str__(self):
        return "_"


class Guard(Slot):
    """
    A guarded bind: accepts elements for which ``predicate(element)`` is
    true.

    Parameters
    ==========
    predicate : callable
        Called once per element offered to this slot.
    name : str or None
        If not None, accepted elements are bound to this name.
    description : str or None
        Used when displaying the slot. Defaults to the predicate's
        ``__name__``.
    """

    def __init__(self, predicate, name=None, description=None):
        self.predicate = predicate
        self.name = name
        self.description = description or getattr(
            predicate, "__name__", repr(predicate)
        )

    def accepts(self, element):
        """
        Test the element against this guard, without binding it.
        """
        return bool(self.predicate(element))

    def bind_as(self, name):
        """
        Return a copy of this guard which binds accepted elements to
        ``name``.
        """
        if self.name is not None:
            raise InvalidPatternError(
                "Slot '{}' is already bound to '{}'".format(self, self.name)
            )
        renamed = copy(self)
        renamed.name = name
        return renamed

    def names(self):
        return () if self.name is None else (self.name,)

    def test_and_bind(self, element):
        if not self.accepts(element):
            return REJECTED
        return () if self.name is None else ((self.name, element),)

    def _key(self):
        return (self.predicate, self.name)

    def _format_guard(self):
        return "<{}>".format(self.description)

    def __str__(self):
        if self.name is None:
            return self._format_guard()
        else:
            return "{} @ {}".format(self.name, self._format_guard())


class Literal(Guard):
    """
    Accepts elements equal to ``value``.
    """

    def __init__(self, value, name=None):
        self.value = value
        super(Literal, self).__init__(None, name, repr(value))

    def accepts(self, element):
        return bool(element == self.value)

    def _key(self):
        return (self.value, self.name)

    def _format_guard(self):
        text = literal_text(self.value)
        if text is None:
            return "<== {!r}>".format(self.value)
        else:
            return text


class InRange(Guard):
    """
    Accepts elements within a range.

    Parameters
    ==========
    start : value or None
        The inclusive lower bound (None for no lower bound).
    stop : value or None
        The upper bound (None for no upper bound).
    inclusive : bool
        If True, ``stop`` itself is in the range (``start..=stop``),
        otherwise the range is half-open (``start..stop``).
    name : str or None

    Elements which cannot be ordered against the bounds (e.g. a string offered
    to an integer range) are rejected.
    """

    def __init__(self, start, stop, inclusive=False, name=None):
        if inclusive and stop is None:
            raise InvalidPatternError("An inclusive range must have an upper bound")
        self.start = start
        self.stop = stop
        self.inclusive = inclusive
        super(InRange, self).__init__(None, name, self._format_guard())

    def accepts(self, element):
        try:
            if self.start is not None and element < self.start:
                return False
            if self.stop is not None:
                if self.inclusive:
                    return element <= self.stop
                else:
                    return element < self.stop
            return True
        except TypeError:
            # Unorderable types
            return False

    def _key(self):
        return (self.start, self.stop, self.inclusive, self.name)

    def _format_guard(self):
        bounds = []
        for bound in (self.start, self.stop):
            if bound is None:
                bounds.append("")
            else:
                bounds.append(literal_text(bound))

        if None in bounds:
            return "<{}{}{}>".format(
                "" if self.start is None else repr(self.start),
                "..=" if self.inclusive else "..",
                "" if self.stop is None else repr(self.stop),
            )
        else:
            return "{}{}{}".format(
                bounds[0], "..=" if self.inclusive else "..", bounds[1]
            )


class OneOf(Guard):
    """
    Accepts elements accepted by any of the alternative slots, tried in
    order.

    The alternatives may not bind names themselves; use ``name`` to bind the
    accepted element.
    """

    def __init__(self, *alternatives, **kwargs):
        name = kwargs.pop("name", None)
        if kwargs:
            raise TypeError(
                "OneOf() got unexpected keyword argument(s) {}".format(
                    ", ".join(map(repr, kwargs)),
                )
            )
        for alternative in alternatives:
            if alternative.names():
                raise InvalidPatternError(
                    "Alternative '{}' may not bind names".format(alternative)
                )
        self.alternatives = alternatives
        super(OneOf, self).__init__(None, name, self._format_guard())

    def accepts(self, element):
        return any(
            alternative.test_and_bind(element) is not REJECTED
            for alternative in self.alternatives
        )

    def _key(self):
        return (self.alternatives, self.name)

    def _format_guard(self):
        return " | ".join(map(str, self.alternatives))


class Nested(Guard):
    """
    A structural match: accepts iterable elements which themselves match
    ``pattern``.

    The bindings produced are ``name`` (if given, bound to the whole element)
    followed by the bindings of the nested pattern.

    Non-iterable elements, and non-sequence elements offered to a nested
    pattern which must consume from the back, are rejected.
    """

    def __init__(self, pattern, name=None):
        self.pattern = pattern
        super(Nested, self).__init__(None, name, self._format_guard())

    def accepts(self, element):
        return self.test_and_bind(element) is not REJECTED

    def names(self):
        return super(Nested, self).names() + self.pattern.names

    def test_and_bind(self, element):
        from iunpack.coordinator import destructure

        if not isinstance(element, Iterable):
            return REJECTED
        if self.pattern.requires_bidirectional and not isinstance(
            element, Sequence
        ):
            return REJECTED

        outcome = destructure(self.pattern, element)
        if not outcome:
            return REJECTED

        bindings = tuple(zip(outcome.names, outcome.values))
        if self.name is None:
            return bindings
        else:
            return ((self.name, element),) + bindings

    def _key(self):
        return (self.pattern, self.name)

    def _format_guard(self):
        return "[{}]".format(self.pattern)
