r"""
:py:mod:`iunpack.syntax`
========================

This module parses the textual pattern syntax into
:py:class:`~iunpack.pattern.Pattern` objects.


Pattern syntax
--------------

A pattern is a comma separated list of slots with at most one middle marker
among them. Whitespace is ignored and a trailing comma is permitted. For
example::

    first, second, *middle, last

Slots
`````

``name``
    Binds the element to ``name``. Any identifier other than ``_`` (including
    identifiers starting with an underscore, e.g. ``_unused``) binds.
``_``
    Accepts any element and discards it.
``3``, ``-1.5``, ``0x10``, ``'text'``, ``None``, ``True``, ``False``
    Accepts only elements equal to the literal.
``2..10``, ``2..=10``, ``2..``, ``..10``, ``..=10``
    Accepts only elements in the half-open (``..``) or closed (``..=``)
    range. Bounds may be any literal.
``0 | 1 | 2``
    Accepts an element accepted by any of the alternatives. Alternatives may
    not bind names.
``name @ slot``
    Binds an element accepted by a guard (literal, range, alternatives or
    nested pattern) to ``name``.
``[pattern]`` or ``(pattern, ...)``
    Accepts iterable elements which match the nested pattern; the nested
    pattern's bindings join those of the outer pattern. Parentheses without
    a comma (e.g. ``(0 | 1)``) merely group.

Middle markers
``````````````

=====================  ========================================================
Marker                 Meaning
=====================  ========================================================
``*``                  Discard the middle; suffix taken from the back.
``*name``              Collect the middle into a :py:class:`list`.
``*name: kind``        Collect the middle into a container of the named kind
                       (see :py:data:`~iunpack.middle.CONTAINER_TYPES`).
``*=name``             Bind the partially consumed source itself to ``name``.
``**``                 Discard the middle; forward-only consumption.
``**name``             Collect the middle; forward-only consumption.
``**name: kind``       As above, into a container of the named kind.
=====================  ========================================================

The ``*`` forms require sources which may be consumed from the back (i.e.
sequences). The ``**`` forms work with any iterable, extracting the suffix
with a sliding window (see :py:mod:`iunpack.window`).


API
---

.. autofunction:: parse_pattern

.. autofunction:: compile_pattern


Internals
---------

Like many small parsers, this one is split into a tokenizer
(:py:func:`tokenize_pattern`) and a recursive descent parser
(:py:func:`parse_items` and friends).

.. autofunction:: tokenize_pattern

.. autofunction:: parse_items

.. autofunction:: parse_item

.. autofunction:: parse_slot

.. autofunction:: parse_atom
"""

import re

from ast import literal_eval

from collections import namedtuple

from iunpack.exceptions import PatternSyntaxError, UnknownContainerError

from iunpack.slots import (
    Slot,
    Bind,
    Discard,
    Guard,
    Literal,
    InRange,
    OneOf,
    Nested,
)

from iunpack.middle import (
    CONTAINER_TYPES,
    CollectAll,
    CollectNone,
    ExposeRemaining,
)

from iunpack.pattern import Pattern

__all__ = [
    "parse_pattern",
    "compile_pattern",
    "tokenize_pattern",
]


TOKEN_REGEX = re.compile(
    r"(?P<string>'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\")|"
    r"(?P<number>-?(?:0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|"
    r"\d+(?:\.\d+)?(?:[eE][-+]?\d+)?))|"
    r"(?P<range>\.\.=?)|"
    r"(?P<middle>\*\*|\*=|\*)|"
    r"(?P<name>[A-Za-z_]\w*)|"
    r"(?P<punctuation>[,:|@()\[\]])"
)
"""
A regular expression which matches a single token in the pattern syntax.
"""

KEYWORD_LITERALS = {
    "None": None,
    "True": True,
    "False": False,
}

CLOSING_BRACKETS = {
    "(": ")",
    "[": "]",
}

MiddleMarker = namedtuple("MiddleMarker", "spec,bidirectional,offset")
"""A middle marker found while parsing a list of items."""


def tokenize_pattern(pattern_string):
    """
    A generator which tokenizes a pattern string into (token_type,
    token_value, offset) 3-tuples.

    Token types are:

    * ``"string"`` (value is the quoted string, including quotes)
    * ``"number"`` (value is the number's text)
    * ``"range"`` (value is ``..`` or ``..=``)
    * ``"middle"`` (value is one of ``*``, ``**`` or ``*=``)
    * ``"name"`` (value is the identifier)
    * ``"punctuation"`` (value is one of ``,:|@()[]``)

    Throws a :py:exc:`~iunpack.exceptions.PatternSyntaxError` if an invalid
    character is encountered.
    """
    offset = 0
    while True:
        # Skip whitespace
        ws_match = re.match(r"\s*", pattern_string)
        pattern_string = pattern_string[ws_match.end() :]
        offset += ws_match.end()

        # Special case: End of string
        if not pattern_string:
            break

        t_match = TOKEN_REGEX.match(pattern_string)
        if not t_match:
            raise PatternSyntaxError("Unexpected text at position {}".format(offset))
        [(token_type, token_value)] = [
            (t, v) for t, v in t_match.groupdict().items() if v is not None
        ]
        yield (token_type, token_value, offset)
        pattern_string = pattern_string[t_match.end() :]
        offset += t_match.end()


def _at(tokens, token_type, token_value=None):
    """
    Is the next token of the given type (and value, if given)?
    """
    if not tokens:
        return False
    if tokens[-1][0] != token_type:
        return False
    return token_value is None or tokens[-1][1] == token_value


def _unexpected(tokens):
    if not tokens:
        return PatternSyntaxError("Unexpected end of pattern")
    else:
        return PatternSyntaxError(
            "Unexpected '{}' at position {}".format(tokens[-1][1], tokens[-1][2])
        )


def _expect(tokens, token_type, token_value=None):
    """
    Pop the next token, which must have the specified type (and value),
    returning its value.
    """
    if not _at(tokens, token_type, token_value):
        raise _unexpected(tokens)
    return tokens.pop(-1)[1]


def _at_closing(tokens, closing):
    return closing is not None and _at(tokens, "punctuation", closing)


def _at_literal(tokens):
    return (
        _at(tokens, "string")
        or _at(tokens, "number")
        or (_at(tokens, "name") and tokens[-1][1] in KEYWORD_LITERALS)
    )


def _parse_literal(tokens):
    if not _at_literal(tokens):
        raise _unexpected(tokens)
    token_type, token_value, offset = tokens.pop(-1)
    if token_type == "name":
        return KEYWORD_LITERALS[token_value]
    try:
        return literal_eval(token_value)
    except (ValueError, SyntaxError):
        raise PatternSyntaxError(
            "Invalid literal {} at position {}".format(token_value, offset)
        )


def parse_items(tokens, container_types, closing=None):
    """
    Parse a comma separated list of items (slots and middle markers) from
    the token list (which holds the next token at the end).

    Stops at the end of the tokens or at the punctuation token ``closing``
    (which is not consumed).

    Returns a (items, saw_comma) tuple where items is a list of
    :py:class:`~iunpack.slots.Slot` and :py:class:`MiddleMarker` objects and
    saw_comma indicates whether any comma was consumed.
    """
    items = []
    saw_comma = False
    while tokens and not _at_closing(tokens, closing):
        items.append(parse_item(tokens, container_types))
        if not tokens or _at_closing(tokens, closing):
            break
        _expect(tokens, "punctuation", ",")
        saw_comma = True
    return items, saw_comma


def parse_item(tokens, container_types):
    """
    Parse either a middle marker (returning a :py:class:`MiddleMarker`) or a
    slot (returning a :py:class:`~iunpack.slots.Slot`).
    """
    if not _at(tokens, "middle"):
        return parse_slot(tokens, container_types)

    _, marker, offset = tokens.pop(-1)

    if marker == "*=":
        name = _expect(tokens, "name")
        if name == "_" or name in KEYWORD_LITERALS:
            raise PatternSyntaxError(
                "'*=' requires a name at position {}".format(offset)
            )
        return MiddleMarker(ExposeRemaining(name), True, offset)

    name = None
    container = list
    if _at(tokens, "name") and tokens[-1][1] not in KEYWORD_LITERALS:
        name = tokens.pop(-1)[1]
        if _at(tokens, "punctuation", ":"):
            tokens.pop(-1)
            if not _at(tokens, "name"):
                raise _unexpected(tokens)
            _, kind, kind_offset = tokens.pop(-1)
            if kind not in container_types:
                raise UnknownContainerError(
                    "Unknown container type '{}' at position {}".format(
                        kind, kind_offset
                    )
                )
            container = container_types[kind]

    if name is None or name == "_":
        spec = CollectNone()
    else:
        spec = CollectAll(name, container)

    return MiddleMarker(spec, marker == "*", offset)


def parse_slot(tokens, container_types):
    """
    Parse a (possibly named) slot, including any ``|`` separated
    alternatives.
    """
    name = None
    if (
        len(tokens) >= 2
        and tokens[-1][0] == "name"
        and tokens[-1][1] not in KEYWORD_LITERALS
        and tokens[-2][0:2] == ("punctuation", "@")
    ):
        name = tokens.pop(-1)[1]
        at_offset = tokens.pop(-1)[2]

    alternatives = [parse_atom(tokens, container_types)]
    while _at(tokens, "punctuation", "|"):
        bar_offset = tokens.pop(-1)[2]
        alternatives.append(parse_atom(tokens, container_types))
        if alternatives[-1].names() or alternatives[0].names():
            raise PatternSyntaxError(
                "Alternatives may not bind names (at position {})".format(
                    bar_offset
                )
            )

    if len(alternatives) == 1:
        slot = alternatives[0]
    else:
        slot = OneOf(*alternatives)

    if name is not None and name != "_":
        if isinstance(slot, Discard):
            slot = Bind(name)
        elif isinstance(slot, Guard) and slot.name is None:
            slot = slot.bind_as(name)
        else:
            raise PatternSyntaxError(
                "'@' must be followed by an unnamed guard at position {}".format(
                    at_offset
                )
            )

    return slot


def parse_atom(tokens, container_types):
    """
    Parse a single name, literal, range or bracketed sub-pattern.
    """
    if not tokens:
        raise _unexpected(tokens)

    token_type, token_value, offset = tokens[-1]

    if token_type == "name" and token_value not in KEYWORD_LITERALS:
        tokens.pop(-1)
        if token_value == "_":
            return Discard()
        else:
            return Bind(token_value)

    if token_type == "range":
        tokens.pop(-1)
        return InRange(None, _parse_literal(tokens), inclusive=token_value == "..=")

    if _at_literal(tokens):
        value = _parse_literal(tokens)
        if not _at(tokens, "range"):
            return Literal(value)

        operator = tokens.pop(-1)[1]
        if operator == "..=":
            return InRange(value, _parse_literal(tokens), inclusive=True)
        elif _at_literal(tokens):
            return InRange(value, _parse_literal(tokens))
        else:
            return InRange(value, None)

    if token_type == "punctuation" and token_value in CLOSING_BRACKETS:
        tokens.pop(-1)
        closing = CLOSING_BRACKETS[token_value]
        items, saw_comma = parse_items(tokens, container_types, closing)
        if not _at(tokens, "punctuation", closing):
            raise PatternSyntaxError(
                "Unmatched '{}' at position {}".format(token_value, offset)
            )
        tokens.pop(-1)

        # Parentheses around a single slot just group it
        if (
            token_value == "("
            and not saw_comma
            and len(items) == 1
            and isinstance(items[0], Slot)
        ):
            return items[0]
        return Nested(build_pattern(items))

    raise _unexpected(tokens)


def build_pattern(items):
    """
    Assemble a :py:class:`~iunpack.pattern.Pattern` from a list of items
    produced by :py:func:`parse_items`.
    """
    prefix = []
    suffix = []
    middle = None
    bidirectional = True
    for item in items:
        if isinstance(item, MiddleMarker):
            if middle is not None:
                raise PatternSyntaxError(
                    "Multiple middle markers at position {}".format(item.offset)
                )
            middle = item.spec
            bidirectional = item.bidirectional
        elif middle is None:
            prefix.append(item)
        else:
            suffix.append(item)

    return Pattern(prefix, middle, suffix, bidirectional)


def parse_pattern(pattern_string, containers=None):
    """
    Parse a pattern string into a :py:class:`~iunpack.pattern.Pattern`.

    Parameters
    ==========
    pattern_string : str
        The pattern, see the module documentation for the syntax.
    containers : {name: type, ...} or None
        Additional container kinds which may be named in ``*name: kind``
        middle markers, on top of
        :py:data:`~iunpack.middle.CONTAINER_TYPES`.

    Raises
    ======
    :py:exc:`~iunpack.exceptions.PatternSyntaxError`
    :py:exc:`~iunpack.exceptions.InvalidPatternError`
        If the pattern parses but binds a name twice.
    """
    container_types = dict(CONTAINER_TYPES)
    container_types.update(containers or {})

    # NB: Reversed so the next token is always at the end of the list
    tokens = list(tokenize_pattern(pattern_string))
    tokens.reverse()

    items, _ = parse_items(tokens, container_types)
    if tokens:
        raise _unexpected(tokens)

    return build_pattern(items)


def compile_pattern(pattern, containers=None):
    """
    Return ``pattern`` if it is already a :py:class:`~iunpack.pattern.Pattern`
    otherwise parse it with :py:func:`parse_pattern`.
    """
    if isinstance(pattern, Pattern):
        return pattern
    elif isinstance(pattern, str):
        return parse_pattern(pattern, containers)
    else:
        raise TypeError(
            "Expected a Pattern or pattern string, got {}".format(
                type(pattern).__name__
            )
        )
