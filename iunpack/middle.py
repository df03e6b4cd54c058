"""
:py:mod:`iunpack.middle`
========================

The middle region of a pattern is the variable-length span of elements left
over between its prefix and suffix. What happens to those elements is
described by one of three middle specifications:

:py:class:`CollectAll`
    Every middle element is inserted, in encounter order, into a new
    container which is bound to a name.

:py:class:`CollectNone`
    Middle elements are discarded.

:py:class:`ExposeRemaining`
    The middle elements are not touched at all: the partially consumed
    source itself is bound to a name so the caller may consume it later.

Containers
----------

The container kind given to :py:class:`CollectAll` is called with no
arguments to create an empty container. Elements are then inserted using the
container's ``append`` method, or failing that its ``add`` method. Container
kinds with neither (e.g. :py:class:`tuple` or :py:class:`frozenset`) are
instead constructed from the complete list of middle elements once they have
all been collected.

The pattern syntax (see :py:mod:`iunpack.syntax`) refers to container kinds by
name, via the :py:data:`CONTAINER_TYPES` registry.

.. autodata:: CONTAINER_TYPES
    :annotation:

.. autoclass:: CollectAll

.. autoclass:: CollectNone

.. autoclass:: ExposeRemaining

.. autoclass:: Collector
    :members:

.. autofunction:: make_collector

.. autofunction:: container_name
"""

from collections import namedtuple, deque

from iunpack.sources import EXHAUSTED

__all__ = [
    "CONTAINER_TYPES",
    "CollectAll",
    "CollectNone",
    "ExposeRemaining",
    "Collector",
    "make_collector",
    "container_name",
]


CONTAINER_TYPES = {
    "list": list,
    "tuple": tuple,
    "set": set,
    "frozenset": frozenset,
    "deque": deque,
}
"""
The container kinds which may be named in a ``*name: kind`` middle marker.
"""


class CollectAll(namedtuple("CollectAll", "name,container")):
    """
    Collect every middle element into a ``container`` (default
    :py:class:`list`) bound to ``name``.
    """

    __slots__ = ()

    def __new__(cls, name, container=list):
        return super(CollectAll, cls).__new__(cls, name, container)


class CollectNone(object):
    """
    Discard the middle elements.
    """

    name = None

    def __eq__(self, other):
        return isinstance(other, CollectNone)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(CollectNone)

    def __repr__(self):
        return "CollectNone()"


ExposeRemaining = namedtuple("ExposeRemaining", "name")
"""
Bind the partially consumed source to ``name`` without consuming the middle
elements.
"""


class Collector(object):
    """
    Accumulates middle elements, in the order inserted, into a container.

    Parameters
    ==========
    container : type
        The container kind (see the module documentation).
    """

    def __init__(self, container):
        self._container_kind = container
        self._container = container()
        self._buffer = None

        self._insert = getattr(self._container, "append", None)
        if self._insert is None:
            self._insert = getattr(self._container, "add", None)
        if self._insert is None:
            self._buffer = []
            self._insert = self._buffer.append

    def insert(self, element):
        """Insert a single element."""
        self._insert(element)

    def drain(self, source):
        """Insert every element remaining in a source, front to back."""
        while True:
            element = source.take_next()
            if element is EXHAUSTED:
                break
            self._insert(element)

    def finish(self):
        """Return the completed container."""
        if self._buffer is not None:
            return self._container_kind(self._buffer)
        else:
            return self._container


def make_collector(middle):
    """
    Return a :py:class:`Collector` for a :py:class:`CollectAll` middle or
    None for any other middle specification.
    """
    if isinstance(middle, CollectAll):
        return Collector(middle.container)
    else:
        return None


def container_name(container):
    """
    Return the name by which a container kind is written in the pattern
    syntax.
    """
    for name, kind in CONTAINER_TYPES.items():
        if kind is container:
            return name
    return getattr(container, "__name__", repr(container))
