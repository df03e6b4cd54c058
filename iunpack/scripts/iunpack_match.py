r"""
.. _iunpack-match:

``iunpack-match``
=================

A command-line utility which destructures a sequence of values read from a
file (or stdin) against a pattern and prints the resulting bindings as JSON.

Usage
-----

By default each line of the input is one (string) element::

    $ printf 'GET\n/index.html\nHTTP/1.1\n' | iunpack-match "method, path, *_"
    {"method": "GET", "path": "/index.html"}

With ``--json`` the input is instead read as a JSON array, which allows
numeric and nested elements to be matched::

    $ echo '[0, 1, 2, 3, 4, 5, 6, 7]' | iunpack-match --json "a, b, **c, 6..8"
    {"a": 0, "b": 1, "c": [2, 3, 4, 5, 6]}

When the input does not match the pattern, the possible causes are
displayed and the command exits with status 2::

    $ echo '[1, 2, 3]' | iunpack-match --json "a, b, c, d, e"
    Mismatch at depth 3
    ===================

    The sequence ended after 3 element(s) or element 3 was rejected by the
    slot 'd'.

    iunpack-match: error: input does not match pattern (see above)

Invalid patterns and unreadable inputs produce an error message and exit
status 1.


Arguments
---------

The complete set of arguments can be listed using ``--help``

.. program-output:: iunpack-match --help

"""

import os
import sys
import json
import logging
import traceback

from argparse import ArgumentParser

from shutil import get_terminal_size

from textwrap import fill

from iunpack import __version__

from iunpack.exceptions import PatternSyntaxError, InvalidPatternError

from iunpack.syntax import parse_pattern

from iunpack.coordinator import destructure


def read_lines(filename):
    """
    A generator yielding the lines of a file (without their newline
    characters). The file name ``-`` means stdin.
    """
    if filename == "-":
        for line in sys.stdin:
            yield line.rstrip("\r\n")
    else:
        with open(filename, "r") as f:
            for line in f:
                yield line.rstrip("\r\n")


def read_json(filename):
    """
    Read a JSON array from a file (``-`` means stdin).
    """
    if filename == "-":
        elements = json.load(sys.stdin)
    else:
        with open(filename, "r") as f:
            elements = json.load(f)

    if not isinstance(elements, list):
        raise ValueError("input is not a JSON array")

    return elements


def to_json_compatible(value):
    """
    A ``default`` function for :py:func:`json.dumps` which renders collected
    containers and exposed sources as JSON arrays.
    """
    try:
        return list(value)
    except TypeError:
        raise TypeError(
            "Object of type {} is not JSON serializable".format(type(value).__name__)
        )


def format_mismatch(pattern, depth):
    """
    Produce a human readable description of a mismatch.
    """
    terminal_width = get_terminal_size()[0]

    title = "Mismatch at depth {}".format(depth)

    out = ""
    out += title + "\n"
    out += ("=" * len(title)) + "\n"
    out += "\n"
    out += fill(pattern.explain_mismatch(depth), terminal_width) + "\n"
    return out


def print_error(message, verbose=0):
    """
    Print an error message to stderr.
    """
    # Avoid interleaving with stdout
    sys.stdout.flush()

    if verbose >= 1 and sys.exc_info()[0] is not None:
        traceback.print_exc()

    prog = os.path.basename(sys.argv[0])
    sys.stderr.write("{}: error: {}\n".format(prog, message))


def parse_args(*args, **kwargs):
    """
    Parse a set of command line arguments. Returns a :py:mod:`argparse`
    ``args`` object with the following fields:

    * pattern (str): The pattern to match.
    * input (str): The input filename ("-" for stdin).
    * json (bool): True if the input is a JSON array.
    * verbose (int): The verbosity level.
    """
    parser = ArgumentParser(
        description="""
        Destructure a sequence of values against a pattern and print the
        bindings as a JSON object.
    """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    parser.add_argument(
        "pattern",
        help="""
            The pattern to match, e.g. "first, *middle, last".
        """,
    )

    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="""
            The file to read elements from. Use '-' for stdin. (Default:
            %(default)s).
        """,
    )

    parser.add_argument(
        "--json",
        "-j",
        action="store_true",
        default=False,
        help="""
            Read the input as a JSON array rather than one string element per
            line.
        """,
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="""
            Increase logging verbosity and show full Python stack-traces on
            failure. Give twice for debugging output.
        """,
    )

    return parser.parse_args(*args, **kwargs)


def main(*args, **kwargs):
    args = parse_args(*args, **kwargs)

    log_level = logging.WARNING
    if args.verbose >= 2:
        log_level = logging.DEBUG
    elif args.verbose >= 1:
        log_level = logging.INFO
    logging.basicConfig(level=log_level)

    try:
        pattern = parse_pattern(args.pattern)
    except (PatternSyntaxError, InvalidPatternError) as e:
        print_error("invalid pattern: {}".format(e), args.verbose)
        return 1

    logging.info("Using %s strategy for '%s'", pattern.strategy.name, pattern)

    try:
        if args.json:
            elements = read_json(args.input)
        elif pattern.requires_bidirectional:
            elements = list(read_lines(args.input))
        else:
            elements = read_lines(args.input)

        outcome = destructure(pattern, elements)

        if outcome:
            # NB: An exposed source is only consumed here
            output = json.dumps(outcome.bindings, default=to_json_compatible)
    except (OSError, ValueError) as e:
        print_error("could not read input: {}".format(e), args.verbose)
        return 1

    if not outcome:
        print(format_mismatch(pattern, outcome.depth))
        print_error("input does not match pattern (see above)", args.verbose)
        return 2

    logging.info("Matched %d binding(s)", len(outcome.names))
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
