import pytest

from collections import deque

from iunpack.exceptions import (
    PatternSyntaxError,
    UnknownContainerError,
    InvalidPatternError,
)

from iunpack.slots import (
    Bind,
    Discard,
    Guard,
    Literal,
    InRange,
    OneOf,
    Nested,
)

from iunpack.middle import CollectAll, CollectNone, ExposeRemaining

from iunpack.pattern import Pattern

from iunpack.syntax import tokenize_pattern, parse_pattern, compile_pattern


class TestTokenizePattern(object):
    def test_empty(self):
        assert list(tokenize_pattern("")) == []
        assert list(tokenize_pattern("   ")) == []

    def test_all_token_types(self):
        assert list(tokenize_pattern("a, *b: set, 'x' | -1.5 @ ..=0x10 [)")) == [
            ("name", "a", 0),
            ("punctuation", ",", 1),
            ("middle", "*", 3),
            ("name", "b", 4),
            ("punctuation", ":", 5),
            ("name", "set", 7),
            ("punctuation", ",", 10),
            ("string", "'x'", 12),
            ("punctuation", "|", 16),
            ("number", "-1.5", 18),
            ("punctuation", "@", 23),
            ("range", "..=", 25),
            ("number", "0x10", 28),
            ("punctuation", "[", 33),
            ("punctuation", ")", 34),
        ]

    @pytest.mark.parametrize(
        "string,exp_tokens",
        [
            ("2..10", [("number", "2"), ("range", ".."), ("number", "10")]),
            ("**x", [("middle", "**"), ("name", "x")]),
            ("*=x", [("middle", "*="), ("name", "x")]),
            ("1e3", [("number", "1e3")]),
            ('"a\\"b"', [("string", '"a\\"b"')]),
            ("_foo", [("name", "_foo")]),
        ],
    )
    def test_tokens(self, string, exp_tokens):
        assert [t[:2] for t in tokenize_pattern(string)] == exp_tokens

    @pytest.mark.parametrize("string,position", [("a, $", 3), ("a; b", 1)])
    def test_unexpected_text(self, string, position):
        with pytest.raises(
            PatternSyntaxError,
            match=r"Unexpected text at position {}".format(position),
        ):
            list(tokenize_pattern(string))


class TestParsePattern(object):
    @pytest.mark.parametrize(
        "string,exp_pattern",
        [
            # Empty
            ("", Pattern()),
            # Binds, discards and trailing commas
            ("a, _, _c,", Pattern([Bind("a"), Discard(), Bind("_c")])),
            # Literals
            (
                "1, -2.5, 0x10, 'x', None, True, False",
                Pattern(
                    [
                        Literal(1),
                        Literal(-2.5),
                        Literal(16),
                        Literal("x"),
                        Literal(None),
                        Literal(True),
                        Literal(False),
                    ]
                ),
            ),
            # Ranges
            (
                "2..10, 2..=10, 2.., ..10, ..=10",
                Pattern(
                    [
                        InRange(2, 10),
                        InRange(2, 10, inclusive=True),
                        InRange(2, None),
                        InRange(None, 10),
                        InRange(None, 10, inclusive=True),
                    ]
                ),
            ),
            ("'a'..'n'", Pattern([InRange("a", "n")])),
            # Alternatives
            (
                "0 | 1 | 5..",
                Pattern([OneOf(Literal(0), Literal(1), InRange(5, None))]),
            ),
            # Named guards
            ("x @ 1", Pattern([Literal(1, name="x")])),
            ("x @ 0..3", Pattern([InRange(0, 3, name="x")])),
            ("x @ 0 | 1", Pattern([OneOf(Literal(0), Literal(1), name="x")])),
            ("x @ (0 | 1)", Pattern([OneOf(Literal(0), Literal(1), name="x")])),
            ("x @ _", Pattern([Bind("x")])),
            ("_ @ 1", Pattern([Literal(1)])),
            # Grouping parentheses
            ("(a)", Pattern([Bind("a")])),
            # Nested patterns
            ("(a,)", Pattern([Nested(Pattern([Bind("a")]))])),
            ("[a]", Pattern([Nested(Pattern([Bind("a")]))])),
            ("[]", Pattern([Nested(Pattern())])),
            (
                "(a, b), c",
                Pattern([Nested(Pattern([Bind("a"), Bind("b")])), Bind("c")]),
            ),
            (
                "p @ [x, *rest]",
                Pattern(
                    [Nested(Pattern([Bind("x")], CollectAll("rest")), name="p")]
                ),
            ),
            # Middle markers
            ("a, *, z", Pattern([Bind("a")], CollectNone(), [Bind("z")])),
            ("a, *_, z", Pattern([Bind("a")], CollectNone(), [Bind("z")])),
            ("a, *m, z", Pattern([Bind("a")], CollectAll("m"), [Bind("z")])),
            (
                "*m: tuple, z",
                Pattern([], CollectAll("m", tuple), [Bind("z")]),
            ),
            (
                "a, **m: deque",
                Pattern([Bind("a")], CollectAll("m", deque), [], False),
            ),
            ("**, z", Pattern([], CollectNone(), [Bind("z")], False)),
            ("a, *=rest", Pattern([Bind("a")], ExposeRemaining("rest"))),
            (
                "*=rest, y, z",
                Pattern([], ExposeRemaining("rest"), [Bind("y"), Bind("z")]),
            ),
        ],
    )
    def test_valid(self, string, exp_pattern):
        assert parse_pattern(string) == exp_pattern

    @pytest.mark.parametrize(
        "string,exp_message",
        [
            ("a b", r"Unexpected 'b' at position 2"),
            ("a,,", r"Unexpected ',' at position 2"),
            ("a, @", r"Unexpected '@' at position 3"),
            ("x @", r"Unexpected end of pattern"),
            ("(a", r"Unmatched '\(' at position 0"),
            ("[a, b)", r"Unexpected '\)' at position 5"),
            ("[a, b", r"Unmatched '\[' at position 0"),
            ("a)", r"Unexpected '\)' at position 1"),
            ("*, *", r"Multiple middle markers at position 3"),
            ("*a, **b", r"Multiple middle markers at position 4"),
            ("*=_", r"'\*=' requires a name at position 0"),
            ("*=", r"Unexpected end of pattern"),
            ("*: set", r"Unexpected ':' at position 1"),
            ("a | 1", r"Alternatives may not bind names \(at position 2\)"),
            ("1 | a", r"Alternatives may not bind names \(at position 2\)"),
            ("x @ y", r"'@' must be followed by an unnamed guard at position 2"),
            (
                "x @ (y @ 1)",
                r"'@' must be followed by an unnamed guard at position 2",
            ),
            ("..", r"Unexpected end of pattern"),
            ("1..=", r"Unexpected end of pattern"),
        ],
    )
    def test_syntax_errors(self, string, exp_message):
        with pytest.raises(PatternSyntaxError, match=exp_message):
            parse_pattern(string)

    def test_unknown_container(self):
        with pytest.raises(
            UnknownContainerError,
            match=r"Unknown container type 'dict' at position 5",
        ):
            parse_pattern("*xs: dict")

    def test_custom_container(self):
        class Bag(list):
            pass

        assert parse_pattern("*xs: bag", containers={"bag": Bag}) == Pattern(
            [], CollectAll("xs", Bag)
        )

        # Not registered globally
        with pytest.raises(UnknownContainerError):
            parse_pattern("*xs: bag")

    @pytest.mark.parametrize("string", ["a, a", "a, *a", "a, [a]", "a @ [a]"])
    def test_duplicate_names(self, string):
        with pytest.raises(InvalidPatternError):
            parse_pattern(string)

    @pytest.mark.parametrize(
        "string",
        [
            "",
            "a, _, 1, 'x', None",
            "0 | 1, 2..=10, ..5, 'a'..",
            "x @ 0 | 1, y @ [a, *b]",
            "a, *m: set, z",
            "**m: tuple, z",
            "*, z",
            "a, **",
            "*=rest, z",
            "1e+20, -2.5, \"it's\", True",
        ],
    )
    def test_str_round_trip(self, string):
        pattern = parse_pattern(string)
        assert str(pattern) == string
        assert parse_pattern(str(pattern)) == pattern

    @pytest.mark.parametrize(
        "pattern,string",
        [
            (Pattern([Literal(float("inf"))]), "<== inf>"),
            (Pattern([Bind("a"), InRange(0, float("inf"))]), "a, <0..inf>"),
            (Pattern([Guard(callable, name="f")]), "f @ <callable>"),
        ],
    )
    def test_str_without_literal_syntax(self, pattern, string):
        assert str(pattern) == string

        # Never mistaken for a name on parsing
        with pytest.raises(PatternSyntaxError, match=r"Unexpected text"):
            parse_pattern(str(pattern))


class TestCompilePattern(object):
    def test_pattern_passed_through(self):
        pattern = Pattern([Bind("a")])
        assert compile_pattern(pattern) is pattern

    def test_string_parsed(self):
        assert compile_pattern("a, *b") == Pattern([Bind("a")], CollectAll("b"))

    def test_other_types(self):
        with pytest.raises(TypeError):
            compile_pattern(["a", "b"])
