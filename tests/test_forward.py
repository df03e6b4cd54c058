from iunpack.sources import as_source

from iunpack.slots import Bind, Discard, Literal

from iunpack.outcome import MatchState

from iunpack.forward import match_prefix, check_exhausted

from sample_sources import ForwardOnly


class TestMatchPrefix(object):
    def test_all_accepted(self):
        state = MatchState(as_source([1, 2, 3]))
        assert match_prefix(state, [Bind("a"), Discard()])
        assert state.depth == 2
        assert state.bindings == [("a", 1)]

        # Only consumed as many elements as there are slots
        assert state.source.take_next() == 3

    def test_no_slots(self):
        source = ForwardOnly([1])
        state = MatchState(as_source(source))
        assert match_prefix(state, [])
        assert state.depth == 0
        assert source.pulled == 0

    def test_exhausted(self):
        state = MatchState(as_source([1]))
        assert not match_prefix(state, [Bind("a"), Bind("b"), Bind("c")])
        assert state.depth == 1

    def test_rejected(self):
        source = ForwardOnly([1, 2, 3, 4])
        state = MatchState(as_source(source))
        assert not match_prefix(state, [Bind("a"), Literal(0), Bind("c")])
        assert state.depth == 1

        # Stops pulling at the rejected element
        assert source.pulled == 2

    def test_adds_to_existing_depth(self):
        state = MatchState(as_source([1, 2]))
        state.depth = 10
        assert match_prefix(state, [Bind("a"), Bind("b")])
        assert state.depth == 12


class TestCheckExhausted(object):
    def test_exhausted(self):
        assert check_exhausted(MatchState(as_source([])))

    def test_not_exhausted(self):
        source = ForwardOnly([1, 2, 3])
        assert not check_exhausted(MatchState(as_source(source)))
        assert source.pulled == 1
