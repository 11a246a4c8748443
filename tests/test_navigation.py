"""Tests for filter instructions and the navigation history."""

import pytest

from papersh.models.filter import PaperFilter
from papersh.models.navigation import (
    Add,
    FilterHistory,
    Here,
    Parent,
    Prev,
    Reset,
    resolve_instruction,
)


def add(*args):
    return Add(PaperFilter.from_args(list(args)))


def authors(paper_filter):
    return [p.pattern for p in paper_filter.author]


class TestResolveInstruction:
    def test_no_args(self):
        assert resolve_instruction([], reset_if_empty=True) == Reset()
        assert resolve_instruction([], reset_if_empty=False) == Here()

    @pytest.mark.parametrize("arg, expected", [(".", Here()), ("..", Parent()), ("-", Prev())])
    def test_special_tokens(self, arg, expected):
        assert resolve_instruction([arg], reset_if_empty=True) == expected

    def test_special_token_among_others_is_a_pattern(self):
        instruction = resolve_instruction(["..", "by", "Chung"], reset_if_empty=True)
        assert isinstance(instruction, Add)
        assert [p.pattern for p in instruction.piece.title] == [".."]

    def test_filter(self):
        instruction = resolve_instruction(["by", "Chung"], reset_if_empty=False)
        assert isinstance(instruction, Add)
        assert authors(instruction.piece) == ["Chung"]


class TestFilterHistory:
    def test_initial_state(self):
        history = FilterHistory()
        assert history.current == history.previous == 0
        assert history.current_filter().is_empty()

    def test_add_descends(self):
        history = FilterHistory()
        history.record(add("by", "Chung"))
        effective = history.record(add("by", "Moon"))
        assert (history.current, history.previous) == (2, 1)
        assert authors(effective) == ["Chung", "Moon"]

    def test_parent_saturates_at_root(self):
        history = FilterHistory()
        history.record(Parent())
        history.record(Parent())
        assert history.current == 0
        assert history.history[0].is_empty()

    def test_parent_then_add_overwrites(self):
        history = FilterHistory()
        history.record(add("by", "Chung"))
        history.record(add("by", "Moon"))
        history.record(Parent())
        effective = history.record(add("by", "Kim"))
        assert len(history.history) == 3
        assert authors(effective) == ["Chung", "Kim"]

    def test_reset(self):
        history = FilterHistory()
        history.record(add("by", "Chung"))
        assert history.record(Reset()).is_empty()
        assert (history.current, history.previous) == (0, 1)

    def test_prev_swaps(self):
        history = FilterHistory()
        history.record(add("by", "Chung"))
        history.record(Reset())
        assert authors(history.record(Prev())) == ["Chung"]
        assert history.record(Prev()).is_empty()

    def test_prev_twice_is_identity(self):
        history = FilterHistory()
        history.record(add("by", "Chung"))
        history.record(add("in", "2020"))
        before = (history.current, history.previous)
        history.record(Prev())
        history.record(Prev())
        assert (history.current, history.previous) == before

    def test_here_pushes_empty_layer(self):
        history = FilterHistory()
        history.record(add("by", "Chung"))
        effective = history.record(Here())
        assert history.current == 2
        assert authors(effective) == ["Chung"]
        # `cd -` after `cd .` lands on the same effective filter
        assert authors(history.record(Prev())) == ["Chung"]
        assert history.current == 1

    def test_cursors_stay_in_bounds(self):
        history = FilterHistory()
        for instruction in [add("a"), Parent(), Parent(), Prev(), Here(), Reset(), Prev(), add("b"), Prev()]:
            history.record(instruction)
            assert 0 <= history.current < len(history.history)
            assert 0 <= history.previous < len(history.history)
            assert history.history[0].is_empty()

    def test_observe_leaves_state_alone(self):
        history = FilterHistory()
        history.record(add("by", "Chung"))
        snapshot = (list(history.history), history.current, history.previous)

        assert authors(history.observe(add("by", "Moon"))) == ["Chung", "Moon"]
        assert history.observe(Reset()).is_empty()
        assert (list(history.history), history.current, history.previous) == snapshot

    def test_unknown_instruction(self):
        with pytest.raises(TypeError):
            FilterHistory().record("cd")
