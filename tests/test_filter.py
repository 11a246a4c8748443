"""Tests for filter compilation and matching."""

import re

import pytest

from papersh.errors import FilterBuildFailed
from papersh.models.filter import PaperFilter


def titles(paper_filter, papers):
    return [p.nickname or p.title.split(":")[0] for p in papers if paper_filter.matches(p)]


class TestFromArgs:
    def test_keywords_route_to_fields(self):
        f = PaperFilter.from_args(["dist", "as", "Zeus", "by", "Chung", "by1", "You", "at", "NSDI", "in", "2023"])
        assert [p.pattern for p in f.title] == ["dist"]
        assert [p.pattern for p in f.nickname] == ["Zeus"]
        assert [p.pattern for p in f.author] == ["Chung"]
        assert [p.pattern for p in f.first_author] == ["You"]
        assert [p.pattern for p in f.venue] == ["NSDI"]
        assert [p.pattern for p in f.year] == ["2023"]

    def test_on_is_venue(self):
        assert [p.pattern for p in PaperFilter.from_args(["on", "SOSP"]).venue] == ["SOSP"]

    def test_repeated_keyword_accumulates(self):
        f = PaperFilter.from_args(["by", "Chung", "by", "Chowdhury"])
        assert [p.pattern for p in f.author] == ["Chung", "Chowdhury"]

    def test_dangling_keyword_is_title(self):
        f = PaperFilter.from_args(["in"])
        assert [p.pattern for p in f.title] == ["in"]
        assert f.year == ()

    def test_dangling_keyword_after_pair(self):
        f = PaperFilter.from_args(["by", "Chung", "at"])
        assert [p.pattern for p in f.author] == ["Chung"]
        assert [p.pattern for p in f.title] == ["at"]

    def test_case_insensitive_flag(self):
        f = PaperFilter.from_args(["zeus"], case_insensitive=True)
        assert f.title[0].flags & re.IGNORECASE

    def test_bad_regex(self):
        with pytest.raises(FilterBuildFailed) as exc:
            PaperFilter.from_args(["by", "Chung("])
        assert exc.value.pattern == "Chung("


class TestMatches:
    def test_empty_filter_matches_everything(self, papers):
        f = PaperFilter()
        assert f.is_empty()
        assert all(f.matches(p) for p in papers)

    def test_author_matches_any_author(self, papers):
        assert titles(PaperFilter.from_args(["by", "Chung"]), papers) == ["ShadowTutor", "Zeus"]

    def test_first_author(self, papers):
        assert titles(PaperFilter.from_args(["by1", "Chung"]), papers) == ["ShadowTutor"]

    def test_patterns_are_anded(self, papers):
        assert titles(PaperFilter.from_args(["by", "Chung", "by", "Chowdhury"]), papers) == ["Zeus"]

    def test_search_not_fullmatch(self, papers):
        assert titles(PaperFilter.from_args(["in", "02"]), papers) == ["ShadowTutor", "Zeus", "Oobleck"]

    def test_nickname_missing_is_empty_string(self, papers):
        assert titles(PaperFilter.from_args(["as", "^$"]), papers) == ["Oobleck"]

    def test_case_sensitive_by_default(self, papers):
        assert titles(PaperFilter.from_args(["zeus"]), papers) == []
        assert titles(PaperFilter.from_args(["zeus"], case_insensitive=True), papers) == ["Zeus"]

    def test_is_label(self, papers):
        assert titles(PaperFilter.from_args(["is", "mob"]), papers) == ["ShadowTutor"]

    def test_not_label(self, papers):
        assert titles(PaperFilter.from_args(["not", "video"]), papers) == ["Zeus", "Oobleck"]

    def test_not_label_without_labels(self, papers):
        assert PaperFilter.from_args(["not", "."]).matches(papers[2])


class TestMerge:
    def test_merge_concatenates_in_order(self):
        a = PaperFilter.from_args(["by", "Chung"])
        b = PaperFilter.from_args(["by", "Moon", "in", "2020"])
        merged = PaperFilter.merge([a, b])
        assert [p.pattern for p in merged.author] == ["Chung", "Moon"]
        assert [p.pattern for p in merged.year] == ["2020"]

    def test_merge_of_nothing_is_empty(self):
        assert PaperFilter.merge([]).is_empty()

    def test_str(self):
        assert str(PaperFilter()) == "No filter applied."
        assert str(PaperFilter.from_args(["zeus", "not", "draft"])) == (
            "title matches 'zeus', has no label matching 'draft'"
        )
