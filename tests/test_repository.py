"""Tests for paper store queries and YAML persistence."""

import io

import pytest
import yaml

from papersh.database.repository import PaperStore
from papersh.errors import StateLoadError, StateStoreError
from papersh.models.filter import PaperFilter
from papersh.models.navigation import Add
from papersh.models.paper import Paper


class TestQueries:
    def test_select(self, store):
        assert store.select(PaperFilter()) == [0, 1, 2]
        assert store.select(PaperFilter.from_args(["at", "SOSP"])) == [2]

    def test_add_returns_index(self, store, papers):
        assert store.add(papers[0]) == 3

    def test_remove_ignores_duplicates_and_order(self, store):
        assert store.remove([2, 0, 2]) == 2
        assert [p.nickname for p in store.papers] == ["Zeus"]


class TestPersistence:
    def test_missing_file_is_empty_store(self, tmp_path):
        store = PaperStore.load(tmp_path / "absent.yaml")
        assert len(store) == 0
        assert store.filters.current == 0

    def test_empty_file_is_empty_store(self, tmp_path):
        path = tmp_path / "state.yaml"
        path.write_text("", encoding="utf-8")
        assert len(PaperStore.load(path)) == 0

    def test_store_then_load(self, store, tmp_path):
        store[1].mark_read()
        path = tmp_path / "nested" / "state.yaml"
        store.store(path)

        loaded = PaperStore.load(path)
        assert [p.to_dict() for p in loaded.papers] == [p.to_dict() for p in store.papers]

    def test_yaml_layout(self, store, tmp_path):
        path = tmp_path / "state.yaml"
        store.store(path)
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert list(data[0]) == [
            "title", "nickname", "authors", "venue", "year",
            "filepath", "labels", "notepath", "state",
        ]
        assert data[0]["labels"] == ["mobile", "video"]
        assert data[0]["state"][0]["kind"] == "added"

    def test_filters_are_not_persisted(self, store, tmp_path):
        path = tmp_path / "state.yaml"
        store.filters.record(Add(PaperFilter.from_args(["by", "Chung"])))
        store.store(path)
        assert PaperStore.load(path).filters.current_filter().is_empty()

    @pytest.mark.parametrize(
        "content",
        [
            "- title: [unclosed\n",
            "title: not a list\n",
            "- title: No Authors\n  venue: X\n  year: '2020'\n",
            "- title: Empty Authors\n  authors: []\n  venue: X\n  year: '2020'\n",
        ],
    )
    def test_bad_state_is_fatal(self, tmp_path, content):
        path = tmp_path / "state.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(StateLoadError):
            PaperStore.load(path)

    def test_store_failure_dumps_records(self, store, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        fallback = io.StringIO()

        with pytest.raises(StateStoreError):
            store.store(blocker / "state.yaml", fallback=fallback)
        assert "Zeus: Understanding" in fallback.getvalue()


class TestPaperRecords:
    def test_from_dict_defaults(self):
        paper = Paper.from_dict(
            {"title": "T", "authors": ["A"], "venue": "V", "year": 2020}
        )
        assert paper.year == "2020"
        assert paper.labels == set()
        assert paper.state == []
