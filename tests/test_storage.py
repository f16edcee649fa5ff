"""
Tests for key-value stores and progress bookkeeping.
"""

import json

import pytest

from furigana_match.errors import ErrorCategory, ErrorSeverity, StorageError
from furigana_match.models import make_pair
from furigana_match.storage import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    ProgressStore,
    PROGRESS_KEY,
    REVIEW_KEY,
)


class BrokenStore(KeyValueStore):
    """Store whose every operation fails."""

    def get(self, key):
        raise OSError("disk unavailable")

    def set(self, key, value):
        raise PermissionError("permission denied")


class TestJsonFileStore:

    def test_missing_file_reads_as_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "nope.json")
        assert store.get("anything") is None

    def test_set_creates_file_and_persists(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        JsonFileStore(path).set("k", "値")

        assert JsonFileStore(path).get("k") == "値"
        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "値"}

    def test_non_object_file_is_rejected(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(StorageError) as exc_info:
            JsonFileStore(path).get("k")
        assert exc_info.value.processing_error.error_code == "STORE_002"

    def test_non_object_file_degrades_progress(self, tmp_path, errors):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert ProgressStore(JsonFileStore(path), errors=errors).get_progress() == {}
        assert errors.warnings[0].error_code == "STORE_002"
        assert errors.warnings[0].context == {'operation': 'read progress'}


class TestProgressStore:
    """Unit tests for ProgressStore."""

    def test_progress_counts_wins(self, progress_store):
        assert progress_store.get_progress() == {}
        progress_store.save_progress("N5")
        progress_store.save_progress("N5")
        progress_store.save_progress("N3")
        assert progress_store.get_progress() == {"N5": 2, "N3": 1}

    def test_review_list_round_trip(self, progress_store, make_pairs):
        pairs = make_pairs(2)
        progress_store.add_to_review_list(pairs)
        assert progress_store.get_review_list() == pairs

    def test_review_list_dedupes_by_japanese_text(self, progress_store):
        first = make_pair("pair-1-0", [("猫", "ねこ")], "猫")
        same_text = make_pair("pair-2-5", [("猫", "ねこ")], "猫咪")
        other = make_pair("pair-2-6", [("犬", "いぬ")], "狗")

        progress_store.add_to_review_list([first])
        progress_store.add_to_review_list([same_text, other, other])

        assert [p.id for p in progress_store.get_review_list()] == ["pair-1-0", "pair-2-6"]

    def test_remove_by_text(self, progress_store, make_pairs):
        pairs = make_pairs(3)
        progress_store.add_to_review_list(pairs)
        progress_store.remove_review_items_by_text([pairs[0].jp.text, "unknown"])
        assert progress_store.get_review_list() == pairs[1:]

    def test_store_shape_matches_review_format(self, errors):
        store = MemoryStore()
        progress = ProgressStore(store, errors=errors)
        progress.add_to_review_list([make_pair("1", [("新", "あたら"), ("しい", None)], "新的")])

        assert json.loads(store.get(REVIEW_KEY)) == [{
            "id": "1",
            "jp": {"text": "新しい", "segments": [{"text": "新", "furigana": "あたら"}, {"text": "しい"}]},
            "cn": "新的",
        }]

    def test_failures_degrade_to_empty(self, errors, make_pairs):
        progress = ProgressStore(BrokenStore(), errors=errors)

        assert progress.get_progress() == {}
        assert progress.get_review_list() == []
        progress.save_progress("N5")
        progress.add_to_review_list(make_pairs(1))
        progress.remove_review_items_by_text(["x"])

        assert not errors.has_errors()
        assert errors.has_warnings()
        assert all(w.category == ErrorCategory.STORAGE for w in errors.warnings)
        assert all(w.severity == ErrorSeverity.WARNING for w in errors.warnings)

    def test_corrupted_record_reads_as_empty(self, errors):
        store = MemoryStore({PROGRESS_KEY: "{not json", REVIEW_KEY: "42"})
        progress = ProgressStore(store, errors=errors)

        assert progress.get_progress() == {}
        assert progress.get_review_list() == []
        assert errors.warnings[0].error_code == "STORE_002"
