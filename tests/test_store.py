"""Tests for word list stores and training."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from naive_sentiment.errors import InvalidTrainingInputError, SourceUnavailableError
from naive_sentiment.store import (
    DEFAULT_DATA_DIR,
    JsonDictionaryStore,
    MemoryDictionaryStore,
    default_store,
    escape,
    unescape,
    validate_training_words,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestUnescape:
    def test_plain_word(self) -> None:
        assert unescape("love") == "love"

    def test_escaped_quote(self) -> None:
        assert unescape("isn\\'t") == "isn't"

    def test_control_escapes(self) -> None:
        assert unescape("a\\nb\\tc") == "a\nb\tc"

    def test_hex_and_octal(self) -> None:
        assert unescape("\\x41\\102") == "AB"

    def test_escaped_backslash(self) -> None:
        assert unescape("a\\\\b") == "a\\b"

    def test_escape_is_inverse(self) -> None:
        for word in ["love", "isn\\'t", "back\\bslash", "a\\\\b"]:
            assert unescape(escape(word)) == word


class TestValidateTrainingWords:
    def test_flat_list(self) -> None:
        assert validate_training_words(["a", "b"]) == ["a", "b"]

    def test_tuple_accepted(self) -> None:
        assert validate_training_words(("a",)) == ["a"]

    def test_nested_list_rejected(self) -> None:
        with pytest.raises(InvalidTrainingInputError, match="one dimensional"):
            validate_training_words(["a", ["b", "c"]])

    def test_string_rejected(self) -> None:
        with pytest.raises(InvalidTrainingInputError, match="must be a list"):
            validate_training_words("good")

    def test_dict_rejected(self) -> None:
        with pytest.raises(InvalidTrainingInputError):
            validate_training_words({"good": 1})

    def test_non_string_element_rejected(self) -> None:
        with pytest.raises(InvalidTrainingInputError, match="strings"):
            validate_training_words(["good", 3])

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_training_words(None)


# ---------------------------------------------------------------------------
# MemoryDictionaryStore
# ---------------------------------------------------------------------------


class TestMemoryDictionaryStore:
    def test_get_list_trims_and_unescapes(self) -> None:
        store = MemoryDictionaryStore({"prefix": [" isn\\'t ", "aren't\n"]})
        assert store.get_list("prefix") == ["isn't", "aren't"]

    def test_missing_list(self) -> None:
        store = MemoryDictionaryStore()
        with pytest.raises(SourceUnavailableError) as exc_info:
            store.get_list("pos")
        assert exc_info.value.list_type == "pos"

    def test_missing_list_is_file_not_found(self) -> None:
        with pytest.raises(FileNotFoundError):
            MemoryDictionaryStore().get_list("ign")

    def test_has_list(self, memory_store: MemoryDictionaryStore) -> None:
        assert memory_store.has_list("pos")
        assert not memory_store.has_list("nope")

    def test_input_is_copied(self) -> None:
        words = ["love"]
        store = MemoryDictionaryStore({"pos": words})
        words.append("hate")
        assert store.get_list("pos") == ["love"]

    def test_save_list(self) -> None:
        store = MemoryDictionaryStore()
        store.save_list("neu", ["okay"])
        assert store.get_list("neu") == ["okay"]


# ---------------------------------------------------------------------------
# JsonDictionaryStore
# ---------------------------------------------------------------------------


class TestJsonDictionaryStore:
    def test_reads_lists(self, json_data_dir: Path) -> None:
        store = JsonDictionaryStore(json_data_dir)
        assert store.get_list("pos")[0] == "love"
        assert store.get_list("prefix") == ["isn't", "aren't"]

    def test_accepts_str_path(self, json_data_dir: Path) -> None:
        store = JsonDictionaryStore(str(json_data_dir))
        assert store.has_list("neg")

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(SourceUnavailableError, match="data directory"):
            JsonDictionaryStore(tmp_path / "does-not-exist")

    def test_missing_file(self, json_data_dir: Path) -> None:
        (json_data_dir / "data.neu.json").unlink()
        store = JsonDictionaryStore(json_data_dir)
        assert not store.has_list("neu")
        with pytest.raises(SourceUnavailableError, match="data.neu.json"):
            store.get_list("neu")

    def test_non_array_content(self, json_data_dir: Path) -> None:
        (json_data_dir / "data.pos.json").write_text('{"love": 1}', encoding="utf-8")
        store = JsonDictionaryStore(json_data_dir)
        with pytest.raises(ValueError, match="JSON array"):
            store.get_list("pos")

    def test_save_list_round_trip(self, json_data_dir: Path) -> None:
        store = JsonDictionaryStore(json_data_dir)
        store.save_list("neu", ["okay", "café"])
        assert store.get_list("neu") == ["okay", "café"]
        raw = (json_data_dir / "data.neu.json").read_text(encoding="utf-8")
        assert "café" in raw

    def test_path_for(self, json_data_dir: Path) -> None:
        store = JsonDictionaryStore(json_data_dir)
        assert store.path_for("ign") == json_data_dir / "data.ign.json"


class TestDefaultStore:
    def test_points_at_bundled_data(self) -> None:
        assert default_store().data_dir == DEFAULT_DATA_DIR

    @pytest.mark.parametrize("name", ["pos", "neg", "neu", "ign", "prefix"])
    def test_bundled_lists_present(self, name: str) -> None:
        store = default_store()
        assert store.has_list(name)
        assert len(store.get_list(name)) > 0


# ---------------------------------------------------------------------------
# Training
# ---------------------------------------------------------------------------


class TestTraining:
    def test_appends_new_words(self, json_data_dir: Path) -> None:
        store = JsonDictionaryStore(json_data_dir)
        result = store.train("pos", ["splendid", "marvelous"])
        assert result.added == ["splendid", "marvelous"]
        assert result.ignored == []
        assert store.get_list("pos")[-2:] == ["splendid", "marvelous"]

    def test_existing_words_ignored(self, json_data_dir: Path) -> None:
        store = JsonDictionaryStore(json_data_dir)
        before = store.get_list("pos")
        result = store.train("pos", ["love", "joyful"])
        assert result.added == ["joyful"]
        assert result.ignored == ["love"]
        assert store.get_list("pos") == before + ["joyful"]

    def test_repeated_input_words_added_once(self) -> None:
        store = MemoryDictionaryStore({"neg": []})
        result = store.train("neg", ["grim", " grim ", ""])
        assert result.added == ["grim"]
        assert result.ignored == [" grim ", ""]
        assert store.get_list("neg") == ["grim"]

    def test_nested_list_leaves_file_unchanged(self, json_data_dir: Path) -> None:
        path = json_data_dir / "data.pos.json"
        before = path.read_bytes()
        store = JsonDictionaryStore(json_data_dir)
        with pytest.raises(InvalidTrainingInputError):
            store.train("pos", ["fine", ["nested"]])
        assert path.read_bytes() == before

    def test_non_list_leaves_file_unchanged(self, json_data_dir: Path) -> None:
        path = json_data_dir / "data.neg.json"
        before = path.read_bytes()
        store = JsonDictionaryStore(json_data_dir)
        with pytest.raises(InvalidTrainingInputError):
            store.train("neg", "terrible")
        assert path.read_bytes() == before

    def test_missing_class_list(self, json_data_dir: Path) -> None:
        (json_data_dir / "data.neu.json").unlink()
        store = JsonDictionaryStore(json_data_dir)
        with pytest.raises(SourceUnavailableError):
            store.train("neu", ["so-so"])
        assert not store.has_list("neu")

    def test_unknown_class(self, memory_store: MemoryDictionaryStore) -> None:
        with pytest.raises(ValueError, match="Unknown class"):
            memory_store.train("ign", ["the"])

    def test_nothing_new_does_not_write(self, json_data_dir: Path) -> None:
        path = json_data_dir / "data.neu.json"
        before = path.read_bytes()
        result = JsonDictionaryStore(json_data_dir).train("neu", ["okay"])
        assert result.added == []
        assert path.read_bytes() == before

    def test_backslash_word_trained_twice_added_once(self, json_data_dir: Path) -> None:
        store = JsonDictionaryStore(json_data_dir)
        first = store.train("pos", ["isn\\'tfine"])
        second = store.train("pos", ["isn\\'tfine"])
        assert first.added == ["isn\\'tfine"]
        assert second.added == []
        assert second.ignored == ["isn\\'tfine"]
        assert store.get_list("pos").count("isn\\'tfine") == 1

    def test_backslash_word_reads_back_unchanged(self) -> None:
        store = MemoryDictionaryStore({"neg": []})
        store.train("neg", ["back\\bslash"])
        assert store.get_list("neg") == ["back\\bslash"]

    def test_matches_escaped_stored_entry(self) -> None:
        store = MemoryDictionaryStore({"pos": ["isn\\'tbad"]})
        result = store.train("pos", ["isn'tbad"])
        assert result.added == []
        assert result.ignored == ["isn'tbad"]

    def test_written_file_is_json_array(self, json_data_dir: Path) -> None:
        JsonDictionaryStore(json_data_dir).train("neg", ["grim"])
        data = json.loads((json_data_dir / "data.neg.json").read_text(encoding="utf-8"))
        assert data[-1] == "grim"
