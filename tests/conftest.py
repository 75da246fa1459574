"""Shared test fixtures for naive-sentiment tests."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest

from naive_sentiment.classifier import SentimentClassifier
from naive_sentiment.store import DEFAULT_DATA_DIR, MemoryDictionaryStore


@pytest.fixture
def sample_lists() -> dict[str, list[str]]:
    """Small word lists: one per class plus ignore and prefix lists."""
    return {
        "pos": ["love", "girl", "great", "happy", "isn'tbad"],
        "neg": ["bad", "hate", "awful", "isn'tgood"],
        "neu": ["okay", "average"],
        "ign": ["the", "is", "that", "very", "a"],
        "prefix": ["isn't", "aren't"],
    }


@pytest.fixture
def memory_store(sample_lists: dict[str, list[str]]) -> MemoryDictionaryStore:
    return MemoryDictionaryStore(sample_lists)


@pytest.fixture
def classifier(memory_store: MemoryDictionaryStore) -> SentimentClassifier:
    """Classifier built from the sample lists."""
    return SentimentClassifier.from_store(memory_store)


@pytest.fixture
def json_data_dir(tmp_path: Path, sample_lists: dict[str, list[str]]) -> Path:
    """Directory of data.<list>.json files holding the sample lists."""
    data_dir = tmp_path / "model"
    data_dir.mkdir()
    for name, words in sample_lists.items():
        (data_dir / f"data.{name}.json").write_text(json.dumps(words), encoding="utf-8")
    return data_dir


@pytest.fixture
def bundled_data_copy(tmp_path: Path) -> Path:
    """Writable copy of the bundled model."""
    target = tmp_path / "bundled"
    shutil.copytree(DEFAULT_DATA_DIR, target)
    return target
