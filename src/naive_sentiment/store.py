"""Word list storage.

A :class:`DictionaryStore` hands out flat word lists by name
(``"pos"``, ``"neg"``, ``"neu"``, ``"ign"``, ``"prefix"``) and accepts
updated lists back for training. Two implementations are provided:

- :class:`JsonDictionaryStore`: one ``data.<name>.json`` file per list,
  each holding a JSON array of strings.
- :class:`MemoryDictionaryStore`: plain in-process lists, handy for tests
  and for embedding a model in code.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional

from .errors import InvalidTrainingInputError, SourceUnavailableError
from .models import CLASSES, TrainingResult

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent / "data"

_ESCAPE_RE = re.compile(r"\\(x[0-9A-Fa-f]{1,2}|[0-7]{1,3}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "a": "\a",
    "v": "\v",
    "b": "\b",
    "f": "\f",
}


def unescape(word: str) -> str:
    """Resolve C-style backslash escapes (``\\n``, ``\\x41``, ``\\101``...).

    Unknown escapes drop the backslash: ``isn\\'t`` becomes ``isn't``.
    """

    def _sub(match: re.Match[str]) -> str:
        seq = match.group(1)
        if seq[0] == "x" and len(seq) > 1:
            return chr(int(seq[1:], 16))
        if seq[0] in "01234567":
            return chr(int(seq, 8) & 0xFF)
        return _SIMPLE_ESCAPES.get(seq, seq)

    if "\\" not in word:
        return word
    return _ESCAPE_RE.sub(_sub, word)


def escape(word: str) -> str:
    """Inverse of :func:`unescape` for a literal word: double each backslash."""
    return word.replace("\\", "\\\\")


def validate_training_words(words: Any) -> list[str]:
    """Check that ``words`` is a one-dimensional list of strings.

    Raises:
        InvalidTrainingInputError: If ``words`` is not a list/tuple, or any
            element is not a string.
    """
    if not isinstance(words, (list, tuple)):
        raise InvalidTrainingInputError(
            f"Training data set must be a list, got {type(words).__name__}"
        )
    for word in words:
        if isinstance(word, (list, tuple, set, frozenset, dict)):
            raise InvalidTrainingInputError(
                "Only a one dimensional list of training words is allowed"
            )
        if not isinstance(word, str):
            raise InvalidTrainingInputError(
                f"Training words must be strings, got {type(word).__name__}"
            )
    return list(words)


class DictionaryStore(ABC):
    """Abstract source and sink of named word lists.

    Subclasses implement raw reads and writes; cleaning (unescaping and
    trimming) and training live here.
    """

    @abstractmethod
    def has_list(self, list_type: str) -> bool:
        """Whether a list named ``list_type`` exists."""

    @abstractmethod
    def _read(self, list_type: str) -> list[str]:
        """Return the raw entries of a list.

        Raises:
            SourceUnavailableError: If the list does not exist.
        """

    @abstractmethod
    def _write(self, list_type: str, words: list[str]) -> None:
        """Persist ``words`` as the full content of a list."""

    def get_list(self, list_type: str) -> list[str]:
        """Return a list's entries, unescaped and trimmed.

        Raises:
            SourceUnavailableError: If the list does not exist.
        """
        return [unescape(word).strip() for word in self._read(list_type)]

    def save_list(self, list_type: str, words: Iterable[str]) -> None:
        """Replace a list's content."""
        words = list(words)
        self._write(list_type, words)
        logger.info("Saved %d word(s) to list '%s'", len(words), list_type)

    def train(self, class_name: str, words: Any) -> TrainingResult:
        """Append new words to a stored class list.

        Words already in the list, repeated within ``words``, or blank
        after trimming are reported as ignored. Nothing is written unless
        the input is valid and the class list exists.

        Training words are literal: they are compared with the unescaped
        list entries and written back escaped, so a backslash reads back
        unchanged.

        Args:
            class_name: One of ``pos``, ``neg``, ``neu``.
            words: A flat list of strings.

        Returns:
            TrainingResult listing added and ignored words.

        Raises:
            InvalidTrainingInputError: If ``words`` is not a flat list of
                strings.
            SourceUnavailableError: If the class list does not exist.
            ValueError: If ``class_name`` is not a known class.
        """
        words = validate_training_words(words)
        if class_name not in CLASSES:
            raise ValueError(f"Unknown class: {class_name}. Known: {list(CLASSES)}")

        stored = self._read(class_name)
        known = {unescape(word).strip() for word in stored}
        result = TrainingResult(class_name=class_name)

        for word in words:
            trimmed = word.strip()
            if not trimmed or trimmed in known:
                result.ignored.append(word)
                continue
            known.add(trimmed)
            result.added.append(trimmed)

        if result.added:
            self._write(class_name, stored + [escape(word) for word in result.added])
        logger.info(
            "Trained class '%s': %d added, %d ignored",
            class_name, len(result.added), len(result.ignored),
        )
        return result


class JsonDictionaryStore(DictionaryStore):
    """Word lists stored as ``data.<name>.json`` files in a directory.

    Args:
        data_dir: Directory holding the list files.

    Raises:
        SourceUnavailableError: If ``data_dir`` is not a directory.
    """

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        if not self.data_dir.is_dir():
            raise SourceUnavailableError("data directory", str(self.data_dir))

    def path_for(self, list_type: str) -> Path:
        return self.data_dir / f"data.{list_type}.json"

    def has_list(self, list_type: str) -> bool:
        return self.path_for(list_type).is_file()

    def _read(self, list_type: str) -> list[str]:
        path = self.path_for(list_type)
        if not path.is_file():
            raise SourceUnavailableError(list_type, str(path))

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a JSON array of strings")
        logger.info("Read %d entries from %s", len(data), path)
        return [str(word) for word in data]

    def _write(self, list_type: str, words: list[str]) -> None:
        path = self.path_for(list_type)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(words, f, indent=2, ensure_ascii=False)
            f.write("\n")

    def __repr__(self) -> str:
        return f"JsonDictionaryStore({str(self.data_dir)!r})"


class MemoryDictionaryStore(DictionaryStore):
    """Word lists kept in memory.

    Args:
        lists: Initial ``{name: words}`` mapping (copied).
    """

    def __init__(self, lists: Optional[Mapping[str, Iterable[str]]] = None) -> None:
        self._lists: dict[str, list[str]] = {
            name: list(words) for name, words in (lists or {}).items()
        }

    def has_list(self, list_type: str) -> bool:
        return list_type in self._lists

    def _read(self, list_type: str) -> list[str]:
        if list_type not in self._lists:
            raise SourceUnavailableError(list_type, "memory")
        return list(self._lists[list_type])

    def _write(self, list_type: str, words: list[str]) -> None:
        self._lists[list_type] = list(words)

    def __repr__(self) -> str:
        return f"MemoryDictionaryStore({sorted(self._lists)!r})"


def default_store() -> JsonDictionaryStore:
    """Store pointing at the model bundled with the package."""
    return JsonDictionaryStore(DEFAULT_DATA_DIR)
