"""Word dictionaries backing the sentiment classifier.

A :class:`Dictionary` maps each token to the classes whose word list
contains it. It also carries the ignore list, the negation prefixes and
a set of aggregate counters. Dictionaries are immutable: every ``load``
or ``with_*`` call returns a new value, so a classifier can keep scoring
against one snapshot while another is being built.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Optional

from .errors import InvalidTrainingInputError
from .models import CLASSES, IGNORE_LIST, PREFIX_LIST

if TYPE_CHECKING:
    from .store import DictionaryStore

logger = logging.getLogger(__name__)


def _zero_counts(classes: Iterable[str]) -> Mapping[str, int]:
    return MappingProxyType({c: 0 for c in classes})


@dataclass(frozen=True)
class ClassCounters:
    """Aggregate load counters.

    Every word read from a class list bumps both the token and the
    document counters, whether or not the word was new to the dictionary.
    Scoring never reads these values.

    Attributes:
        class_tok_counts: Words loaded per class.
        class_doc_counts: List entries loaded per class.
        tok_count: Words loaded across all classes.
        doc_count: List entries loaded across all classes.
    """

    class_tok_counts: Mapping[str, int] = field(default_factory=lambda: _zero_counts(CLASSES))
    class_doc_counts: Mapping[str, int] = field(default_factory=lambda: _zero_counts(CLASSES))
    tok_count: int = 0
    doc_count: int = 0

    def add(self, class_name: str, n: int) -> "ClassCounters":
        """Return counters with ``n`` more entries recorded for ``class_name``."""
        tok = dict(self.class_tok_counts)
        doc = dict(self.class_doc_counts)
        tok[class_name] = tok.get(class_name, 0) + n
        doc[class_name] = doc.get(class_name, 0) + n
        return ClassCounters(
            class_tok_counts=MappingProxyType(tok),
            class_doc_counts=MappingProxyType(doc),
            tok_count=self.tok_count + n,
            doc_count=self.doc_count + n,
        )

    def to_dict(self) -> dict:
        return {
            "class_tok_counts": dict(self.class_tok_counts),
            "class_doc_counts": dict(self.class_doc_counts),
            "tok_count": self.tok_count,
            "doc_count": self.doc_count,
        }


@dataclass(frozen=True)
class Dictionary:
    """Immutable token-to-class presence table.

    Example::

        dictionary = (
            Dictionary()
            .load("pos", ["love", "great"])
            .load("neg", ["bad"])
            .with_ignore_list(["the", "is"])
            .with_negation_prefixes(["isn't"])
        )
        dictionary.count("love", "pos")  # 1
        dictionary.count("love", "neg")  # 0

    Attributes:
        entries: ``token -> {class_name: count}``. Counts are 0 or 1.
        ignore_list: Tokens that never affect a score.
        negation_prefixes: Prefixes glued to the following word.
        counters: Aggregate load counters.
        classes: Class names accepted by :meth:`load`.
    """

    entries: Mapping[str, Mapping[str, int]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    ignore_list: frozenset[str] = frozenset()
    negation_prefixes: tuple[str, ...] = ()
    counters: ClassCounters = field(default_factory=ClassCounters)
    classes: tuple[str, ...] = CLASSES

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def count(self, token: str, class_name: str) -> int:
        """Presence count of ``token`` in ``class_name`` (0 if absent)."""
        per_class = self.entries.get(token)
        if per_class is None:
            return 0
        return per_class.get(class_name, 0)

    def classes_for(self, token: str) -> dict[str, int]:
        """All class counts recorded for ``token``."""
        return dict(self.entries.get(token, {}))

    def distinct_tokens(self, class_name: str) -> int:
        """Number of distinct tokens present in ``class_name``."""
        return sum(1 for per_class in self.entries.values() if class_name in per_class)

    def is_ignored(self, token: str) -> bool:
        return token in self.ignore_list

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, token: object) -> bool:
        return token in self.entries

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def load(self, class_name: str, words: Iterable[str]) -> "Dictionary":
        """Merge a class word list into a new dictionary.

        Each word is stripped. A ``(word, class)`` pair is stored at most
        once, but the counters grow for every word read, duplicates
        included. Loading the same list twice therefore leaves the entries
        unchanged while doubling the counters.

        Args:
            class_name: One of :attr:`classes`.
            words: Words belonging to that class.

        Returns:
            A new Dictionary; ``self`` is left untouched.

        Raises:
            ValueError: If ``class_name`` is not a known class.
            InvalidTrainingInputError: If ``words`` is a single string or
                bytes value instead of a collection of words.
        """
        if class_name not in self.classes:
            raise ValueError(f"Unknown class: {class_name}. Known: {list(self.classes)}")
        if isinstance(words, (str, bytes)):
            raise InvalidTrainingInputError(
                f"Word list must be a collection of words, got {type(words).__name__}"
            )

        entries = dict(self.entries)
        seen = 0
        for word in words:
            seen += 1
            word = word.strip()
            per_class = entries.get(word)
            if per_class is None or class_name not in per_class:
                updated = dict(per_class or {})
                updated[class_name] = 1
                entries[word] = MappingProxyType(updated)

        logger.debug(
            "Loaded %d word(s) into class '%s' (%d distinct tokens total)",
            seen, class_name, len(entries),
        )
        return replace(
            self,
            entries=MappingProxyType(entries),
            counters=self.counters.add(class_name, seen),
        )

    def with_ignore_list(self, words: Iterable[str]) -> "Dictionary":
        """Return a copy using ``words`` as the ignore list."""
        return replace(self, ignore_list=frozenset(words))

    def with_negation_prefixes(self, prefixes: Iterable[str]) -> "Dictionary":
        """Return a copy using ``prefixes`` as the negation prefix list."""
        return replace(self, negation_prefixes=tuple(prefixes))

    def to_dict(self) -> dict:
        """Summary statistics (not a full dump of the entries)."""
        return {
            "tokens": len(self.entries),
            "distinct_tokens": {c: self.distinct_tokens(c) for c in self.classes},
            "ignore_list": len(self.ignore_list),
            "negation_prefixes": len(self.negation_prefixes),
            "counters": self.counters.to_dict(),
        }


def build_dictionary(
    store: "DictionaryStore",
    classes: Iterable[str] = CLASSES,
    base: Optional[Dictionary] = None,
) -> Dictionary:
    """Load class lists, the ignore list and negation prefixes from a store.

    Class lists are merged additively into ``base`` (an empty dictionary
    by default); the ignore and prefix lists replace whatever ``base`` had.

    Raises:
        SourceUnavailableError: If any of the lists is missing.
    """
    dictionary = base if base is not None else Dictionary()
    for class_name in classes:
        dictionary = dictionary.load(class_name, store.get_list(class_name))
    dictionary = dictionary.with_ignore_list(store.get_list(IGNORE_LIST))
    dictionary = dictionary.with_negation_prefixes(store.get_list(PREFIX_LIST))
    logger.info(
        "Built dictionary: %d tokens, %d ignored, %d negation prefixes",
        len(dictionary), len(dictionary.ignore_list), len(dictionary.negation_prefixes),
    )
    return dictionary
