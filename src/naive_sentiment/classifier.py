"""Dictionary-based Naive Bayes sentiment classifier.

Scores a sentence against three word lists (positive, negative, neutral)
and returns a probability for each class. Pure Python, no numeric
libraries required.

Scoring works as follows:

- the sentence is tokenized (negation gluing, accent folding, lower-case)
- tokens that are too short, too long, or in the ignore list are dropped
- for each class, every remaining token multiplies the class score by
  ``count + 1``, where ``count`` is 1 if the token is in that class's word
  list and 0 otherwise
- each class score is multiplied by its prior, then all three are
  normalized to sum to 1 and rounded to 3 decimals

Products are kept as exact integers and priors as fractions, so long
sentences cannot overflow.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Mapping
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Optional

from .dictionary import Dictionary, build_dictionary
from .errors import DegenerateScoreError, SourceUnavailableError
from .models import DEFAULT_PRIORS, SentimentResult, TrainingResult
from .normalizer import TextLike, TextNormalizer
from .store import DictionaryStore, JsonDictionaryStore, default_store
from .tokenizer import token_length, tokenize

if TYPE_CHECKING:
    from .config import SentimentSettings

logger = logging.getLogger(__name__)

DEFAULT_MIN_TOKEN_LENGTH = 1
DEFAULT_MAX_TOKEN_LENGTH = 15


def _round_half_up(value: Fraction, places: int = 3) -> float:
    scale = 10 ** places
    return math.floor(value * scale + Fraction(1, 2)) / scale


class SentimentClassifier:
    """Classify short texts as positive, negative or neutral.

    Example::

        classifier = SentimentClassifier()          # bundled model
        classifier.score("I love this lovely place")
        # {"pos": 0.667, "neg": 0.167, "neu": 0.167}
        classifier.categorize("The boy is very bad")  # "neg"

        # Custom word lists
        store = MemoryDictionaryStore({"pos": [...], "neg": [...], ...})
        classifier = SentimentClassifier(store=store)

    Args:
        dictionary: Prebuilt dictionary. If omitted it is built from
            ``store`` (or the bundled model when no store is given).
        store: Word list store used for building, ``load`` without
            explicit words, ``reload`` and ``train``.
        normalizer: Accent folder (overrides ``locale``).
        locale: Locale for the default normalizer, e.g. ``"de_DE"``.
        min_token_length: Tokens must be strictly longer than this (bytes).
        max_token_length: Tokens must be strictly shorter than this (bytes).
        priors: Class prior weights. Missing classes raise ``ValueError``.
    """

    def __init__(
        self,
        dictionary: Optional[Dictionary] = None,
        *,
        store: Optional[DictionaryStore] = None,
        normalizer: Optional[TextNormalizer] = None,
        locale: Optional[str] = None,
        min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH,
        max_token_length: int = DEFAULT_MAX_TOKEN_LENGTH,
        priors: Optional[Mapping[str, float]] = None,
    ) -> None:
        if min_token_length < 0:
            raise ValueError("min_token_length must be non-negative")
        if max_token_length <= min_token_length:
            raise ValueError("max_token_length must be greater than min_token_length")

        if dictionary is None:
            store = store or default_store()
            dictionary = build_dictionary(store)

        self._dictionary = dictionary
        self._store = store
        self._normalizer = normalizer or TextNormalizer(locale=locale)
        self.min_token_length = min_token_length
        self.max_token_length = max_token_length
        self._priors = self._validate_priors(priors or DEFAULT_PRIORS, dictionary.classes)
        self._lock = threading.Lock()

    @classmethod
    def from_store(cls, store: DictionaryStore, **kwargs: Any) -> "SentimentClassifier":
        """Build a classifier from every list in ``store``."""
        return cls(build_dictionary(store), store=store, **kwargs)

    @classmethod
    def from_settings(
        cls, settings: Optional["SentimentSettings"] = None
    ) -> "SentimentClassifier":
        """Build a classifier from environment-driven settings."""
        from .config import load_settings

        settings = settings or load_settings()
        if settings.data_dir is not None:
            store: DictionaryStore = JsonDictionaryStore(settings.data_dir)
        else:
            store = default_store()
        return cls.from_store(
            store,
            locale=settings.locale,
            min_token_length=settings.min_token_length,
            max_token_length=settings.max_token_length,
            priors=settings.priors,
        )

    @staticmethod
    def _validate_priors(
        priors: Mapping[str, float], classes: tuple[str, ...]
    ) -> dict[str, Fraction]:
        missing = [c for c in classes if c not in priors]
        if missing:
            raise ValueError(f"Missing priors for classes: {missing}")
        exact: dict[str, Fraction] = {}
        for c in classes:
            value = Fraction(str(priors[c]))
            if value < 0:
                raise ValueError(f"Prior for '{c}' must be non-negative, got {priors[c]}")
            exact[c] = value
        return exact

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def dictionary(self) -> Dictionary:
        """The dictionary snapshot currently used for scoring."""
        return self._dictionary

    @property
    def store(self) -> Optional[DictionaryStore]:
        return self._store

    @property
    def normalizer(self) -> TextNormalizer:
        return self._normalizer

    @property
    def classes(self) -> tuple[str, ...]:
        return self._dictionary.classes

    @property
    def priors(self) -> dict[str, float]:
        return {c: float(p) for c, p in self._priors.items()}

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def tokenize(self, text: TextLike) -> list[str]:
        """Tokenize ``text`` the way :meth:`score` does."""
        return tokenize(text, self._dictionary.negation_prefixes, self._normalizer)

    def qualifying_tokens(
        self, text: TextLike, dictionary: Optional[Dictionary] = None
    ) -> list[str]:
        """Tokens of ``text`` that take part in scoring."""
        if dictionary is None:
            dictionary = self._dictionary
        tokens = tokenize(text, dictionary.negation_prefixes, self._normalizer)
        return [t for t in tokens if self._qualifies(t, dictionary)]

    def _qualifies(self, token: str, dictionary: Dictionary) -> bool:
        length = token_length(token)
        return (
            self.min_token_length < length < self.max_token_length
            and not dictionary.is_ignored(token)
        )

    def score(self, text: TextLike) -> dict[str, float]:
        """Compute class probabilities for ``text``.

        Args:
            text: Sentence to score (``str`` or raw ``bytes``).

        Returns:
            ``{class_name: probability}`` ordered by descending probability.
            Equal probabilities keep class order (pos, neg, neu).

        Raises:
            DegenerateScoreError: If every class score is zero, which only
                happens when all priors are zero.
        """
        dictionary = self._dictionary
        tokens = self.qualifying_tokens(text, dictionary)

        weighted: dict[str, Fraction] = {}
        for cls in dictionary.classes:
            product = 1
            for token in tokens:
                product *= dictionary.count(token, cls) + 1
            weighted[cls] = self._priors[cls] * product

        total = sum(weighted.values())
        if total == 0:
            raise DegenerateScoreError(
                "Cannot normalize sentiment scores: all class scores are zero"
            )

        probabilities = {cls: _round_half_up(w / total) for cls, w in weighted.items()}
        ranked = sorted(probabilities, key=lambda c: -probabilities[c])
        logger.debug("Scored %d qualifying token(s): %s", len(tokens), probabilities)
        return {cls: probabilities[cls] for cls in ranked}

    def categorize(self, text: TextLike) -> str:
        """Return the most probable class for ``text``."""
        return next(iter(self.score(text)))

    # British spelling kept as an alias.
    categorise = categorize

    def classify(self, text: TextLike) -> SentimentResult:
        """Score ``text`` and wrap the outcome in a :class:`SentimentResult`."""
        probabilities = self.score(text)
        if isinstance(text, bytes):
            text = text.decode("utf-8", errors="replace")
        return SentimentResult(
            text=text,
            predicted_class=next(iter(probabilities)),
            probabilities=probabilities,
        )

    def classify_batch(self, texts: list[TextLike]) -> list[SentimentResult]:
        """Classify several texts."""
        return [self.classify(text) for text in texts]

    # ------------------------------------------------------------------
    # Loading and training
    # ------------------------------------------------------------------

    def load(self, class_name: str, words: Optional[list[str]] = None) -> bool:
        """Merge a class word list into the live dictionary.

        Merging is additive: existing entries stay and the counters keep
        growing, even when the same list is loaded again.

        Args:
            class_name: Class to load.
            words: Word list. If omitted, it is read from the store.

        Returns:
            True once the new dictionary is published.

        Raises:
            SourceUnavailableError: If ``words`` is omitted and there is no
                store, or the store lacks the list.
            ValueError: If ``class_name`` is not a known class.
            InvalidTrainingInputError: If ``words`` is a single string.
        """
        if words is None:
            if self._store is None:
                raise SourceUnavailableError(class_name, "no store configured")
            words = self._store.get_list(class_name)

        with self._lock:
            self._dictionary = self._dictionary.load(class_name, words)
        return True

    def reload(self, store: Optional[DictionaryStore] = None) -> Dictionary:
        """Reload every list from ``store`` (default: the current store).

        Class lists merge into the current dictionary; the ignore and
        prefix lists are replaced. The store becomes the current store.

        Raises:
            SourceUnavailableError: If there is no store or a list is missing.
        """
        store = store or self._store
        if store is None:
            raise SourceUnavailableError("all", "no store configured")

        with self._lock:
            self._dictionary = build_dictionary(
                store, self._dictionary.classes, base=self._dictionary
            )
            self._store = store
        logger.info("Reloaded dictionary from %r", store)
        return self._dictionary

    def train(self, class_name: str, words: Any) -> TrainingResult:
        """Append ``words`` to the stored list for ``class_name``.

        The live dictionary is not modified; call :meth:`load` or
        :meth:`reload` to pick up the new words.

        Raises:
            InvalidTrainingInputError: If ``words`` is not a flat list of
                strings.
            SourceUnavailableError: If there is no store or the class list
                is missing.
        """
        if self._store is None:
            raise SourceUnavailableError(class_name, "no store configured")
        with self._lock:
            return self._store.train(class_name, words)
