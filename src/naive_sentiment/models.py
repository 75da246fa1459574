"""Data models for sentiment classification results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SentimentClass(str, Enum):
    """The three sentiment categories, in tie-break order."""

    POSITIVE = "pos"
    NEGATIVE = "neg"
    NEUTRAL = "neu"


CLASSES: tuple[str, ...] = tuple(c.value for c in SentimentClass)

# Ignore list and negation prefixes share the store with the class lists.
IGNORE_LIST = "ign"
PREFIX_LIST = "prefix"

# Roughly 1/3 each; the last digit of "neu" makes the three sum to 1.0.
DEFAULT_PRIORS: dict[str, float] = {
    SentimentClass.POSITIVE.value: 0.333333333333,
    SentimentClass.NEGATIVE.value: 0.333333333333,
    SentimentClass.NEUTRAL.value: 0.333333333334,
}


@dataclass
class SentimentResult:
    """Result of classifying a single sentence."""

    text: str
    predicted_class: str
    probabilities: dict[str, float] = field(default_factory=dict)

    @property
    def confidence(self) -> float:
        """Probability of the predicted class."""
        return self.probabilities.get(self.predicted_class, 0.0)

    @property
    def sentiment(self) -> SentimentClass:
        return SentimentClass(self.predicted_class)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "predicted_class": self.predicted_class,
            "confidence": self.confidence,
            "probabilities": dict(self.probabilities),
        }


@dataclass
class TrainingResult:
    """Outcome of appending a word list to a stored class list."""

    class_name: str
    added: list[str] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        text = f"Training completed on '{self.class_name}': {len(self.added)} word(s) added"
        if self.ignored:
            text += f", ignored: {', '.join(self.ignored)}"
        return text

    def to_dict(self) -> dict:
        return {
            "class_name": self.class_name,
            "added": list(self.added),
            "ignored": list(self.ignored),
        }
