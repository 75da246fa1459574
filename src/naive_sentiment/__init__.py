"""Naive Sentiment -- dictionary-based Naive Bayes sentiment classification."""

__version__ = "1.0.0"

from .classifier import SentimentClassifier
from .config import SentimentSettings, load_settings
from .dictionary import ClassCounters, Dictionary, build_dictionary
from .errors import (
    DegenerateScoreError,
    InvalidTrainingInputError,
    SentimentError,
    SourceUnavailableError,
)
from .models import (
    CLASSES,
    DEFAULT_PRIORS,
    SentimentClass,
    SentimentResult,
    TrainingResult,
)
from .normalizer import TextNormalizer, normalize, seems_utf8
from .store import (
    DictionaryStore,
    JsonDictionaryStore,
    MemoryDictionaryStore,
    default_store,
)
from .tokenizer import glue_negations, token_length, tokenize

__all__ = [
    # Core
    "SentimentClassifier",
    "SentimentClass",
    "SentimentResult",
    "TrainingResult",
    "CLASSES",
    "DEFAULT_PRIORS",
    # Dictionary
    "Dictionary",
    "ClassCounters",
    "build_dictionary",
    # Storage
    "DictionaryStore",
    "JsonDictionaryStore",
    "MemoryDictionaryStore",
    "default_store",
    # Text processing
    "TextNormalizer",
    "normalize",
    "seems_utf8",
    "tokenize",
    "glue_negations",
    "token_length",
    # Configuration
    "SentimentSettings",
    "load_settings",
    # Errors
    "SentimentError",
    "SourceUnavailableError",
    "InvalidTrainingInputError",
    "DegenerateScoreError",
]
