"""Environment-driven settings for the sentiment classifier."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import DEFAULT_PRIORS, SentimentClass

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SentimentSettings(BaseSettings):
    """
    Classifier settings read from the environment (or a ``.env`` file).
    """

    model_config = SettingsConfigDict(
        env_prefix="", env_file=".env", extra="ignore", populate_by_name=True
    )

    # ---- Model data ----
    # None means the word lists bundled with the package.
    data_dir: Optional[Path] = Field(default=None, alias="SENTIMENT_DATA_DIR")

    # Locale used for accent folding overrides, e.g. "de_DE" or "da_DK".
    locale: Optional[str] = Field(default=None, alias="SENTIMENT_LOCALE")

    # ---- Scoring ----
    min_token_length: int = Field(default=1, ge=0, alias="SENTIMENT_MIN_TOKEN_LENGTH")
    max_token_length: int = Field(default=15, ge=1, alias="SENTIMENT_MAX_TOKEN_LENGTH")

    prior_pos: float = Field(
        default=DEFAULT_PRIORS[SentimentClass.POSITIVE.value], ge=0.0, alias="SENTIMENT_PRIOR_POS"
    )
    prior_neg: float = Field(
        default=DEFAULT_PRIORS[SentimentClass.NEGATIVE.value], ge=0.0, alias="SENTIMENT_PRIOR_NEG"
    )
    prior_neu: float = Field(
        default=DEFAULT_PRIORS[SentimentClass.NEUTRAL.value], ge=0.0, alias="SENTIMENT_PRIOR_NEU"
    )

    # ---- Logging ----
    log_level: str = Field(default="WARNING", alias="SENTIMENT_LOG_LEVEL")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level

    @model_validator(mode="after")
    def _check_ranges(self) -> "SentimentSettings":
        if self.max_token_length <= self.min_token_length:
            raise ValueError("max_token_length must be greater than min_token_length")
        total = math.fsum((self.prior_pos, self.prior_neg, self.prior_neu))
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Priors must sum to 1.0, got {total}")
        return self

    @property
    def priors(self) -> dict[str, float]:
        return {
            SentimentClass.POSITIVE.value: self.prior_pos,
            SentimentClass.NEGATIVE.value: self.prior_neg,
            SentimentClass.NEUTRAL.value: self.prior_neu,
        }


def load_settings() -> SentimentSettings:
    return SentimentSettings()
