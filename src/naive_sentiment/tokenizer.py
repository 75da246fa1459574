"""Sentence tokenization with negation gluing."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from .normalizer import TextLike, TextNormalizer


def glue_negations(text: TextLike, negation_prefixes: Iterable[str]) -> TextLike:
    """Join each negation prefix to the word that follows it.

    ``"isn't bad"`` becomes ``"isn'tbad"`` so the negated form can be looked
    up as a single dictionary entry. Matching is plain substring matching:
    a prefix found inside a longer word glues too.
    """
    is_bytes = isinstance(text, bytes)
    for prefix in negation_prefixes:
        needle = prefix.encode("utf-8") if is_bytes else prefix
        if needle in text:
            space = b" " if is_bytes else " "
            text = text.replace(needle + space, needle)
    return text


def tokenize(
    text: TextLike,
    negation_prefixes: Iterable[str] = (),
    normalizer: Optional[TextNormalizer] = None,
) -> list[str]:
    """Split a sentence into lowercase tokens.

    Processing order:
    1. CRLF line endings become a single space
    2. Negation prefixes are glued to the next word
    3. Accents are folded to ASCII
    4. Everything is lower-cased
    5. The string is split on single spaces

    Consecutive spaces yield empty tokens; they are kept so the output
    mirrors a strict split.

    Args:
        text: Sentence as ``str`` or raw ``bytes``.
        negation_prefixes: Prefixes to glue, e.g. ``["isn't", "don't"]``.
        normalizer: Accent folder to use (default: base table, no locale).

    Returns:
        A fresh list of tokens.
    """
    normalizer = normalizer or TextNormalizer()

    if isinstance(text, bytes):
        text = text.replace(b"\r\n", b" ")
    else:
        text = text.replace("\r\n", " ")

    text = glue_negations(text, negation_prefixes)
    text = normalizer.normalize(text)

    if isinstance(text, bytes):
        # Undecodable bytes survive as surrogates and keep their byte length.
        text = text.decode("utf-8", errors="surrogateescape")

    return text.lower().split(" ")


def token_length(token: str) -> int:
    """Length of ``token`` in UTF-8 bytes."""
    return len(token.encode("utf-8", errors="surrogateescape"))
