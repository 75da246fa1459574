"""Accent folding for sentiment tokenization.

Converts accented and extended Latin characters to plain ASCII so that
"café", "CAFÉ" and "cafe" all reach the dictionary as the same token.

Two input flavours are supported:

- ``str``: already-decoded Unicode, folded with the character table
  (plus any locale overrides).
- ``bytes``: checked with :func:`seems_utf8`. Valid UTF-8 is folded with
  the character table; anything else is treated as ISO-8859-1 and folded
  byte by byte.

The result always has the same type as the input. Characters without a
mapping pass through untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Union

from .charmap import BASE_CHARMAP, LATIN1_DIGRAPHS, LATIN1_SINGLE, LOCALE_OVERRIDES

TextLike = Union[str, bytes]


# ---------------------------------------------------------------------------
# Encoding detection
# ---------------------------------------------------------------------------


def seems_utf8(data: bytes) -> bool:
    """Return True if ``data`` looks like a UTF-8 byte sequence.

    The leading byte of each sequence announces 0-5 continuation bytes,
    each of which must match ``10xxxxxx``. Five- and six-byte forms are
    accepted even though modern UTF-8 stops at four.

    Args:
        data: Raw bytes to inspect.

    Returns:
        False on the first malformed or truncated sequence, True otherwise.
    """
    length = len(data)
    i = 0
    while i < length:
        c = data[i]
        if c < 0x80:
            n = 0
        elif c & 0xE0 == 0xC0:
            n = 1
        elif c & 0xF0 == 0xE0:
            n = 2
        elif c & 0xF8 == 0xF0:
            n = 3
        elif c & 0xFC == 0xF8:
            n = 4
        elif c & 0xFE == 0xFC:
            n = 5
        else:
            return False
        for _ in range(n):
            i += 1
            if i == length or data[i] & 0xC0 != 0x80:
                return False
        i += 1
    return True


# ---------------------------------------------------------------------------
# Character tables
# ---------------------------------------------------------------------------


def _charmap_for(locale: Optional[str]) -> tuple[re.Pattern[str], dict[str, str]]:
    """Substitution pattern for a locale; locales without overrides share the base one."""
    return _build_charmap(locale if locale in LOCALE_OVERRIDES else None)


@lru_cache(maxsize=None)
def _build_charmap(locale: Optional[str]) -> tuple[re.Pattern[str], dict[str, str]]:
    table = dict(BASE_CHARMAP)
    if locale is not None:
        table.update(LOCALE_OVERRIDES[locale])
    # Longest keys first so multi-character entries like "l·l" win.
    keys = sorted(table, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(key) for key in keys))
    return pattern, table


def _fold_unicode(text: str, locale: Optional[str]) -> str:
    pattern, table = _charmap_for(locale)
    return pattern.sub(lambda m: table[m.group()], text)


def _fold_latin1(data: bytes) -> bytes:
    data = data.translate(LATIN1_SINGLE)
    for raw, ascii_form in LATIN1_DIGRAPHS.items():
        data = data.replace(raw, ascii_form)
    return data


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalize(text: TextLike, locale: Optional[str] = None) -> TextLike:
    """Fold accented characters in ``text`` to ASCII.

    Args:
        text: A ``str`` or raw ``bytes``.
        locale: Locale identifier (e.g. ``"de_DE"``) selecting extra
            substitutions. ``None`` uses the base table only.

    Returns:
        The folded text, of the same type as ``text``.
    """
    if isinstance(text, bytes):
        if text.isascii():
            return text
        if seems_utf8(text):
            decoded = text.decode("utf-8", errors="surrogateescape")
            folded = _fold_unicode(decoded, locale)
            return folded.encode("utf-8", errors="surrogateescape")
        return _fold_latin1(text)

    if text.isascii():
        return text
    return _fold_unicode(text, locale)


@dataclass(frozen=True)
class TextNormalizer:
    """Accent folder bound to a locale.

    Example::

        normalizer = TextNormalizer(locale="de_DE")
        normalizer.normalize("Grüße")  # "Gruesse"

    Args:
        locale: Locale identifier selecting override substitutions, or
            ``None`` for the base table.
    """

    locale: Optional[str] = None

    @property
    def has_overrides(self) -> bool:
        """Whether the locale adds substitutions on top of the base table."""
        return (self.locale or "") in LOCALE_OVERRIDES

    def normalize(self, text: TextLike) -> TextLike:
        """Fold ``text`` using this normalizer's locale."""
        return normalize(text, self.locale)

    __call__ = normalize
