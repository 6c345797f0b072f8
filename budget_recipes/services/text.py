"""Text normalization shared by every matching rule."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Lowercase, fold diacritics, drop punctuation and collapse whitespace.

    "Crème fraîche (half-vol)" becomes "creme fraiche halfvol". Never fails:
    empty or non-text input yields an empty string.
    """
    if not text or not isinstance(text, str):
        return ""
    folded = unicodedata.normalize("NFKD", text.lower())
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    stripped = _NON_ALNUM.sub("", folded)
    return _WHITESPACE.sub(" ", stripped).strip()


def tokenize(normalized: str) -> list[str]:
    """Split an already normalized string into words."""
    return normalized.split()
