"""
Text Normalizer.

Canonicalizes voice-transcribed text before it is compared with catalog
names: lowercasing, misspelling and abbreviation substitution, filler
removal and whitespace collapsing.
"""

import re

from .constants import FILLER_PATTERN, SUBSTITUTION_PATTERNS

_WHITESPACE = re.compile(r"\s+")

# Removing a filler can join words into a phrase that an earlier table entry
# would have rewritten, so passes repeat until the text stops changing.
_MAX_PASSES = 5


def _normalize_once(text: str) -> str:
    normalized = text.lower().strip()

    for pattern, canonical in SUBSTITUTION_PATTERNS:
        normalized = pattern.sub(canonical, normalized)

    normalized = FILLER_PATTERN.sub("", normalized)
    return _WHITESPACE.sub(" ", normalized).strip()


def normalize_string(text: str | None) -> str:
    """
    Normalize spoken text for matching.

    Handles variations like:
    - "Can I have a expresso please" -> "espresso"
    - "sm vanila late" -> "small vanilla latte"
    - "um the quick" -> "quickie"

    Args:
        text: Raw transcribed text. None and empty strings are allowed.

    Returns:
        The normalized string, or "" for empty input.
    """
    if not text:
        return ""

    normalized = _normalize_once(text)
    for _ in range(_MAX_PASSES):
        again = _normalize_once(normalized)
        if again == normalized:
            break
        normalized = again
    return normalized
