# src/lantern/services/moderation.py
"""Keyword moderation for submitted text."""

from typing import Final

# Literal substrings; matching is case-insensitive and ignores word boundaries.
BANNED_PHRASES: Final[tuple[str, ...]] = (
    "suicide",
    "kill",
    "bomb",
    "attack",
    "shut up",
    "die",
)


def check_for_flags(text: str | None) -> bool:
    """Return True if ``text`` contains any banned phrase.

    Empty or missing text never flags.
    """
    lowered = (text or "").lower()
    return any(phrase in lowered for phrase in BANNED_PHRASES)
