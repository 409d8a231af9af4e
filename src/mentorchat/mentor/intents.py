"""Keyword-based intent detection.

Classifies a user message into a coarse startup topic by scanning an
ordered keyword table. The first intent with a matching keyword wins.
"""

from enum import Enum


class Intent(str, Enum):
    """Coarse topic of a user message."""

    FUNDING = "funding"
    MARKETING = "marketing"
    LEGAL = "legal"
    OPS = "ops"
    PRICING = "pricing"
    PITCH = "pitch"
    FALLBACK = "fallback"


# Scanned in order; the first matching entry wins
INTENT_KEYWORDS: tuple[tuple[Intent, tuple[str, ...]], ...] = (
    (Intent.FUNDING, ("fund", "raise", "investor", "seed", "pre-seed", "series")),
    (Intent.MARKETING, ("marketing", "growth", "users", "acquisition", "channels")),
    (Intent.LEGAL, ("legal", "contract", "term", "agreement", "nda")),
    (Intent.OPS, ("team", "hiring", "onboard", "hr")),
    (Intent.PRICING, ("pricing", "revenue", "business model")),
    (Intent.PITCH, ("pitch", "deck", "investor email", "pitch deck")),
)


def detect_intent(text: str) -> Intent:
    """Return the first intent whose keywords occur in ``text``.

    Matching is a case-insensitive substring test, so "fundraising"
    matches "fund" and "share" matches "hr".
    """
    lower = text.lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return intent
    return Intent.FALLBACK


def string_hash(text: str) -> int:
    """32-bit signed polynomial hash (``h = h*31 + unit``) over UTF-16 code units.

    Produces the same value as Java's ``String.hashCode``.
    """
    h = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h = (h * 31 + int.from_bytes(data[i:i + 2], "little")) & 0xFFFFFFFF
    return h - 0x100000000 if h >= 0x80000000 else h
