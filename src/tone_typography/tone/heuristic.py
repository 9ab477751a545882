# src/tone_typography/tone/heuristic.py

"""
Heuristic Tone Classifier.
-------------------------
Does:
- Classify text into calm | playful | serious | intense using local lexical rules only
- Rules are ordered, first match wins; no clock, randomness or I/O per call
- Marker vocabularies live in data/playful_markers.json and data/calm_markers.json
  and are loaded once (LRU cache) through load_config
"""

from __future__ import annotations

import logging
from functools import lru_cache

from tone_typography.config import MIN_TEXT_LENGTH
from tone_typography.tone.types import DEFAULT_TONE, Tone
from tone_typography.utils.load_config import load_config

__all__ = ["classify", "get_markers"]

logger = logging.getLogger(__name__)

UPPERCASE_RATIO_TH: float = 0.4
UPPERCASE_MIN_LENGTH: int = 3
PUNCTUATION_MAX: int = 2
CALM_MIN_WORDS: int = 15
_PUNCTUATION = frozenset("!?")


@lru_cache(maxsize=1)
def get_markers() -> tuple[frozenset[str], frozenset[str]]:
    """Return (playful, calm) marker sets, lowercased."""
    playful = load_config("playful_markers", mode="set")
    calm = load_config("calm_markers", mode="set")
    logger.debug("Loaded %d playful / %d calm markers", len(playful), len(calm))
    return (
        frozenset(m.lower() for m in playful),
        frozenset(m.lower() for m in calm),
    )


def _contains_any(text: str, markers: frozenset[str]) -> bool:
    return any(m in text for m in markers)


def classify(text: str) -> Tone:
    """
    Classify ``text`` with the local rule ladder.

    1. trimmed text shorter than MIN_TEXT_LENGTH -> serious
    2. shouting (uppercase ratio) or >2 '!'/'?' -> intense
    3. playful marker                           -> playful
    4. long and unpunctuated                    -> calm
    5. calm marker                              -> calm
    6. otherwise                                -> serious
    """
    if len(text.strip()) < MIN_TEXT_LENGTH:
        return DEFAULT_TONE

    length = len(text)
    upper_count = sum(1 for c in text if c.isupper())
    punc_count = sum(1 for c in text if c in _PUNCTUATION)

    if (upper_count > length * UPPERCASE_RATIO_TH and length > UPPERCASE_MIN_LENGTH) or (
        punc_count > PUNCTUATION_MAX
    ):
        return "intense"

    lower_text = text.lower()
    playful, calm = get_markers()

    if _contains_any(lower_text, playful):
        return "playful"

    if len(text.split()) > CALM_MIN_WORDS and punc_count == 0:
        return "calm"

    if _contains_any(lower_text, calm):
        return "calm"

    return "serious"
