# src/tone_typography/text/styles.py

"""
Style-token pools.
-----------------
Does:
- Load the tone-indexed pools from data/style_pools.json (validated: all tones, non-empty)
- Build style-token factories that draw at random from one tone's pool
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from tone_typography.tone.types import TONES, Tone
from tone_typography.utils.load_config import load_config

__all__ = [
    "StylePools",
    "StyleTokenFactory",
    "validate_style_pools",
    "load_style_pools",
    "make_style_token_factory",
]

logger = logging.getLogger(__name__)

StylePools = Mapping[Tone, Sequence[str]]
StyleTokenFactory = Callable[[str, int], str]


def validate_style_pools(data: dict[str, Any]) -> dict[str, Any]:
    """Require every tone to map to a non-empty list of strings."""
    missing = [t for t in TONES if t not in data]
    if missing:
        raise ValueError(f"missing pools for tones: {', '.join(missing)}")
    for tone in TONES:
        pool = data[tone]
        if not isinstance(pool, list) or not pool:
            raise ValueError(f"pool for '{tone}' must be a non-empty list")
        if not all(isinstance(tok, str) for tok in pool):
            raise ValueError(f"pool for '{tone}' must contain only strings")
    return {tone: tuple(data[tone]) for tone in TONES}


def load_style_pools(file: str = "style_pools") -> dict[Tone, tuple[str, ...]]:
    pools = load_config(file, mode="validated_dict", validator=validate_style_pools)
    logger.debug("Loaded style pools: %s", {t: len(p) for t, p in pools.items()})
    return pools


def make_style_token_factory(
    tone: Tone, pools: StylePools, rng: random.Random | None = None
) -> StyleTokenFactory:
    """Return ``(char, position) -> token`` drawing uniformly from ``pools[tone]``."""
    pool = pools[tone]
    chooser = rng or random

    def factory(char: str, position: int) -> str:
        return chooser.choice(pool)

    return factory
