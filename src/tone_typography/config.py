# src/tone_typography/config.py

"""
config.py.
=========

Does: Central, env-overridable constants for tone classification and the remote client.
Returns: Plain module-level values read once at import time.
Used by: tone.breaker, tone.orchestrator, tone.llm, session, demo.
"""

from __future__ import annotations

import os

__all__ = [
    "QUIESCENCE_SECONDS",
    "QUARANTINE_SECONDS",
    "MIN_TEXT_LENGTH",
    "LLM_API_URL",
    "LLM_MODEL",
    "LLM_TEMPERATURE",
    "LLM_MAX_TOKENS",
    "LLM_TIMEOUT",
    "INITIAL_TEXT",
]


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


# ── Debounce / breaker timing (seconds) ──────────────────────────────────────
QUIESCENCE_SECONDS: float = _env_float("TONE_QUIESCENCE_SECONDS", 1.0)
QUARANTINE_SECONDS: float = _env_float("TONE_QUARANTINE_SECONDS", 60.0)
MIN_TEXT_LENGTH: int = _env_int("TONE_MIN_TEXT_LENGTH", 5)

# ── Remote classifier (OpenRouter chat completions) ──────────────────────────
LLM_API_URL = os.getenv("OPENROUTER_API_URL", "https://openrouter.ai/api/v1/chat/completions")
LLM_MODEL = os.getenv("OPENROUTER_MODEL", "mistralai/mistral-7b-instruct")
LLM_TEMPERATURE: float = _env_float("OPENROUTER_TEMPERATURE", 0.1)
LLM_MAX_TOKENS: int = _env_int("OPENROUTER_MAX_TOKENS", 5)
LLM_TIMEOUT: float = _env_float("OPENROUTER_TIMEOUT", 10.0)  # seconds

# ── Session defaults ─────────────────────────────────────────────────────────
INITIAL_TEXT = "TYPE SOMETHING TO EXPLORE TONE AND FORM."
