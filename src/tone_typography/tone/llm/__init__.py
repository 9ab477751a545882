"""
llm
===

Does: Expose the remote tone classifier: client factory, API-key check, prompt and reply helpers.
Returns: Re-exports of stable symbols from `llm_api_client` for external use.
Used by: The circuit breaker and the demo CLI.
Example:
    client = get_llm_client(); tone = parse_tone_reply(client.classify("wow lol"))
"""

from __future__ import annotations

# ── Public API re-exports ─────────────────────────────────────────────────────
from .llm_api_client import (
    OpenRouterToneClient,
    RemoteClassifierError,
    build_tone_prompt,
    get_llm_client,
    has_api_key,
    is_rate_limited,
    parse_tone_reply,
)

__all__ = [
    "OpenRouterToneClient",
    "RemoteClassifierError",
    "build_tone_prompt",
    "get_llm_client",
    "has_api_key",
    "is_rate_limited",
    "parse_tone_reply",
]

# Keep docformat explicit for tooling consistency.
__docformat__ = "google"
