"""
types.py.

Does: Define the closed Tone vocabulary and the structural protocol for remote classifiers.
Used by: heuristic, breaker, orchestrator, llm client, text styles.
"""

from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable

Tone = Literal["calm", "playful", "serious", "intense"]

TONES: tuple[Tone, ...] = ("calm", "playful", "serious", "intense")
DEFAULT_TONE: Tone = "serious"


@runtime_checkable
class RemoteToneClientProtocol(Protocol):
    """
    Structural contract for a remote tone classifier.

    - classify(text): send one request and return the raw reply text.
      Raises on any failure; the error should expose a ``status_code``
      attribute or mention 429 / RESOURCE_EXHAUSTED when rate limited.
    """

    def classify(self, text: str) -> str: ...


__all__ = ["Tone", "TONES", "DEFAULT_TONE", "RemoteToneClientProtocol"]

__docformat__ = "google"
