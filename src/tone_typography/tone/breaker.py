# src/tone_typography/tone/breaker.py

"""
Circuit breaker around the remote tone classifier.
-------------------------------------------------
Does:
- Route each attempt to the remote client or the local heuristic
- Open a quarantine window only on rate-limit failures (429 / RESOURCE_EXHAUSTED)
- Absorb every remote failure; attempt() always returns a Tone
- Guard the shared quarantine timestamp with a lock (attempts run in worker threads)
"""

from __future__ import annotations

import logging
import math
import threading

from tone_typography import config
from tone_typography.tone import heuristic
from tone_typography.tone.llm import is_rate_limited, parse_tone_reply
from tone_typography.tone.types import DEFAULT_TONE, RemoteToneClientProtocol, Tone

__all__ = ["CircuitBreakerState", "CircuitBreaker"]

logger = logging.getLogger(__name__)


class CircuitBreakerState:
    """
    Shared quarantine timestamp for one orchestrator.

    Starts never-quarantined (-inf). Written only by CircuitBreaker on a
    rate-limit failure, read by every attempt.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._quarantine_until = -math.inf

    @property
    def quarantine_until(self) -> float:
        with self._lock:
            return self._quarantine_until

    def quarantine(self, until: float) -> None:
        with self._lock:
            self._quarantine_until = until

    def is_quarantined(self, now: float) -> bool:
        with self._lock:
            return now < self._quarantine_until

    def reset(self) -> None:
        with self._lock:
            self._quarantine_until = -math.inf


class CircuitBreaker:
    """Wrap a remote client with heuristic fallback and a rate-limit quarantine."""

    def __init__(
        self,
        client: RemoteToneClientProtocol | None,
        state: CircuitBreakerState | None = None,
        *,
        quarantine_seconds: float = config.QUARANTINE_SECONDS,
        min_text_length: int = config.MIN_TEXT_LENGTH,
    ):
        self.client = client
        self.state = state or CircuitBreakerState()
        self.quarantine_seconds = quarantine_seconds
        self.min_text_length = min_text_length

    def is_quarantined(self, now: float) -> bool:
        return self.state.is_quarantined(now)

    def reset(self) -> None:
        self.state.reset()

    def attempt(self, text: str, now: float) -> Tone:
        """Classify ``text`` at time ``now`` (seconds); never raises for remote failures."""
        if len(text.strip()) < self.min_text_length:
            return DEFAULT_TONE

        if self.state.is_quarantined(now):
            logger.debug("Quarantined until %.1f; using heuristic", self.state.quarantine_until)
            return heuristic.classify(text)

        if self.client is None:
            return heuristic.classify(text)

        try:
            reply = self.client.classify(text)
        except Exception as e:
            if is_rate_limited(e):
                self.state.quarantine(now + self.quarantine_seconds)
                logger.warning(
                    "Remote classifier rate limited; switching to heuristic mode for %.0fs",
                    self.quarantine_seconds,
                )
            else:
                logger.error("Tone detection failed: %s", e)
            return heuristic.classify(text)

        return parse_tone_reply(reply)
