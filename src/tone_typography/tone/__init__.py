"""
tone.
====

Does: Tone classification subsystem: heuristic fallback, remote client, circuit
      breaker, debounce timer and the orchestrator composing them.
Returns: Re-exports of the stable classification API.
Used By: TypingSession, the demo CLI, and tests.
"""

from .breaker import CircuitBreaker, CircuitBreakerState
from .debounce import Debouncer, Idle, Scheduled
from .heuristic import classify
from .orchestrator import ToneListener, ToneOrchestrator
from .types import DEFAULT_TONE, TONES, RemoteToneClientProtocol, Tone

__all__ = [
    # types
    "Tone",
    "TONES",
    "DEFAULT_TONE",
    "RemoteToneClientProtocol",
    # classification
    "classify",
    "CircuitBreaker",
    "CircuitBreakerState",
    # scheduling
    "Debouncer",
    "Idle",
    "Scheduled",
    "ToneListener",
    "ToneOrchestrator",
]
