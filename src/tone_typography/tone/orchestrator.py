# src/tone_typography/tone/orchestrator.py

"""
orchestrator.py
===============

Does: Compose debounce -> circuit breaker -> (remote | heuristic) behind one
      fire-and-forget entry point, and publish resolved tones to listeners.
Returns:
  - ToneOrchestrator.on_text_changed(text) -> None (result arrives via listeners)
  - ToneOrchestrator.current_tone -> last published Tone
Used by: TypingSession and the interactive demo.

Results are applied last-resolved-wins: an in-flight attempt is never cancelled
and may publish after a newer one. drop_stale_results=True ignores any result
whose request generation is older than the newest fired request.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable

from tone_typography import config
from tone_typography.tone.breaker import CircuitBreaker
from tone_typography.tone.debounce import Debouncer
from tone_typography.tone.types import DEFAULT_TONE, Tone

__all__ = ["ToneListener", "ToneOrchestrator"]

logger = logging.getLogger(__name__)

ToneListener = Callable[[Tone], None]


class ToneOrchestrator:
    def __init__(
        self,
        breaker: CircuitBreaker,
        *,
        quiescence_seconds: float = config.QUIESCENCE_SECONDS,
        min_text_length: int = config.MIN_TEXT_LENGTH,
        initial_tone: Tone = DEFAULT_TONE,
        clock: Callable[[], float] = time.monotonic,
        drop_stale_results: bool = False,
    ):
        self.breaker = breaker
        self.min_text_length = min_text_length
        self.current_tone: Tone = initial_tone
        self.clock = clock
        self.drop_stale_results = drop_stale_results
        self.debouncer = Debouncer(quiescence_seconds)
        self._listeners: list[ToneListener] = []
        self._latest_text = ""
        self._generation = 0
        self._inflight: set[asyncio.Task[None]] = set()

    # ── Listeners ──────────────────────────────────────────────────────────
    def add_listener(self, listener: ToneListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ToneListener) -> None:
        self._listeners.remove(listener)

    # ── Entry point ────────────────────────────────────────────────────────
    def on_text_changed(self, text: str) -> None:
        """Debounce a text change; must be called from the running event loop."""
        self.debouncer.cancel()
        if len(text.strip()) < self.min_text_length:
            return
        self._latest_text = text
        self.debouncer.schedule(self._fire)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def in_flight(self) -> int:
        return len(self._inflight)

    def _fire(self) -> None:
        self._generation += 1
        task = asyncio.get_running_loop().create_task(
            self._classify(self._latest_text, self._generation)
        )
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _classify(self, text: str, generation: int) -> None:
        tone = await asyncio.to_thread(self.breaker.attempt, text, self.clock())
        if self.drop_stale_results and generation < self._generation:
            logger.debug(
                "Dropping stale tone %s (generation %d < %d)", tone, generation, self._generation
            )
            return
        self._publish(tone)

    def _publish(self, tone: Tone) -> None:
        self.current_tone = tone
        for listener in list(self._listeners):
            try:
                listener(tone)
            except Exception:
                logger.exception("Tone listener %r failed", listener)

    # ── Lifecycle ──────────────────────────────────────────────────────────
    async def drain(self) -> None:
        """Wait for every in-flight attempt (including ones started meanwhile)."""
        while True:
            pending = [t for t in self._inflight if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    def close(self) -> None:
        """Cancel the pending timer; in-flight attempts keep running."""
        self.debouncer.cancel()
