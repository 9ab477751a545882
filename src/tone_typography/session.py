# src/tone_typography/session.py
from __future__ import annotations

"""
session.py
==========

Does: Presentation-facing facade pairing the reconciliation engine with the tone
      orchestrator: every text change updates the records synchronously, then is
      handed to the orchestrator for debounced classification.
Returns:
  - TypingSession.records -> tuple[CharacterRecord, ...] (read-only snapshot)
  - TypingSession.tone    -> current published Tone
Used by: The interactive demo and any renderer consuming records keyed by id.
"""

import logging
import random
from collections.abc import Callable

from tone_typography import config
from tone_typography.text import (
    CharacterRecord,
    StylePools,
    load_style_pools,
    make_style_token_factory,
    reconcile,
)
from tone_typography.tone import CircuitBreaker, Tone, ToneOrchestrator
from tone_typography.tone.llm import get_llm_client
from tone_typography.utils.log import debug

logger = logging.getLogger(__name__)

RecordsListener = Callable[[tuple[CharacterRecord, ...]], None]

__all__ = ["RecordsListener", "TypingSession", "build_orchestrator"]


def build_orchestrator(
    *, heuristic_only: bool = False, drop_stale_results: bool = False
) -> ToneOrchestrator:
    """Wire the default breaker (remote client when an API key is set) into an orchestrator."""
    client = None if heuristic_only else get_llm_client(debug=True)
    if client is None:
        logger.info("No remote tone classifier configured; using heuristic only")
    return ToneOrchestrator(CircuitBreaker(client), drop_stale_results=drop_stale_results)


class TypingSession:
    """Hold the current text, its records and tone for one editor surface."""

    def __init__(
        self,
        orchestrator: ToneOrchestrator | None = None,
        *,
        pools: StylePools | None = None,
        initial_text: str = config.INITIAL_TEXT,
        rng: random.Random | None = None,
    ):
        self.orchestrator = orchestrator or build_orchestrator()
        self.pools = pools or load_style_pools()
        self.rng = rng
        self.locked = False
        self.text = initial_text
        self._records = reconcile((), initial_text, self._style_factory())
        self._records_listeners: list[RecordsListener] = []
        self._tone_listeners: list[Callable[[Tone], None]] = []
        self.orchestrator.add_listener(self._on_tone)

    @property
    def records(self) -> tuple[CharacterRecord, ...]:
        return self._records

    @property
    def tone(self) -> Tone:
        return self.orchestrator.current_tone

    def add_records_listener(self, listener: RecordsListener) -> None:
        self._records_listeners.append(listener)

    def add_tone_listener(self, listener: Callable[[Tone], None]) -> None:
        self._tone_listeners.append(listener)

    def _style_factory(self):
        return make_style_token_factory(self.tone, self.pools, self.rng)

    def on_text_changed(self, text: str) -> tuple[CharacterRecord, ...]:
        """Reconcile immediately, notify, then hand the text to the orchestrator."""
        self._records = reconcile(self._records, text, self._style_factory())
        self.text = text
        debug(f"reconciled {len(text)} chars (tone={self.tone})", topic="reconcile")
        self._notify_records()
        self.orchestrator.on_text_changed(text)
        return self._records

    def restyle(self, index: int) -> CharacterRecord | None:
        """Redraw one record's style token from the current tone pool, unless locked."""
        if not 0 <= index < len(self._records):
            raise IndexError(f"record index {index} out of range for {len(self._records)} records")
        if self.locked:
            return None
        old = self._records[index]
        new = old.restyled(self._style_factory()(old.char, index))
        self._records = self._records[:index] + (new,) + self._records[index + 1 :]
        self._notify_records()
        return new

    def lock(self) -> None:
        self.locked = True

    def melt(self) -> None:
        self.locked = False

    def _notify_records(self) -> None:
        for listener in list(self._records_listeners):
            try:
                listener(self._records)
            except Exception:
                logger.exception("Records listener %r failed", listener)

    def _on_tone(self, tone: Tone) -> None:
        debug(f"tone -> {tone}", topic="tone")
        for listener in list(self._tone_listeners):
            try:
                listener(tone)
            except Exception:
                logger.exception("Tone listener %r failed", listener)
