# tests/test_session.py
"""TypingSession: synchronous reconciliation, debounced tone flow, restyle/lock."""

from __future__ import annotations

import asyncio
import random

import pytest

from tone_typography.session import TypingSession
from tone_typography.tone.breaker import CircuitBreaker
from tone_typography.tone.orchestrator import ToneOrchestrator

QUIET = 0.05
POOLS = {
    "calm": ["c1", "c2"],
    "playful": ["p1", "p2"],
    "serious": ["s1", "s2"],
    "intense": ["i1", "i2"],
}


def _session(initial_text="cat"):
    orch = ToneOrchestrator(CircuitBreaker(None), quiescence_seconds=QUIET)
    return TypingSession(orch, pools=POOLS, initial_text=initial_text, rng=random.Random(1))


def test_initial_records_spell_initial_text_with_default_tone_tokens():
    s = _session("hello")
    assert s.text == "hello"
    assert "".join(r.char for r in s.records) == "hello"
    assert {r.style_token for r in s.records} <= set(POOLS["serious"])
    assert s.tone == "serious"


def test_text_change_reconciles_immediately_then_classifies():
    s = _session("WOW")
    snapshots, tones = [], []
    s.add_records_listener(snapshots.append)
    s.add_tone_listener(tones.append)

    async def scenario():
        before = s.records
        out = s.on_text_changed("WOW!!!")
        # records are updated before any classification happens
        assert snapshots == [out]
        assert out[:3] == before
        assert tones == []
        await asyncio.sleep(QUIET * 4)
        await s.orchestrator.drain()

    asyncio.run(scenario())
    assert tones == ["intense"]
    assert s.tone == "intense"


def test_new_characters_use_current_tone_pool():
    s = _session("")

    async def scenario():
        s.on_text_changed("quiet peace now")
        await asyncio.sleep(QUIET * 4)
        await s.orchestrator.drain()
        assert s.tone == "calm"
        s.on_text_changed("quiet peace now, friend")
        s.orchestrator.close()

    asyncio.run(scenario())
    assert {r.style_token for r in s.records[:15]} <= set(POOLS["serious"])
    assert {r.style_token for r in s.records[15:]} <= set(POOLS["calm"])


def test_restyle_replaces_record_and_respects_lock():
    s = _session("cat")
    seen = []
    s.add_records_listener(seen.append)
    old = s.records[1]

    new = s.restyle(1)
    assert new is not None and new is s.records[1]
    assert (new.id, new.char) == (old.id, old.char)
    assert new.style_token in POOLS["serious"]
    assert len(seen) == 1

    s.lock()
    assert s.restyle(0) is None
    assert len(seen) == 1
    s.melt()
    assert s.restyle(0) is not None


@pytest.mark.parametrize("index", [-1, -3, 3, 10])
def test_restyle_rejects_out_of_range_index(index):
    s = _session("cat")
    before = s.records
    with pytest.raises(IndexError):
        s.restyle(index)
    assert s.records == before
    assert "".join(r.char for r in s.records) == "cat"


def test_failing_tone_listener_does_not_block_others():
    s = _session("")
    seen = []

    def broken(_tone):
        raise RuntimeError("renderer crashed")

    s.add_tone_listener(broken)
    s.add_tone_listener(seen.append)

    async def scenario():
        s.on_text_changed("quiet peace now")
        await asyncio.sleep(QUIET * 4)
        await s.orchestrator.drain()

    asyncio.run(scenario())
    assert seen == ["calm"]
    assert s.tone == "calm"
