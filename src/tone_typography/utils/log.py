"""
log.py.

Does: Topic-filtered trace printer controlled by TONE_DEBUG_TOPICS (comma-sep or 'all').
Returns: Prints timestamped lines with topic + level. Silent unless a topic is enabled.
Used by: the demo CLI trace output and ad-hoc debugging of sessions.
"""

import os
import sys
from datetime import datetime
from typing import TextIO

__all__ = ["debug", "enabled", "reload_topics"]


def _load_topics() -> set[str]:
    raw = os.getenv("TONE_DEBUG_TOPICS", "")
    return {t.strip().lower() for t in raw.split(",") if t.strip()}


_DEBUG_TOPICS = _load_topics()


def reload_topics() -> None:
    """Does: Reload topics from environment variable TONE_DEBUG_TOPICS."""
    global _DEBUG_TOPICS
    _DEBUG_TOPICS = _load_topics()


def enabled(topic: str) -> bool:
    """Does: Tell whether lines for this topic would be printed."""
    return "all" in _DEBUG_TOPICS or topic.lower().strip() in _DEBUG_TOPICS


def debug(
    msg: str,
    topic: str = "session",
    *,
    level: str = "DEBUG",
    stream: TextIO | None = None,
) -> None:
    """Does: Print a timestamped debug line with topic and level
    if enabled via TONE_DEBUG_TOPICS.
    """
    if not enabled(topic):
        return
    if stream is None:
        stream = sys.stderr
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[{ts}] [{topic.lower().strip()}][{level.upper()}] {msg}", file=stream)
