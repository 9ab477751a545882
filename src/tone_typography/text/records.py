"""
records.py.

Does: Define the immutable per-character record and its process-unique id generator.
Used by: reconcile, session, demo.
"""

from __future__ import annotations

import itertools
import uuid
from dataclasses import dataclass, replace

__all__ = ["CharacterRecord", "new_record_id"]

_COUNTER = itertools.count()


def new_record_id() -> str:
    """Return a process-unique token: monotonic counter + random suffix."""
    return f"char-{next(_COUNTER)}-{uuid.uuid4().hex[:9]}"


@dataclass(frozen=True)
class CharacterRecord:
    """One displayed position. Never mutated; edits replace the record."""

    id: str
    char: str
    style_token: str

    def restyled(self, style_token: str) -> CharacterRecord:
        """Return a replacement record with the same id and a new style token."""
        return replace(self, style_token=style_token)

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "char": self.char, "style_token": self.style_token}
