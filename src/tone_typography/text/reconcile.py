# src/tone_typography/text/reconcile.py

"""
Positional text reconciliation.
------------------------------
Does:
- Diff a new text value against the previous records strictly by index
- Reuse a record when the same index still holds the same character
- Mint a fresh record (new id + style token) everywhere else; drop the tail

Insertions or deletions shift every later index, so all records after the
edit point are regenerated. Downstream animation timing depends on this.
"""

from __future__ import annotations

from collections.abc import Sequence

from tone_typography.text.records import CharacterRecord, new_record_id
from tone_typography.text.styles import StyleTokenFactory

__all__ = ["ReconciliationError", "reconcile"]


class ReconciliationError(AssertionError):
    """Raised when reconciled records no longer spell the source text."""


def reconcile(
    previous: Sequence[CharacterRecord],
    new_text: str,
    style_token_factory: StyleTokenFactory,
) -> tuple[CharacterRecord, ...]:
    out: list[CharacterRecord] = []
    for i, char in enumerate(new_text):
        prior = previous[i] if i < len(previous) else None
        if prior is not None and prior.char == char:
            out.append(prior)
        else:
            out.append(CharacterRecord(new_record_id(), char, style_token_factory(char, i)))

    if len(out) != len(new_text) or "".join(r.char for r in out) != new_text:
        raise ReconciliationError(
            f"reconciled {len(out)} records do not spell {len(new_text)}-char text"
        )
    return tuple(out)
