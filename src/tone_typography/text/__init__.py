"""
text.
====

Does: Per-character identity model: records, positional reconciliation, style pools.
Returns: Re-exports of the reconciliation API.
"""

from .reconcile import ReconciliationError, reconcile
from .records import CharacterRecord, new_record_id
from .styles import (
    StylePools,
    StyleTokenFactory,
    load_style_pools,
    make_style_token_factory,
    validate_style_pools,
)

__all__ = [
    "CharacterRecord",
    "new_record_id",
    "ReconciliationError",
    "reconcile",
    "StylePools",
    "StyleTokenFactory",
    "load_style_pools",
    "make_style_token_factory",
    "validate_style_pools",
]
