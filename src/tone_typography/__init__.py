"""
tone_typography
===============

Does: Root package for live tone classification and per-character text reconciliation.
Returns: Exposes the `tone`, `text` and `utils` subpackages plus the TypingSession facade.
Used by: Renderers and the `tone-demo` CLI.
"""

__all__: list[str] = []
__docformat__ = "google"
