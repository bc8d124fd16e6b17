"""Utility helpers for fifocalc."""

from fifocalc.utils.text import match_client, remove_diacritics

__all__ = ["match_client", "remove_diacritics"]
