"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/normalize.py.
"""

from __future__ import annotations


def normalize_query(raw: str) -> str:
    """Map raw query text to its cache key (trimmed, lower-cased)."""
    return raw.strip().lower()
