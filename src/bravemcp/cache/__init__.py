"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/__init__.py.
"""

from .coalescing import CacheEntry, CoalescingCache, ComputationCancelledError, EntryState
from .normalize import normalize_query

__all__ = [
    "CacheEntry",
    "CoalescingCache",
    "ComputationCancelledError",
    "EntryState",
    "normalize_query",
]
