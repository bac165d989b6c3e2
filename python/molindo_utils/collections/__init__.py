"""Collection helpers."""

from __future__ import annotations

from .set_map import SetMap

__all__ = [
    "SetMap",
]
