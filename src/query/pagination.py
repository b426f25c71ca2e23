"""
Offset/limit pagination rules shared by the list query and the report.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Hard ceiling on page size; requests above it are clamped, never honoured.
MAX_LIMIT = 100


def effective_limit(limit: Optional[int]) -> int:
    """Missing or non-positive limits mean MAX_LIMIT; larger ones are clamped."""
    if limit is None or limit < 1:
        return MAX_LIMIT
    return min(limit, MAX_LIMIT)


@dataclass(frozen=True)
class PageRequest:
    offset: int = 0
    limit: int = MAX_LIMIT

    @classmethod
    def from_raw(cls, offset: Optional[int] = None, limit: Optional[int] = None) -> "PageRequest":
        offset = 0 if offset is None else offset
        if offset < 0:
            raise ValueError(f"offset must be >= 0, got {offset}")
        return cls(offset=offset, limit=effective_limit(limit))


__all__ = ["MAX_LIMIT", "PageRequest", "effective_limit"]
