"""
Sort directive parsing.

A sort directive is a compact token `<sign><field>`: `-age` sorts by age
descending, `+name` or plain `name` ascending. Timestamps are never sortable
and only the fields in `SORTABLE_FIELDS` reach the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.errors import InvalidSortError

SORTABLE_FIELDS = frozenset({"cost", "age", "name", "type"})
RESERVED_SORT_FIELDS = frozenset({"createdAt", "updatedAt", "created_at", "updated_at"})


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    """Validated single-field sort order."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


def parse_sort(token: Optional[str]) -> Optional[SortSpec]:
    """
    Validate a sort token.

    Parameters
    ----------
    token : str | None
        Token such as "-age", "+name" or "cost". None or "" means no sort.

    Returns
    -------
    SortSpec | None

    Raises
    ------
    InvalidSortError
        The field is a timestamp, or not one of `SORTABLE_FIELDS`.
    """
    if not token:
        return None

    direction = SortDirection.DESC if token[0] == "-" else SortDirection.ASC
    field = token[1:] if token[0] in "+-" else token

    if field in RESERVED_SORT_FIELDS:
        raise InvalidSortError(field, "timestamps are not sortable")
    if field not in SORTABLE_FIELDS:
        raise InvalidSortError(field, f"expected one of {', '.join(sorted(SORTABLE_FIELDS))}")

    return SortSpec(field=field, direction=direction)


__all__ = ["RESERVED_SORT_FIELDS", "SORTABLE_FIELDS", "SortDirection", "SortSpec", "parse_sort"]
