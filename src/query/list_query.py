"""
Paginated list query with counts.

Composes the translated filter, offset, clamped limit and optional sort into
three independent store reads that run concurrently:

- total count with no filter,
- count of pets matching the filter,
- one page of matching pets.

Inputs are validated before anything is sent to the store, so an invalid sort
or offset never results in a partial query. A failure in any read fails the
whole call and the store's exception is propagated unchanged.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from src.domain.models import PetListWithCounts
from src.query.filters import FilterSpec, compose_filter
from src.query.pagination import PageRequest
from src.query.sorting import parse_sort
from src.store.abstract import PetStore
from src.utils.logging import get_logger

log = get_logger(__name__)


async def list_with_counts(
    store: PetStore,
    filters: Optional[FilterSpec] = None,
    offset: Optional[int] = 0,
    limit: Optional[int] = None,
    sort: Optional[str] = None,
) -> PetListWithCounts:
    """
    Run the count/count/fetch triple and aggregate the results.

    Parameters
    ----------
    store : PetStore
        Store to read from.
    filters : FilterSpec | None
        Per-field operator sets for age, cost, type and name.
    offset : int | None
        Matching pets to skip. Defaults to 0.
    limit : int | None
        Requested page size; clamped to MAX_LIMIT, missing or < 1 means MAX_LIMIT.
    sort : str | None
        Sort token such as "-age".

    Raises
    ------
    InvalidSortError
        The sort token names a timestamp or an unsupported field.
    ValueError
        The offset is negative.
    """
    page = PageRequest.from_raw(offset=offset, limit=limit)
    query = compose_filter(filters)
    sort_spec = parse_sort(sort)

    log.debug(
        "Listing pets",
        extra={
            "fields": sorted(query),
            "offset": page.offset,
            "limit": page.limit,
            "sort": sort,
        },
    )

    total_count, filtered_count, entities = await asyncio.gather(
        store.count(None),
        store.count(query),
        store.find(query, page.offset, page.limit, sort_spec),
    )

    return PetListWithCounts(
        total_count=total_count,
        filtered_count=filtered_count,
        data=[store.to_dto(entity) for entity in entities],
    )


__all__ = ["list_with_counts"]
