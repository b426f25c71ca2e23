"""
Pet shop report.

Answers the standing questions about the shop's stock using only the pet
service's list operation:

- how many pets there are, in total and per type;
- how many cats are at least N years old;
- what buying every bird would cost;
- the average age of pets cheaper than a price ceiling;
- which dog is the N-th most recently updated.

Counts are read from `filtered_count` with `limit=1`, so they cost a single
page. Aggregates stream every matching pet page by page with `iter_pets`; the
N-th most recent dog is picked with a bounded min-heap, never sorting the dogs.

Usage:
    service = PetService(store)
    report = await build_report(service)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, Optional, Tuple

from src.config import Settings, get_settings
from src.domain.models import Pet, PetType
from src.query.filters import FilterSpec
from src.query.pagination import MAX_LIMIT
from src.selection.bounded_heap import BoundedMinHeap, compare_updated_at
from src.service import PetService
from src.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class PetShopReport:
    """
    Answers to the report questions.

    `average_age_of_cheap_pets` is None when no pet is under the price ceiling;
    `nth_recent_dog` is None when fewer than `recent_rank` dogs exist.
    """

    total_pets: int
    counts_by_type: Dict[PetType, int] = field(default_factory=dict)
    min_cat_age: int = 5
    older_cats: int = 0
    bird_cost_cents: int = 0
    max_cost_cents: int = 9000
    average_age_of_cheap_pets: Optional[float] = None
    recent_rank: int = 3
    nth_recent_dog: Optional[Pet] = None


def type_filter(pet_type: PetType) -> Dict[str, Dict[str, str]]:
    return {"type": {"eq": pet_type.value}}


async def iter_pets(
    service: PetService,
    filters: Optional[FilterSpec] = None,
    page_size: int = MAX_LIMIT,
) -> AsyncIterator[Pet]:
    """
    Yield every pet matching `filters`, one page at a time.

    Pages are requested with increasing offsets until a short or empty page, or
    until `filtered_count` pets have been yielded.
    """
    offset = 0
    while True:
        page = await service.list(filters, offset=offset, limit=page_size)
        for pet in page.data:
            yield pet
        offset += len(page.data)
        if not page.data or offset >= page.filtered_count:
            return


async def count_pets_by_type(service: PetService) -> Tuple[int, Dict[PetType, int]]:
    """Total pets plus one filtered count per type, fetched concurrently."""
    types = list(PetType)
    results = await asyncio.gather(
        service.list(limit=1),
        *(service.list(type_filter(pet_type), limit=1) for pet_type in types),
    )
    total = results[0].total_count
    counts = {pet_type: page.filtered_count for pet_type, page in zip(types, results[1:])}
    return total, counts


async def count_cats_at_least(service: PetService, min_age: int) -> int:
    page = await service.list(
        {"type": {"eq": PetType.CAT.value}, "age": {"gte": str(min_age)}}, limit=1
    )
    return page.filtered_count


async def total_cost_cents(service: PetService, pet_type: PetType) -> int:
    """Sum of `cost` over every pet of `pet_type`, in cents."""
    total = 0
    async for pet in iter_pets(service, type_filter(pet_type)):
        total += pet.cost
    return total


async def average_age_below_cost(service: PetService, max_cost_cents: int) -> Optional[float]:
    """
    Mean age of pets with cost < `max_cost_cents`, or None when there are none.
    """
    count = 0
    age_sum = 0
    async for pet in iter_pets(service, {"cost": {"lt": str(max_cost_cents)}}):
        count += 1
        age_sum += pet.age
    if count == 0:
        return None
    return age_sum / count


async def nth_most_recently_updated(
    service: PetService, pet_type: PetType, n: int
) -> Optional[Pet]:
    """
    The n-th most recently updated pet of a type.

    Returns None without streaming anything when fewer than n such pets exist.
    """
    filters = type_filter(pet_type)
    probe = await service.list(filters, limit=1)
    if probe.filtered_count < n:
        log.info(
            "Not enough pets for rank",
            extra={"type": pet_type.value, "available": probe.filtered_count, "rank": n},
        )
        return None

    heap: BoundedMinHeap[Pet] = BoundedMinHeap(n, compare_updated_at)
    async for pet in iter_pets(service, filters):
        heap.insert(pet)

    # Pets may be deleted between the probe and the scan.
    if not heap.is_full:
        return None
    return heap.peek()


async def build_report(service: PetService, settings: Optional[Settings] = None) -> PetShopReport:
    """
    Run every report question against `service`.

    Parameters
    ----------
    service : PetService
        Service to query.
    settings : Settings | None
        Supplies the cat age threshold, price ceiling and dog rank.
    """
    settings = settings or get_settings()

    total, counts = await count_pets_by_type(service)
    older_cats = await count_cats_at_least(service, settings.report_min_cat_age)
    bird_cost = await total_cost_cents(service, PetType.BIRD)
    average_age = await average_age_below_cost(service, settings.report_max_cost_cents)
    nth_dog = await nth_most_recently_updated(service, PetType.DOG, settings.report_recent_rank)

    log.info("Report built", extra={"total_pets": total})
    return PetShopReport(
        total_pets=total,
        counts_by_type=counts,
        min_cat_age=settings.report_min_cat_age,
        older_cats=older_cats,
        bird_cost_cents=bird_cost,
        max_cost_cents=settings.report_max_cost_cents,
        average_age_of_cheap_pets=average_age,
        recent_rank=settings.report_recent_rank,
        nth_recent_dog=nth_dog,
    )


__all__ = [
    "PetShopReport",
    "average_age_below_cost",
    "build_report",
    "count_cats_at_least",
    "count_pets_by_type",
    "iter_pets",
    "nth_most_recently_updated",
    "total_cost_cents",
]
