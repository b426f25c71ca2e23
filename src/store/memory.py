"""
Dict-backed pet store.

Evaluates FilterQuery predicates in Python with the same semantics as the
PostgreSQL store: conjunction across fields, type-mismatched comparisons never
match. Text fields sort by code point, as the PostgreSQL store does under
its "C" collation. Ties keep insertion order here and fall back to `id` in
PostgreSQL. Backs the unit tests and embedded use without a database.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from src.domain.models import Pet, PetCreate, PetUpdate
from src.query.filters import FilterQuery, value_matches_field
from src.query.sorting import SortSpec
from src.utils.logging import get_logger

log = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def matches(pet: Pet, query: Optional[FilterQuery]) -> bool:
    """Whether a pet satisfies every field predicate of `query`."""
    if not query:
        return True
    for field, predicate in query.items():
        actual = getattr(pet, field)
        for operator, value in predicate.items():
            if not value_matches_field(field, value):
                return False
            if not operator.compare(actual, value.value):
                return False
    return True


class InMemoryPetStore:
    """
    PetStore keeping pets in insertion order.

    Parameters
    ----------
    clock : Callable[[], datetime] | None
        Source of timestamps for create/update. Defaults to UTC now.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._pets: Dict[str, Pet] = {}
        self._clock = clock or _utcnow

    def seed(self, pets: Iterable[Pet]) -> None:
        """Insert fully-formed pets as-is (ids and timestamps included)."""
        for pet in pets:
            self._pets[pet.id] = pet

    async def count(self, query: Optional[FilterQuery] = None) -> int:
        return sum(1 for pet in self._pets.values() if matches(pet, query))

    async def find(
        self,
        query: FilterQuery,
        offset: int,
        limit: int,
        sort: Optional[SortSpec] = None,
    ) -> List[Pet]:
        selected = [pet for pet in self._pets.values() if matches(pet, query)]
        if sort is not None:
            selected.sort(key=lambda pet: getattr(pet, sort.field), reverse=sort.descending)
        return selected[offset : offset + limit]

    def to_dto(self, entity: Pet) -> Pet:
        return entity

    async def get(self, pet_id: str) -> Optional[Pet]:
        return self._pets.get(pet_id)

    async def create(self, payload: PetCreate) -> Pet:
        now = self._clock()
        pet = Pet(
            id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )
        self._pets[pet.id] = pet
        log.debug("Pet created", extra={"pet_id": pet.id, "type": pet.type.value})
        return pet

    async def update(self, pet_id: str, payload: PetUpdate) -> Optional[Pet]:
        current = self._pets.get(pet_id)
        if current is None:
            return None
        updated_at = max(self._clock(), current.updated_at)
        pet = current.model_copy(update={**payload.changes(), "updated_at": updated_at})
        self._pets[pet_id] = pet
        return pet

    async def delete(self, pet_id: str) -> Optional[Pet]:
        return self._pets.pop(pet_id, None)


__all__ = ["InMemoryPetStore", "matches"]
