"""
Pet service: the operations exposed to callers (CLI, report, API layers).

Listing goes through the paginated list query; create/update/delete delegate to
the store and translate "no such pet" into `PetNotFoundError` where the
operation requires an existing pet.
"""

from __future__ import annotations

from typing import Optional

from src.domain.models import Pet, PetCreate, PetListWithCounts, PetUpdate
from src.errors import PetNotFoundError
from src.query.filters import FilterSpec
from src.query.list_query import list_with_counts
from src.store.abstract import PetStore
from src.utils.logging import get_logger

log = get_logger(__name__)


class PetService:
    """Facade over a PetStore."""

    def __init__(self, store: PetStore) -> None:
        self.store = store

    async def list(
        self,
        filters: Optional[FilterSpec] = None,
        offset: Optional[int] = 0,
        limit: Optional[int] = None,
        sort: Optional[str] = None,
    ) -> PetListWithCounts:
        result = await list_with_counts(
            self.store, filters=filters, offset=offset, limit=limit, sort=sort
        )
        log.info(
            "Listed pets",
            extra={
                "total_count": result.total_count,
                "filtered_count": result.filtered_count,
                "returned": len(result.data),
            },
        )
        return result

    async def create(self, payload: PetCreate) -> Pet:
        pet = await self.store.create(payload)
        log.info("Created pet", extra={"pet_id": pet.id})
        return pet

    async def update(self, pet_id: str, payload: PetUpdate) -> Pet:
        """
        Raises
        ------
        PetNotFoundError
            No pet has this id.
        """
        pet = await self.store.update(pet_id, payload)
        if pet is None:
            raise PetNotFoundError(pet_id)
        log.info("Updated pet", extra={"pet_id": pet_id, "fields": sorted(payload.changes())})
        return pet

    async def delete(self, pet_id: str) -> Optional[Pet]:
        """Delete a pet. Deleting an unknown id is a no-op returning None."""
        pet = await self.store.delete(pet_id)
        if pet is None:
            log.info("Delete skipped, pet not found", extra={"pet_id": pet_id})
        return pet


__all__ = ["PetService"]
