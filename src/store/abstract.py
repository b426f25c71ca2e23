"""
Abstract store interface for the Pet Store query service.

Concrete stores (in-memory, PostgreSQL) implement the PetStore protocol. The
query core only ever calls the read side (`count`, `find`, `to_dto`); the write
side backs the service's create/update/delete operations.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from src.domain.models import Pet, PetCreate, PetUpdate
from src.query.filters import FilterQuery
from src.query.sorting import SortSpec


@runtime_checkable
class PetStore(Protocol):
    """
    Common interface all pet stores must implement.

    Stores must treat every read as independent: the list query issues several
    reads concurrently and makes no consistency assumption between them.
    Failures are raised as-is; callers never expect them wrapped.
    """

    async def count(self, query: Optional[FilterQuery] = None) -> int:
        """
        Count pets matching `query` (all pets when None or empty).
        """
        ...

    async def find(
        self,
        query: FilterQuery,
        offset: int,
        limit: int,
        sort: Optional[SortSpec] = None,
    ) -> Sequence[Any]:
        """
        Fetch one page of matching store entities.

        Parameters
        ----------
        query : FilterQuery
            Conjunctive filter; empty means no constraint.
        offset : int
            Number of matching entities to skip.
        limit : int
            Maximum number of entities to return.
        sort : SortSpec | None
            Single-field order. Without it the order is store-defined.
        """
        ...

    def to_dto(self, entity: Any) -> Pet:
        """Convert a store entity into its external representation."""
        ...

    async def get(self, pet_id: str) -> Optional[Pet]:
        ...

    async def create(self, payload: PetCreate) -> Pet:
        ...

    async def update(self, pet_id: str, payload: PetUpdate) -> Optional[Pet]:
        """Apply the set fields and bump `updated_at`. None when no pet matches."""
        ...

    async def delete(self, pet_id: str) -> Optional[Pet]:
        """Remove a pet, returning it. None when no pet matches."""
        ...


__all__ = ["PetStore"]
