"""
Domain models for the Pet Store query service.

Defines the pet schema aligned with `db/init.sql` plus the payloads used to
create and update pets and the paginated list result. Python attributes are
snake_case; the external representation uses the camelCase aliases
(`createdAt`, `totalCount`, ...) via `model_dump(by_alias=True)`.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class PetType(str, Enum):
    """Categorical pet kinds stocked by the shop."""

    BIRD = "Bird"
    CAT = "Cat"
    DOG = "Dog"
    REPTILE = "Reptile"


class Pet(BaseModel):
    """
    Representation of a single row in the `pets` table.
    """

    id: str = Field(..., description="Unique identifier (UUID).")
    type: PetType = Field(..., description="Categorical pet kind.")
    name: str = Field(..., description="Pet name.")
    age: int = Field(..., ge=0, description="Age in years.")
    cost: int = Field(..., ge=0, description="Price in cents.")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp.")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update timestamp.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class PetCreate(BaseModel):
    """Payload for creating a pet."""

    type: PetType
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0)
    cost: int = Field(..., ge=0)


class PetUpdate(BaseModel):
    """Partial update; only explicitly set fields are applied."""

    type: Optional[PetType] = None
    name: Optional[str] = Field(None, min_length=1)
    age: Optional[int] = Field(None, ge=0)
    cost: Optional[int] = Field(None, ge=0)

    def changes(self) -> dict:
        """Return the fields the caller actually set."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class PetListWithCounts(BaseModel):
    """
    One page of pets together with the unfiltered and filtered totals.
    """

    total_count: int = Field(..., ge=0, alias="totalCount")
    filtered_count: int = Field(..., ge=0, alias="filteredCount")
    data: List[Pet] = Field(default_factory=list)

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


__all__ = ["PetType", "Pet", "PetCreate", "PetUpdate", "PetListWithCounts"]
