"""
Domain package for the Pet Store query service.

Exports the core domain models used across the query core, stores and reports.
Keep this package focused on data definitions and validation concerns.
"""

from src.domain.models import Pet, PetCreate, PetListWithCounts, PetType, PetUpdate

__all__ = [
    "Pet",
    "PetCreate",
    "PetListWithCounts",
    "PetType",
    "PetUpdate",
]
