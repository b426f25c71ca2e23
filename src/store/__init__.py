"""
Stores package for the Pet Store query service.

This module re-exports the store protocol and the concrete stores so
downstream code can import from `src.store` directly.
"""

from src.store.abstract import PetStore
from src.store.memory import InMemoryPetStore
from src.store.postgres import PostgresPetStore

__all__ = [
    # Abstracts
    "PetStore",
    # Concrete stores
    "InMemoryPetStore",
    "PostgresPetStore",
]
