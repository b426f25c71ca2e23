"""
Pet Store query service.

This package implements the read side of a pet-store record service:

- Operator-based filters (`age[gte]=5`) translated into typed store predicates
- Sort directive validation (`-age`, `+name`)
- Paginated list queries running total/filtered counts and the page fetch concurrently
- A bounded min-heap for picking the N-th most recently updated pet
- A pet shop report built on top of the list query

Stores are pluggable: an in-memory store and a PostgreSQL store (psycopg async pool).
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Your Name"
__license__ = "MIT"

# Public API exports
from src.config import Settings, get_settings
from src.domain.models import Pet, PetCreate, PetListWithCounts, PetType, PetUpdate
from src.errors import InvalidSortError, PetNotFoundError
from src.query.list_query import list_with_counts
from src.selection.bounded_heap import BoundedMinHeap
from src.service import PetService
from src.store.abstract import PetStore
from src.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Pet",
    "PetCreate",
    "PetListWithCounts",
    "PetType",
    "PetUpdate",
    # Errors
    "InvalidSortError",
    "PetNotFoundError",
    # Query and selection
    "BoundedMinHeap",
    "list_with_counts",
    # Service and stores
    "PetService",
    "PetStore",
    # Logging
    "configure_logging",
    "get_logger",
]
