"""
Domain errors raised by the query core and the pet service.

Store-level failures (psycopg errors, connection errors) are deliberately not
represented here: they propagate unchanged from the store implementation.
"""

from __future__ import annotations


class InvalidSortError(ValueError):
    """Sort token names a reserved or unsupported field. Maps to a client error."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Sorting by '{field}' is not allowed: {reason}")
        self.field = field
        self.reason = reason


class PetNotFoundError(LookupError):
    """No pet exists with the requested identifier."""

    def __init__(self, pet_id: str) -> None:
        super().__init__(f"Pet '{pet_id}' not found")
        self.pet_id = pet_id


__all__ = ["InvalidSortError", "PetNotFoundError"]
