"""
Selection package: bounded top-K over record streams.
"""

from src.selection.bounded_heap import BoundedMinHeap, compare_updated_at, nth_largest

__all__ = [
    "BoundedMinHeap",
    "compare_updated_at",
    "nth_largest",
]
