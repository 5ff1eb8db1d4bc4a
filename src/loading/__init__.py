"""
Loading module.

Reads the pruned OSM railway snapshot and checks its integrity.
"""

from src.loading.snapshot_loader import (
    DuplicateFeatureIdError,
    SnapshotLoader,
    find_duplicate_ids,
)

__all__ = [
    "DuplicateFeatureIdError",
    "SnapshotLoader",
    "find_duplicate_ids",
]
