"""
Railway snapshot loader.

The snapshot is a GeoJSON FeatureCollection exported from OpenStreetMap and
pruned to the railway network: ways are LineStrings, stations are Points,
and every feature carries its OSM id in the "@id" property.

The whole file is read and checked before any merging starts. A single
duplicated id aborts the run.
"""

import json
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

from config.logging_config import get_logger
from config.settings import settings

logger = get_logger(__name__)

Feature = Dict[str, Any]

ID_PROPERTY = "@id"


class DuplicateFeatureIdError(ValueError):
    """Raised when two features of the snapshot share an id."""

    def __init__(self, duplicates: List[Any]):
        self.duplicates = duplicates
        preview = ", ".join(str(d) for d in duplicates[:10])
        more = f" (+{len(duplicates) - 10} more)" if len(duplicates) > 10 else ""
        super().__init__(
            f"There are duplicate IDs in the pruned list: {preview}{more}. Cannot continue."
        )


def feature_id(feature: Feature) -> Any:
    """Return the "@id" property of a feature (None if absent)."""
    return (feature.get("properties") or {}).get(ID_PROPERTY)


def find_duplicate_ids(features: List[Feature]) -> List[Any]:
    """
    Find ids that occur more than once.

    Args:
        features: Feature list

    Returns:
        Duplicated ids in order of first occurrence
    """
    counts = Counter(feature_id(f) for f in features)
    return [fid for fid, count in counts.items() if count > 1]


class SnapshotLoader:
    """
    Loads a railway snapshot and validates id uniqueness.

    Example:
        >>> loader = SnapshotLoader()
        >>> features = loader.load(Path("cz.geojson"))
        >>> print(loader.get_summary())
    """

    def __init__(self, encoding: Optional[str] = None):
        self.encoding = encoding or settings.files.encoding
        self.features: List[Feature] = []

    def load(self, path: Path) -> List[Feature]:
        """
        Read and validate the snapshot.

        Args:
            path: Path to the <code>.geojson file

        Returns:
            The feature list, in file order

        Raises:
            FileNotFoundError: If the file doesn't exist
            json.JSONDecodeError: If the file is not valid JSON
            ValueError: If the document has no feature list
            DuplicateFeatureIdError: If two features share an id
        """
        if not path.exists():
            raise FileNotFoundError(f"Missing file: {path}. Generate the geojson first.")

        logger.info(f"Loading railway snapshot from: {path}")
        with open(path, encoding=self.encoding) as f:
            data = json.load(f)

        return self.load_collection(data)

    def load_collection(self, data: Dict[str, Any]) -> List[Feature]:
        """Validate an already parsed FeatureCollection."""
        features = data.get("features") if isinstance(data, dict) else None
        if not isinstance(features, list):
            raise ValueError("Snapshot is not a FeatureCollection (no 'features' list)")

        self.validate_unique_ids(features)

        self.features = features
        logger.info(f"Loaded {len(features)} features")
        return features

    @staticmethod
    def validate_unique_ids(features: List[Feature]) -> None:
        """Raise DuplicateFeatureIdError if any id repeats."""
        duplicates = find_duplicate_ids(features)
        if duplicates:
            raise DuplicateFeatureIdError(duplicates)

    def get_summary(self) -> str:
        """Count features by geometry type."""
        counts = Counter(
            (f.get("geometry") or {}).get("type", "None") for f in self.features
        )
        parts = [f"{geom_type}: {n}" for geom_type, n in sorted(counts.items())]
        return f"{len(self.features)} features ({', '.join(parts)})"
