"""
GeoJSON output writer.

Writes two FeatureCollections per run:
- <code>-filtered.geojson: the whole reduced collection
- <code>-merged-only.geojson: merged lines and station points only
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from config.logging_config import get_logger
from config.settings import settings

logger = get_logger(__name__)

Feature = Dict[str, Any]


def feature_collection(features: List[Feature]) -> Dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": features,
    }


def select_merged_only(features: List[Feature]) -> List[Feature]:
    """
    Drop LineStrings that were never merged into a line.

    Points are always kept, whatever their properties.
    """
    return [
        f for f in features
        if not (
            (f.get("geometry") or {}).get("type") == "LineString"
            and "track_id" not in (f.get("properties") or {})
        )
    ]


class OutputWriter:
    """
    Writes the pipeline's feature collections to disk.

    Example:
        >>> writer = OutputWriter(output_dir=Path("."))
        >>> filtered_path, merged_path = writer.write_all("cz", features)
    """

    def __init__(self, output_dir: Optional[Path] = None, encoding: Optional[str] = None):
        self.output_dir = output_dir if output_dir is not None else Path.cwd()
        self.encoding = encoding or settings.files.encoding

    def write_collection(self, features: List[Feature], path: Path) -> Path:
        """Serialize features as a compact FeatureCollection."""
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding=self.encoding) as f:
            json.dump(feature_collection(features), f, ensure_ascii=False, separators=(",", ":"))

        logger.info(f"Wrote {len(features)} features to {path}")
        return path

    def write_all(self, code: str, features: List[Feature]) -> Tuple[Path, Path]:
        """
        Write the filtered and merged-only collections.

        Args:
            code: Country code used in the file names
            features: Final working collection

        Returns:
            Tuple of (filtered path, merged-only path)
        """
        filtered_path = self.write_collection(
            features, settings.output_path("filtered", code, self.output_dir)
        )
        merged_only_path = self.write_collection(
            select_merged_only(features), settings.output_path("merged_only", code, self.output_dir)
        )
        return filtered_path, merged_only_path
