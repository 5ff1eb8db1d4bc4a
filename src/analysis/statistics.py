"""
Merge statistics module.

Summarizes a merge run per line: how many of the declared ways were found,
whether they formed one chain, and how long the resulting line is.
"""

from typing import Any, Dict, List, Optional

import geopandas as gpd
import pandas as pd
from shapely.geometry import LineString

from config.logging_config import get_logger
from config.settings import settings
from src.merging.assembler import AssemblyRecord
from src.merging.pipeline import MergeResult

logger = get_logger(__name__)


def line_geometry(coordinates: List[Any]) -> Optional[LineString]:
    """LineString for a merged line, None for degenerate ones."""
    if len(coordinates) < 2:
        return None
    return LineString(coordinates)


class MergeStatistics:
    """
    Computes per-line statistics for a merge run.

    Example:
        >>> stats = MergeStatistics(result)
        >>> table = stats.compute_table()
        >>> summary = stats.get_summary()
    """

    COLUMNS = [
        "track_id",
        "local_number",
        "name",
        "status",
        "declared_ways",
        "matched_ways",
        "missing_ways",
        "parts",
        "points",
        "length_km",
    ]

    def __init__(self, result: MergeResult, crs_metric: Optional[str] = None):
        """
        Initialize statistics calculator.

        Args:
            result: Output of MergePipeline.run()
            crs_metric: Projected CRS used for lengths
        """
        # Guard clause
        if len(result.records) != len(result.merged):
            raise ValueError("Merge result has a different number of records and merged lines")

        self.result = result
        self.crs_metric = crs_metric or settings.crs_metric

        self._table: Optional[pd.DataFrame] = None

    def _record_row(self, record: AssemblyRecord) -> Dict[str, Any]:
        return {
            "track_id": record.track_id,
            "local_number": record.local_number,
            "name": record.name,
            "status": record.status,
            "declared_ways": len(record.declared_ids),
            "matched_ways": len(record.matched_ids),
            "missing_ways": len(record.missing_ids),
            "parts": record.parts,
            "points": record.points,
        }

    def compute_table(self) -> pd.DataFrame:
        """
        Build one row per merged line.

        Returns:
            DataFrame with the COLUMNS above, in catalog order
        """
        rows = [self._record_row(r) for r in self.result.records]
        geometries = [line_geometry(f["geometry"]["coordinates"]) for f in self.result.merged]

        if not rows:
            self._table = pd.DataFrame(columns=self.COLUMNS)
            return self._table

        gdf = gpd.GeoDataFrame(rows, geometry=geometries, crs=settings.crs_geographic)
        lengths = gdf.to_crs(self.crs_metric).geometry.length / 1000.0

        table = pd.DataFrame(gdf.drop(columns="geometry"))
        table["length_km"] = lengths.fillna(0.0).round(3).values

        self._table = table[self.COLUMNS]
        logger.info(f"Computed statistics for {len(self._table)} lines")

        return self._table

    def get_summary(self) -> Dict[str, Any]:
        """Totals over the whole run."""
        table = self._table if self._table is not None else self.compute_table()
        status_counts = table["status"].str.split(",").explode().value_counts()

        return {
            "lines": int(len(table)),
            "ok": int(status_counts.get("ok", 0)),
            "partial": int(status_counts.get("partial", 0)),
            "discontinuous": int(status_counts.get("discontinuous", 0)),
            "empty": int(status_counts.get("empty", 0)),
            "unmerged_ways": self.result.unconsumed_ways,
            "total_length_km": round(float(table["length_km"].sum()), 3) if len(table) else 0.0,
        }

    def get_problem_lines(self) -> pd.DataFrame:
        """Lines that need a look at the catalog or the snapshot."""
        table = self._table if self._table is not None else self.compute_table()
        return table[table["status"] != "ok"]

    def save_csv(self, path) -> None:
        table = self._table if self._table is not None else self.compute_table()
        path.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(path, index=False, encoding=settings.files.encoding)
        logger.info(f"Saved merge report to {path}")
