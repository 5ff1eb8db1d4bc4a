"""
Merge pipeline.

Drives the catalog loop: for every line definition, in order, assemble the
merged feature from the current working collection and fold it back in.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from config.logging_config import get_logger
from src.catalog.models import LineDefinition
from src.loading.snapshot_loader import Feature, SnapshotLoader
from src.merging.assembler import AssemblyRecord, TrackAssembler
from src.merging.reducer import FeatureSetReducer

logger = get_logger(__name__)


@dataclass
class MergeResult:
    """Final working collection plus per-line diagnostics."""

    features: List[Feature]
    merged: List[Feature] = field(default_factory=list)
    records: List[AssemblyRecord] = field(default_factory=list)
    unconsumed_ways: int = 0

    @property
    def empty_lines(self) -> List[AssemblyRecord]:
        return [r for r in self.records if r.is_empty]


class MergePipeline:
    """
    Consolidates raw railway ways into one feature per catalog line.

    Example:
        >>> pipeline = MergePipeline()
        >>> result = pipeline.run(features, catalog)
        >>> len(result.merged) == len(catalog)
        True
    """

    def __init__(self, assembler: Optional[TrackAssembler] = None):
        self.assembler = assembler or TrackAssembler()

    def run(self, features: List[Feature], catalog: List[LineDefinition]) -> MergeResult:
        """
        Run the merge over the whole catalog.

        Args:
            features: Validated snapshot features (not modified)
            catalog: Line definitions in catalog order

        Returns:
            MergeResult with the reduced collection
        """
        SnapshotLoader.validate_unique_ids(features)

        reducer = FeatureSetReducer(features)
        merged: List[Feature] = []
        records: List[AssemblyRecord] = []

        total = len(catalog)
        logger.info(f"Total railways: {total}")

        for index, line in enumerate(catalog, start=1):
            logger.info(f"Processing: {index}/{total}: {line.label}")

            merged_feature, record = self.assembler.assemble(line, reducer.features)
            reducer.apply(line.way_ids, merged_feature)

            merged.append(merged_feature)
            records.append(record)

        result = MergeResult(
            features=reducer.features,
            merged=merged,
            records=records,
            unconsumed_ways=len(reducer.unconsumed_ways()),
        )

        logger.info(
            f"Merged {len(merged)} lines from {reducer.consumed} ways, "
            f"{result.unconsumed_ways} ways left unmerged"
        )
        if result.empty_lines:
            logger.warning(f"{len(result.empty_lines)} lines produced an empty geometry")

        return result
