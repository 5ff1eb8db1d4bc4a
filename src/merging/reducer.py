"""Working feature collection threaded through the merge loop."""

from typing import Iterable, List

from config.logging_config import get_logger
from src.loading.snapshot_loader import Feature, feature_id
from src.merging.assembler import is_way_id

logger = get_logger(__name__)


class FeatureSetReducer:
    """
    Replaces consumed raw ways with merged lines.

    Only integer ids listed by the current line are removed; merged features
    (string ids) and unrelated features stay where they are.
    """

    def __init__(self, features: List[Feature]):
        self.features: List[Feature] = list(features)
        self.consumed = 0

    def apply(self, way_ids: Iterable[int], merged: Feature) -> List[Feature]:
        """
        Drop the line's raw ways and append its merged feature.

        Args:
            way_ids: Way ids referenced by the line
            merged: The merged feature for the line

        Returns:
            The new working collection
        """
        wanted = set(way_ids)
        before = len(self.features)

        kept = [
            f for f in self.features
            if not (is_way_id(feature_id(f)) and feature_id(f) in wanted)
        ]
        removed = before - len(kept)
        self.consumed += removed

        self.features = kept + [merged]
        logger.debug(f"Removed {removed} raw features, collection now {len(self.features)}")

        return self.features

    def unconsumed_ways(self) -> List[Feature]:
        """Raw LineStrings no catalog line has claimed."""
        return [
            f for f in self.features
            if is_way_id(feature_id(f)) and (f.get("geometry") or {}).get("type") == "LineString"
        ]
