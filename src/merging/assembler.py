"""
Track assembly.

Builds one merged feature per catalog line: picks the line's ways from the
working collection, stitches them and attaches the display metadata the web
map expects (name, description, track id, uMap style).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from config.logging_config import get_logger
from config.settings import RailwaySettings, settings
from src.catalog.models import LineDefinition, Usage
from src.loading.snapshot_loader import Feature, feature_id
from src.merging.stitcher import connect_segments

logger = get_logger(__name__)


def is_way_id(value: Any) -> bool:
    """True for the integer ids of raw OSM features (merged lines use strings)."""
    return isinstance(value, int) and not isinstance(value, bool)


def part_suffix(count: int) -> str:
    """1 -> 'a', 2 -> 'b', ..."""
    if count < 1:
        raise ValueError(f"Part count must be positive, got {count}")
    return chr(96 + count)


class TrackPartCounter:
    """
    Counts the merged parts generated per track key.

    Lines sharing a local number get consecutive suffixes in catalog order,
    so "cz100" yields "cz100a", "cz100b", ...
    """

    def __init__(self):
        self._counts: Dict[str, int] = {}

    def next_track_id(self, key: str) -> str:
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        return f"{key}{part_suffix(count)}"

    def count(self, key: str) -> int:
        return self._counts.get(key, 0)

    def __len__(self) -> int:
        return len(self._counts)


@dataclass
class AssemblyRecord:
    """Diagnostics for one assembled line."""

    track_id: str
    local_number: str
    name: str
    declared_ids: List[int]
    matched_ids: List[int]
    parts: int
    points: int
    missing_ids: List[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.points == 0

    @property
    def status(self) -> str:
        """
        Comma-joined problems ("partial,discontinuous"), "empty" or "ok".

        An empty line reports only "empty".
        """
        if self.is_empty:
            return "empty"
        problems = []
        if self.missing_ids:
            problems.append("partial")
        if self.parts > 1:
            problems.append("discontinuous")
        return ",".join(problems) or "ok"


class TrackAssembler:
    """
    Assembles merged line features from catalog definitions.

    Example:
        >>> assembler = TrackAssembler()
        >>> merged, record = assembler.assemble(line, features)
        >>> merged["properties"]["track_id"]
        'cz100a'
    """

    def __init__(
        self,
        track_prefix: Optional[str] = None,
        railway_settings: Optional[RailwaySettings] = None,
        counter: Optional[TrackPartCounter] = None,
    ):
        """
        Initialize the assembler.

        Args:
            track_prefix: Country prefix of track ids (settings default if None)
            railway_settings: Labels and style values
            counter: Track part counter (a fresh one if None)
        """
        self.config = railway_settings or settings.railway
        self.track_prefix = track_prefix if track_prefix is not None else self.config.track_prefix
        self.counter = counter or TrackPartCounter()

    def select_features(self, line: LineDefinition, features: List[Feature]) -> List[Feature]:
        """Raw features referenced by the line, in collection order."""
        wanted = set(line.way_ids)
        return [f for f in features if is_way_id(feature_id(f)) and feature_id(f) in wanted]

    def track_key(self, line: LineDefinition) -> str:
        return f"{self.track_prefix}{line.local_number}"

    def build_name(self, line: LineDefinition) -> str:
        return self.config.name_template.format(
            local_number=line.local_number,
            from_place=line.from_place,
            to_place=line.to_place,
        )

    def build_description(self, line: LineDefinition) -> str:
        usage = ", ".join(self.config.usage_labels[u.value] for u in line.usage)
        description = f"{usage}, {line.operator}"

        if line.last_ride:
            description += f"\n\n{self.config.last_ride_label}: {line.last_ride}"
        if line.note:
            description += f"\n\n*{line.note}*"

        return description

    def build_style(self, line: LineDefinition) -> Dict[str, Any]:
        style: Dict[str, Any] = {
            "color": self.config.color_recently_ridden if line.last_ride else self.config.color_default,
        }
        if line.usage[0] == Usage.SPECIAL:
            style["weight"] = self.config.special_weight
        return style

    def assemble(self, line: LineDefinition, features: List[Feature]) -> Tuple[Feature, AssemblyRecord]:
        """
        Build the merged feature for one line.

        Args:
            line: Catalog definition
            features: Current working collection (not modified)

        Returns:
            Tuple of (merged feature, diagnostics record)
        """
        selected = self.select_features(line, features)

        sequences = []
        for f in selected:
            geometry = f.get("geometry") or {}
            if geometry.get("type") == "LineString":
                sequences.append(geometry.get("coordinates") or [])
            else:
                logger.warning(
                    f"Line {line.label}: feature {feature_id(f)} is a "
                    f"{geometry.get('type')}, not a way; it is consumed without geometry"
                )

        pieces = connect_segments(sequences)
        coordinates = [coord for piece in pieces for coord in piece]

        track_id = self.counter.next_track_id(self.track_key(line))
        name = self.build_name(line)

        merged: Feature = {
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": coordinates,
            },
            "properties": {
                "name": name,
                "description": self.build_description(line),
                "@id": line.ways,
                "track_id": track_id,
                "railway": self.config.railway_category,
                "_umap_options": self.build_style(line),
            },
        }

        matched_ids = [feature_id(f) for f in selected]
        matched = set(matched_ids)
        record = AssemblyRecord(
            track_id=track_id,
            local_number=line.local_number,
            name=name,
            declared_ids=line.way_ids,
            matched_ids=matched_ids,
            parts=len(pieces),
            points=len(coordinates),
            missing_ids=[way_id for way_id in line.way_ids if way_id not in matched],
        )
        self._report(line, record)

        return merged, record

    def _report(self, line: LineDefinition, record: AssemblyRecord) -> None:
        if record.is_empty:
            found = "none" if not record.matched_ids else f"only {len(record.matched_ids)} non-way features"
            logger.warning(
                f"Line {line.label} ({record.track_id}): {found} of its {len(record.declared_ids)} "
                f"ways were found, merged geometry is empty"
            )
            return

        if record.missing_ids:
            logger.warning(
                f"Line {line.label} ({record.track_id}): {len(record.missing_ids)} ways "
                f"not found: {';'.join(str(i) for i in record.missing_ids)}"
            )
        if record.parts > 1:
            logger.warning(
                f"Line {line.label} ({record.track_id}): ways do not form one chain, "
                f"{record.parts} pieces concatenated"
            )
        logger.debug(
            f"Line {record.track_id}: {len(record.matched_ids)} ways -> {record.points} points"
        )
