"""
Line catalog data model.

A line definition groups OSM way ids under one numbered national line.
The same local number may appear in several entries, each describing a
disjoint section of that line.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Usage(str, Enum):
    """Service frequency pattern of a line."""

    REGULAR = "regular"
    ONCE_DAILY = "once_daily"
    SEASONAL = "seasonal"
    ONCE_WEEKLY = "once_weekly"
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    SPECIAL = "special"


@dataclass(frozen=True)
class LineOverride:
    """Hand-written extras: when the line was last ridden and a free note."""

    last_ride: Optional[str] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class LineDefinition:
    """One catalog entry."""

    local_number: str
    from_place: str
    to_place: str
    ways: str
    usage: List[Usage]
    operator: str
    custom: Optional[LineOverride] = field(default=None)

    @property
    def way_ids(self) -> List[int]:
        """Way ids in declaration order."""
        return [int(way_id) for way_id in self.ways.split(";")]

    @property
    def last_ride(self) -> Optional[str]:
        return self.custom.last_ride if self.custom else None

    @property
    def note(self) -> Optional[str]:
        return self.custom.note if self.custom else None

    @property
    def label(self) -> str:
        return f"{self.local_number} {self.from_place} - {self.to_place}"
