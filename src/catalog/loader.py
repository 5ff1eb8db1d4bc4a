"""
Line catalog loader.

Reads the hand-maintained catalog of national rail lines from a JSON file.

Example:
    from src.catalog import load_catalog

    lines = load_catalog(Path("data/catalogs/cz.json"))
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from config.logging_config import get_logger
from config.settings import settings
from src.catalog.models import LineDefinition, LineOverride, Usage

logger = get_logger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog entry does not follow the catalog schema."""


REQUIRED_KEYS = ["local_number", "from", "to", "ways", "usage", "operator"]


def _parse_usage(raw_usage: Any, index: int) -> List[Usage]:
    if not isinstance(raw_usage, list) or not raw_usage:
        raise CatalogError(f"Entry {index}: 'usage' must be a non-empty list")

    usage: List[Usage] = []
    for code in raw_usage:
        try:
            usage.append(Usage(code))
        except ValueError:
            known = ", ".join(u.value for u in Usage)
            raise CatalogError(
                f"Entry {index}: unknown usage code '{code}' (known: {known})"
            ) from None
    return usage


def _parse_ways(raw_ways: Any, index: int) -> str:
    if not isinstance(raw_ways, str) or not raw_ways:
        raise CatalogError(f"Entry {index}: 'ways' must be a non-empty string")

    for part in raw_ways.split(";"):
        try:
            int(part)
        except ValueError:
            raise CatalogError(
                f"Entry {index}: way id '{part}' is not an integer"
            ) from None
    return raw_ways


def _parse_override(raw_custom: Any, index: int) -> LineOverride:
    if not isinstance(raw_custom, dict):
        raise CatalogError(f"Entry {index}: 'custom' must be an object")
    return LineOverride(
        last_ride=raw_custom.get("last_ride") or None,
        note=raw_custom.get("note") or None,
    )


def parse_entry(record: Dict[str, Any], index: int) -> LineDefinition:
    """
    Turn one raw catalog record into a LineDefinition.

    Args:
        record: Dictionary with the catalog keys
        index: Position in the catalog (used in error messages)

    Returns:
        Parsed LineDefinition

    Raises:
        CatalogError: If a key is missing or malformed
    """
    if not isinstance(record, dict):
        raise CatalogError(f"Entry {index}: expected an object, got {type(record).__name__}")

    missing = [key for key in REQUIRED_KEYS if key not in record]
    if missing:
        raise CatalogError(f"Entry {index}: missing keys {missing}")

    custom = record.get("custom")

    return LineDefinition(
        local_number=str(record["local_number"]),
        from_place=record["from"],
        to_place=record["to"],
        ways=_parse_ways(record["ways"], index),
        usage=_parse_usage(record["usage"], index),
        operator=record["operator"],
        custom=_parse_override(custom, index) if custom is not None else None,
    )


def parse_catalog(records: List[Dict[str, Any]]) -> List[LineDefinition]:
    """Parse raw catalog records, keeping their order."""
    if not isinstance(records, list):
        raise CatalogError("Catalog must be a list of line definitions")
    return [parse_entry(record, index) for index, record in enumerate(records)]


def load_catalog(path: Path) -> List[LineDefinition]:
    """
    Load the line catalog from a JSON file.

    Args:
        path: Path to the catalog file

    Returns:
        Line definitions in catalog order

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogError: If an entry is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")

    logger.info(f"Loading line catalog from: {path}")
    with open(path, encoding=settings.files.encoding) as f:
        records = json.load(f)

    lines = parse_catalog(records)
    logger.info(f"Loaded {len(lines)} line definitions")

    return lines
