"""
Catalog module.

Provides the line definitions that declare which OSM ways make up each
national rail line, and the loader for the catalog data files.
"""

from src.catalog.loader import CatalogError, load_catalog, parse_catalog
from src.catalog.models import LineDefinition, LineOverride, Usage

__all__ = [
    "CatalogError",
    "LineDefinition",
    "LineOverride",
    "Usage",
    "load_catalog",
    "parse_catalog",
]
