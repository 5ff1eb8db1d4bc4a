"""Settings and configuration for the railway line consolidation."""

from pathlib import Path
from typing import Dict, Optional


class RailwaySettings:
    """Display metadata synthesized for every merged line."""

    # Track ids are "<prefix><local number><suffix>", e.g. "cz100a"
    track_prefix: str = "cz"

    railway_category: str = "rail"

    usage_labels: Dict[str, str] = {
        "regular": "Pravidelný provoz",
        "once_daily": "Provoz jednou denně",
        "seasonal": "Sezónní provoz",
        "once_weekly": "Provoz jednou týdně",
        "weekdays": "Provoz o pracovních dnech",
        "weekends": "Provoz o víkendech",
        "special": "Provoz při zvláštních příležitostech",
    }

    name_template: str = "Trať {local_number}: {from_place} – {to_place}"
    last_ride_label: str = "Naposledy projeto"

    # uMap style hints
    color_default: str = "Crimson"
    color_recently_ridden: str = "DarkGreen"
    special_weight: int = 2


class FileSettings:
    """File naming conventions, all keyed by the country code."""

    input_template: str = "{code}.geojson"
    filtered_template: str = "{code}-filtered.geojson"
    merged_only_template: str = "{code}-merged-only.geojson"
    report_template: str = "{code}-report.csv"
    preview_template: str = "{code}-preview.html"
    catalog_template: str = "{code}.json"

    encoding: str = "utf-8"


class PreviewSettings:
    """Folium preview map settings."""

    # Roughly the middle of Czechia
    center: tuple = (49.8175, 15.4730)
    zoom_start: int = 7
    station_radius: int = 3
    station_color: str = "#333333"
    default_weight: int = 4


class Settings:
    """Main settings container."""

    # Metric CRS for line lengths (ETRS89 / LAEA Europe)
    crs_metric: str = "EPSG:3035"
    crs_geographic: str = "EPSG:4326"

    def __init__(self):
        self.project_root = Path(__file__).parent.parent
        self.data_dir = self.project_root / "data"
        self.catalog_dir = self.data_dir / "catalogs"

        self.railway = RailwaySettings()
        self.files = FileSettings()
        self.preview = PreviewSettings()

    def input_path(self, code: str, directory: Optional[Path] = None) -> Path:
        """Location of the pruned OSM snapshot for a country."""
        base = directory if directory is not None else Path.cwd()
        return base / self.files.input_template.format(code=code)

    def output_path(self, kind: str, code: str, directory: Optional[Path] = None) -> Path:
        """
        Location of one output artifact.

        Args:
            kind: One of 'filtered', 'merged_only', 'report', 'preview'
            code: Country code
            directory: Output directory (current directory if None)
        """
        templates = {
            "filtered": self.files.filtered_template,
            "merged_only": self.files.merged_only_template,
            "report": self.files.report_template,
            "preview": self.files.preview_template,
        }
        if kind not in templates:
            raise ValueError(f"Unknown output kind '{kind}'. Choose from: {sorted(templates)}")

        base = directory if directory is not None else Path.cwd()
        return base / templates[kind].format(code=code)

    def catalog_path(self, code: str) -> Path:
        """Default line catalog for a country."""
        return self.catalog_dir / self.files.catalog_template.format(code=code)


# Global settings instance
settings = Settings()
