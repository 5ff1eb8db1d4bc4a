"""
Preview map creation module.

Creates a Folium map of the merged-only output so a catalog editor can check
a run before publishing it:
- railway_routes: merged lines styled from their uMap options, with popups
- stations: station points with name tooltips
- Multiple base layers (Light/OpenStreetMap)

Which layer gets which interaction is declared in LAYER_ROUTES rather than
wired per layer.
"""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import folium

from config.logging_config import get_logger
from config.settings import settings

logger = get_logger(__name__)

Feature = Dict[str, Any]

# Source name -> capabilities (geometry, popup fields, tooltip fields, cursor)
LAYER_ROUTES: Dict[str, Dict[str, Any]] = {
    "railway_routes": {
        "title": "🚆 Railway routes",
        "geometry": "LineString",
        "popup": ["name", "description", "track_id"],
        "tooltip": ["name"],
        "styled": True,
    },
    "stations": {
        "title": "🚉 Stations",
        "geometry": "Point",
        "popup": [],
        "tooltip": ["name"],
        "styled": False,
    },
}


def split_by_layer(features: List[Feature]) -> Dict[str, List[Feature]]:
    """
    Route features to the layers of LAYER_ROUTES by geometry type.

    Degenerate lines (fewer than two points) are left out.
    """
    layers: Dict[str, List[Feature]] = {name: [] for name in LAYER_ROUTES}

    for feature in features:
        geometry = feature.get("geometry") or {}
        for name, capabilities in LAYER_ROUTES.items():
            if geometry.get("type") != capabilities["geometry"]:
                continue
            if capabilities["geometry"] == "LineString" and len(geometry.get("coordinates") or []) < 2:
                continue
            layers[name].append(feature)

    return layers


def _display_properties(feature: Feature, fields: List[str]) -> Dict[str, str]:
    """Escaped, popup-ready copies of the listed properties."""
    properties = feature.get("properties") or {}
    shown = {}
    for key in fields:
        value = properties.get(key)
        shown[key] = escape(str(value)).replace("\n", "<br>") if value is not None else ""
    return shown


class MapCreator:
    """Creates an interactive Folium preview of consolidated railway lines."""

    def __init__(self, center: Optional[Tuple[float, float]] = None, zoom_start: Optional[int] = None):
        """
        Initialize map creator.

        Args:
            center: Map center (lat, lon)
            zoom_start: Initial zoom level
        """
        self.center = center or settings.preview.center
        self.zoom_start = zoom_start or settings.preview.zoom_start

    def create_preview_map(self, features: List[Feature], output_path: Optional[Path] = None) -> folium.Map:
        """
        Create the preview map.

        Args:
            features: Merged-only feature collection
            output_path: Path to save HTML

        Returns:
            Folium Map object
        """
        m = folium.Map(
            location=self.center,
            zoom_start=self.zoom_start,
            tiles=None,
            control_scale=True,
        )
        self._add_base_layers(m)

        layers = split_by_layer(features)
        for name, layer_features in layers.items():
            self._add_layer(m, name, layer_features)
            logger.debug(f"Layer {name}: {len(layer_features)} features")

        folium.LayerControl(collapsed=False).add_to(m)

        if output_path:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))
            logger.info(f"Preview map saved to {output_path}")

        return m

    def _add_base_layers(self, m: folium.Map) -> None:
        """Add base tile layers."""
        folium.TileLayer(
            tiles="cartodbpositron",
            name="🗺️ Light",
            control=True
        ).add_to(m)

        folium.TileLayer(
            tiles="OpenStreetMap",
            name="🛣️ OpenStreetMap",
            control=True
        ).add_to(m)

    def _add_layer(self, m: folium.Map, name: str, features: List[Feature]) -> None:
        capabilities = LAYER_ROUTES[name]
        fg = folium.FeatureGroup(name=capabilities["title"], show=True)

        if not features:
            fg.add_to(m)
            return

        fields = list(dict.fromkeys(capabilities["popup"] + capabilities["tooltip"]))
        data = {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "geometry": f["geometry"],
                    "properties": {
                        **_display_properties(f, fields),
                        "_umap_options": (f.get("properties") or {}).get("_umap_options") or {},
                    },
                }
                for f in features
            ],
        }

        popup = folium.GeoJsonPopup(fields=capabilities["popup"], labels=False) if capabilities["popup"] else None
        tooltip = folium.GeoJsonTooltip(fields=capabilities["tooltip"], labels=False) if capabilities["tooltip"] else None

        if capabilities["styled"]:
            folium.GeoJson(
                data,
                name=name,
                style_function=self._route_style,
                highlight_function=lambda x: {"weight": 6},
                popup=popup,
                tooltip=tooltip,
            ).add_to(fg)
        else:
            folium.GeoJson(
                data,
                name=name,
                marker=folium.CircleMarker(
                    radius=settings.preview.station_radius,
                    color=settings.preview.station_color,
                    fill=True,
                    fill_opacity=0.9,
                ),
                tooltip=tooltip,
            ).add_to(fg)

        fg.add_to(m)

    @staticmethod
    def _route_style(feature: Feature) -> Dict[str, Any]:
        options = feature["properties"].get("_umap_options") or {}
        return {
            "color": options.get("color", settings.railway.color_default),
            "weight": options.get("weight", settings.preview.default_weight),
            "opacity": 0.9,
        }
