"""
Visualization module.

Provides the interactive preview map of the consolidated railway lines.
"""

from src.visualization.map_creator import LAYER_ROUTES, MapCreator, split_by_layer

__all__ = [
    "LAYER_ROUTES",
    "MapCreator",
    "split_by_layer",
]
