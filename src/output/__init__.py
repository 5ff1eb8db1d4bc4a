"""
Output module.

Serializes the consolidated feature collection.
"""

from src.output.writer import OutputWriter, select_merged_only

__all__ = ["OutputWriter", "select_merged_only"]
