"""
Analysis module.

Provides per-line statistics of a merge run.
"""

from src.analysis.statistics import MergeStatistics

__all__ = [
    "MergeStatistics"
]
