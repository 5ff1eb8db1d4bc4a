"""
Merging module.

Provides the segment stitcher, the track assembler, the working collection
reducer and the pipeline tying them together.
"""

from src.merging.assembler import AssemblyRecord, TrackAssembler, TrackPartCounter
from src.merging.pipeline import MergePipeline, MergeResult
from src.merging.reducer import FeatureSetReducer
from src.merging.stitcher import connect_segments, stitch_segments

__all__ = [
    "AssemblyRecord",
    "FeatureSetReducer",
    "MergePipeline",
    "MergeResult",
    "TrackAssembler",
    "TrackPartCounter",
    "connect_segments",
    "stitch_segments",
]
