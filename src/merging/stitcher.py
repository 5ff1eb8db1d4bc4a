"""
Segment stitching.

Joins the coordinate sequences of the OSM ways that make up one line into a
single polyline. Ways are joined only where their endpoints are exactly
equal; original coordinates are kept as they are (no snapping, no
resampling).
"""

from typing import Any, List

from config.logging_config import get_logger

logger = get_logger(__name__)

Coord = List[float]
Sequence = List[Any]


def connect_segments(sequences: List[Sequence], max_iterations: int = 100000) -> List[Sequence]:
    """
    Join sequences that share exact endpoints into connected pieces.

    Algorithm:
    - Scans all pairs (i < j) in input order for a shared endpoint
    - Joins the first matching pair into position i, dropping the junction
    - Repeats until no pair can be joined

    Args:
        sequences: Coordinate sequences, one per way
        max_iterations: Safety limit on the number of joins

    Returns:
        Connected pieces, ordered by the first input sequence they contain.
        A single element means the ways form one continuous line.

    Example:
        >>> connect_segments([[[0, 0], [1, 0]], [[2, 0], [1, 0]]])
        [[[0, 0], [1, 0], [2, 0]]]
    """
    segments: List[Sequence] = [list(seq) for seq in sequences if seq]

    iteration = 0
    while len(segments) > 1 and iteration < max_iterations:
        iteration += 1
        found_connection = False

        for i in range(len(segments)):
            for j in range(i + 1, len(segments)):
                seg1, seg2 = segments[i], segments[j]

                # [A→B] + [B→C] = [A→B→C]
                if seg1[-1] == seg2[0]:
                    segments[i] = seg1 + seg2[1:]
                # [A→B] + [C→B] = [A→B→C] (seg2 reversed)
                elif seg1[-1] == seg2[-1]:
                    segments[i] = seg1 + seg2[-2::-1]
                # [B→A] + [B→C] = [A→B→C] (seg1 reversed)
                elif seg1[0] == seg2[0]:
                    segments[i] = seg1[::-1] + seg2[1:]
                # [B→A] + [C→B] = [C→B→A]
                elif seg1[0] == seg2[-1]:
                    segments[i] = seg2 + seg1[1:]
                else:
                    continue

                segments.pop(j)
                found_connection = True
                break

            if found_connection:
                break

        if not found_connection:
            break

    return segments


def stitch_segments(sequences: List[Sequence]) -> List[Coord]:
    """
    Merge way coordinate sequences into one polyline.

    Pieces that cannot be connected are concatenated in input order, which
    leaves a jump in the resulting line. Callers that care about gaps should
    use connect_segments() and inspect the number of pieces.

    Args:
        sequences: Coordinate sequences, one per way

    Returns:
        Single coordinate sequence (empty if there was nothing to stitch)
    """
    pieces = connect_segments(sequences)

    if len(pieces) > 1:
        logger.debug(f"Stitched line has {len(pieces)} disconnected pieces")

    return [coord for piece in pieces for coord in piece]
