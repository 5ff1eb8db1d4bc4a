"""Tests for src/merging/stitcher.py"""

from src.merging.stitcher import connect_segments, stitch_segments


A, B, C, D = [0.0, 0.0], [1.0, 0.0], [2.0, 0.0], [3.0, 0.0]


class TestStitchConnectedChains:
    def test_end_to_start(self):
        assert stitch_segments([[A, B], [B, C]]) == [A, B, C]

    def test_second_reversed(self):
        assert stitch_segments([[A, B], [C, B]]) == [A, B, C]

    def test_first_reversed(self):
        assert stitch_segments([[B, A], [B, C]]) == [A, B, C]

    def test_both_reversed(self):
        assert stitch_segments([[B, A], [C, B]]) == [C, B, A]

    def test_out_of_order_ways(self):
        # [C, D] only touches the chain once [B, C] has been joined
        result = stitch_segments([[A, B], [C, D], [B, C]])
        assert result == [A, B, C, D]

    def test_junctions_not_duplicated(self):
        sequences = [[A, B], [B, [1.5, 0.5], C], [C, D]]
        result = stitch_segments(sequences)
        total = sum(len(s) for s in sequences)
        assert len(result) == total - 2
        assert result.count(B) == 1
        assert result.count(C) == 1

    def test_coordinates_preserved_exactly(self):
        p1 = [14.123456789012, 50.987654321098]
        p2 = [14.2, 50.1]
        p3 = [14.300000000001, 50.2]
        result = stitch_segments([[p1, p2], [p3, p2]])
        assert result == [p1, p2, p3]


class TestStitchDisconnected:
    def test_gap_concatenates_in_order(self):
        result = stitch_segments([[A, B], [C, D]])
        assert result == [A, B, C, D]

    def test_gap_reports_pieces(self):
        pieces = connect_segments([[A, B], [C, D]])
        assert len(pieces) == 2

    def test_near_miss_is_not_joined(self):
        pieces = connect_segments([[A, B], [[1.0000001, 0.0], C]])
        assert len(pieces) == 2

    def test_connected_pieces_keep_first_input_order(self):
        far = [[10.0, 10.0], [11.0, 11.0]]
        pieces = connect_segments([far, [A, B], [B, C]])
        assert pieces == [far, [A, B, C]]


class TestStitchEdgeCases:
    def test_empty_input(self):
        assert stitch_segments([]) == []
        assert connect_segments([]) == []

    def test_empty_sequences_ignored(self):
        assert stitch_segments([[], [A, B]]) == [A, B]

    def test_single_sequence_unchanged(self):
        assert stitch_segments([[A, B, C]]) == [A, B, C]

    def test_input_not_mutated(self):
        first, second = [A, B], [C, B]
        stitch_segments([first, second])
        assert first == [A, B]
        assert second == [C, B]

    def test_deterministic(self):
        sequences = [[C, D], [A, B], [[5.0, 5.0], [6.0, 6.0]], [B, C]]
        results = {str(stitch_segments(sequences)) for _ in range(5)}
        assert len(results) == 1
