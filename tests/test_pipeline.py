"""Tests for src/merging/pipeline.py"""

import pytest

from src.loading.snapshot_loader import DuplicateFeatureIdError
from src.merging.pipeline import MergePipeline
from src.output.writer import select_merged_only
from tests.helpers import line, scenario_features, station, way


class TestMergePipeline:
    def setup_method(self):
        self.pipeline = MergePipeline()

    def test_single_line_scenario(self):
        result = self.pipeline.run(scenario_features(), [line("1;2", local_number="100")])

        ids = [f["properties"]["@id"] for f in result.features]
        assert ids == [3, 4, "1;2"]
        assert result.features[-1]["properties"]["track_id"] == "cz100a"

        merged_only = select_merged_only(result.features)
        assert [f["properties"]["@id"] for f in merged_only] == [4, "1;2"]
        assert result.unconsumed_ways == 1

    def test_repeated_local_number_gets_next_suffix(self):
        catalog = [line("1;2", local_number="100"), line("3", local_number="100")]
        result = self.pipeline.run(scenario_features(), catalog)

        track_ids = [f["properties"]["track_id"] for f in result.merged]
        assert track_ids == ["cz100a", "cz100b"]

    def test_track_ids_unique(self):
        catalog = [
            line("1", local_number="100"),
            line("2", local_number="200"),
            line("3", local_number="100"),
            line("99", local_number="200"),
        ]
        result = self.pipeline.run(scenario_features(), catalog)

        track_ids = [r.track_id for r in result.records]
        assert track_ids == ["cz100a", "cz200a", "cz100b", "cz200b"]
        assert len(set(track_ids)) == len(track_ids)

    def test_last_ride_scenario(self):
        catalog = [line("1", local_number="10"), line("2", local_number="11", last_ride="2022-09-03")]
        result = self.pipeline.run(scenario_features(), catalog)

        plain, ridden = result.merged
        assert "\nNaposledy projeto: 2022-09-03" in ridden["properties"]["description"]
        assert ridden["properties"]["description"].split("\n")[-1] == "Naposledy projeto: 2022-09-03"
        assert ridden["properties"]["_umap_options"]["color"] == "DarkGreen"
        assert plain["properties"]["_umap_options"]["color"] != ridden["properties"]["_umap_options"]["color"]

    def test_way_claimed_twice_is_empty_second_time(self):
        catalog = [line("1;2"), line("2", local_number="200")]
        result = self.pipeline.run(scenario_features(), catalog)

        assert result.merged[1]["geometry"]["coordinates"] == []
        assert [r.track_id for r in result.empty_lines] == ["cz200a"]

    def test_empty_catalog_keeps_features(self):
        features = scenario_features()
        result = self.pipeline.run(features, [])
        assert result.features == features
        assert result.merged == []

    def test_duplicate_ids_abort(self):
        features = [way(1, [[0, 0], [1, 1]]), station(1, [0, 0])]
        with pytest.raises(DuplicateFeatureIdError):
            self.pipeline.run(features, [line("1")])

    def test_input_not_modified(self):
        features = scenario_features()
        self.pipeline.run(features, [line("1;2")])
        assert [f["properties"]["@id"] for f in features] == [1, 2, 3, 4]

    def test_line_hitting_only_a_station_counts_as_empty(self):
        result = self.pipeline.run(scenario_features(), [line("4", local_number="500")])

        assert result.merged[0]["geometry"]["coordinates"] == []
        assert [r.track_id for r in result.empty_lines] == ["cz500a"]
        assert all(f["properties"]["@id"] != 4 for f in result.features)
