"""Tests for the command line entry point (main.py)"""

import json

import pytest

import main
from tests.helpers import scenario_features, station


CATALOG = [
    {"local_number": "100", "from": "Praha", "to": "Kolín", "ways": "1;2",
     "usage": ["regular"], "operator": "České dráhy"},
]


def _write_inputs(directory, features, catalog=CATALOG, code="cz"):
    snapshot = directory / f"{code}.geojson"
    snapshot.write_text(
        json.dumps({"type": "FeatureCollection", "features": features}, ensure_ascii=False),
        encoding="utf-8",
    )
    catalog_path = directory / "catalog.json"
    catalog_path.write_text(json.dumps(catalog, ensure_ascii=False), encoding="utf-8")
    return catalog_path


def _run(tmp_path, *extra):
    catalog_path = tmp_path / "catalog.json"
    return main.main([
        "cz",
        "--input-dir", str(tmp_path),
        "--output-dir", str(tmp_path / "out"),
        "--catalog", str(catalog_path),
        "--quiet",
        *extra,
    ])


class TestMain:
    def test_missing_argument(self):
        with pytest.raises(SystemExit) as exc_info:
            main.main([])
        assert exc_info.value.code != 0

    def test_missing_input_file(self, tmp_path):
        assert _run(tmp_path) == 1
        assert not (tmp_path / "out").exists()

    def test_missing_catalog(self, tmp_path):
        _write_inputs(tmp_path, scenario_features())
        (tmp_path / "catalog.json").unlink()
        assert _run(tmp_path) == 1

    def test_duplicate_ids_write_nothing(self, tmp_path):
        _write_inputs(tmp_path, scenario_features() + [station(1, [0, 0])])
        assert _run(tmp_path) == 1
        assert not (tmp_path / "out").exists()

    def test_invalid_catalog(self, tmp_path):
        _write_inputs(tmp_path, scenario_features(), catalog=[{"local_number": "1"}])
        assert _run(tmp_path) == 1

    def test_malformed_snapshot(self, tmp_path):
        _write_inputs(tmp_path, scenario_features())
        (tmp_path / "cz.geojson").write_text("[[[", encoding="utf-8")
        assert _run(tmp_path) == 1

    def test_end_to_end(self, tmp_path):
        _write_inputs(tmp_path, scenario_features())
        assert _run(tmp_path) == 0

        out = tmp_path / "out"
        filtered = json.loads((out / "cz-filtered.geojson").read_text(encoding="utf-8"))
        merged_only = json.loads((out / "cz-merged-only.geojson").read_text(encoding="utf-8"))

        assert [f["properties"]["@id"] for f in filtered["features"]] == [3, 4, "1;2"]
        assert [f["properties"]["@id"] for f in merged_only["features"]] == [4, "1;2"]
        assert filtered["features"][-1]["properties"]["track_id"] == "cz100a"

    def test_rerun_is_byte_identical(self, tmp_path):
        _write_inputs(tmp_path, scenario_features())
        out = tmp_path / "out"

        assert _run(tmp_path) == 0
        first = [(out / name).read_bytes() for name in ("cz-filtered.geojson", "cz-merged-only.geojson")]

        assert _run(tmp_path) == 0
        second = [(out / name).read_bytes() for name in ("cz-filtered.geojson", "cz-merged-only.geojson")]

        assert first == second

    def test_report_and_preview(self, tmp_path):
        _write_inputs(tmp_path, scenario_features())
        assert _run(tmp_path, "--report", "--preview-map") == 0

        out = tmp_path / "out"
        assert (out / "cz-report.csv").exists()
        assert (out / "cz-preview.html").exists()

    def test_track_prefix_option(self, tmp_path):
        _write_inputs(tmp_path, scenario_features())
        assert _run(tmp_path, "--track-prefix", "sk") == 0

        merged_only = json.loads((tmp_path / "out" / "cz-merged-only.geojson").read_text(encoding="utf-8"))
        assert merged_only["features"][-1]["properties"]["track_id"] == "sk100a"

    def test_entry_point_does_not_touch_sys_path(self):
        assert not hasattr(main, "PROJECT_ROOT")
