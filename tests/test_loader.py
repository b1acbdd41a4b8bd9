"""
Test input loading and row filters.
"""
import pandas as pd
import pytest

from quaketri import config
from quaketri.loader import (
    filter_earthquakes, filter_releases, load_earthquakes, load_releases, load_states,
)


class TestEarthquakeFilter:
    """Reviewed-status filter on earthquakes.csv rows."""

    def test_only_reviewed_rows_remain(self, earthquake_frame):
        quakes = filter_earthquakes(earthquake_frame)
        assert (quakes["status"] == "reviewed").all()

    def test_no_reviewed_row_is_lost(self, earthquake_frame):
        quakes = filter_earthquakes(earthquake_frame)
        assert len(quakes) == (earthquake_frame["status"] == "reviewed").sum()

    def test_missing_column_raises(self, earthquake_frame):
        with pytest.raises(ValueError, match=r"quakes.csv is missing required columns \['depth'\]"):
            filter_earthquakes(earthquake_frame.drop(columns=["depth"]), "data/quakes.csv")

    def test_non_numeric_magnitude_raises(self, earthquake_frame):
        bad = earthquake_frame.copy()
        bad["mag"] = bad["mag"].astype(object)
        bad.loc[0, "mag"] = "big"
        with pytest.raises(ValueError, match="mag"):
            filter_earthquakes(bad)

    def test_rows_without_position_are_dropped(self, earthquake_frame):
        frame = earthquake_frame.copy()
        frame.loc[0, "latitude"] = None
        quakes = filter_earthquakes(frame)
        assert len(quakes) == 4
        assert quakes["latitude"].notna().all()


class TestReleaseFilter:
    """Chemical / non-zero filter and pound to kilogram conversion."""

    def test_keeps_non_zero_hexane_only(self, tri_frame):
        tri = filter_releases(tri_frame)
        # row 1 is zero, row 2 is Toluene, row 4 has no latitude
        assert len(tri) == 2
        assert list(tri.columns) == ["amount", "latitude", "longitude"]

    def test_amount_is_converted_to_kilograms(self, tri_frame):
        tri = filter_releases(tri_frame)
        assert tri["amount"].tolist() == [100.0 * 0.453592, 250.0 * 0.453592]

    def test_other_chemical(self, tri_frame):
        tri = filter_releases(tri_frame, chemical="Toluene")
        assert tri["amount"].tolist() == [50.0 * 0.453592]

    def test_missing_column_raises(self, tri_frame):
        with pytest.raises(ValueError, match="CAS_CHEM_NAME"):
            filter_releases(tri_frame.drop(columns=["CAS_CHEM_NAME"]))

    def test_unnamed_table_in_message(self, tri_frame):
        with pytest.raises(ValueError, match="input table is missing"):
            filter_releases(tri_frame.drop(columns=["LATITUDE"]))


class TestLoadFromFiles:
    """Loaders reading the fixed project layout."""

    def test_load_states_in_dataset_order(self, project_root):
        states = load_states(project_root / config.DATA_DIR / config.STATES_FILE)
        assert [s.index for s in states] == [0, 1]
        assert [s.name for s in states] == ["Alpha", "Bravo"]

    def test_load_earthquakes_returns_records(self, project_root):
        quakes = load_earthquakes(project_root / config.DATA_DIR / config.EARTHQUAKES_FILE)
        assert len(quakes) == 5
        assert all(q.status == "reviewed" for q in quakes)
        assert quakes[0].magnitude == pytest.approx(1.2)

    def test_load_releases_returns_records(self, project_root):
        releases = load_releases(project_root / config.DATA_DIR / config.RELEASES_FILE)
        assert [r.amount_kg for r in releases] == pytest.approx([45.3592, 113.398])
        assert (releases[1].longitude, releases[1].latitude) == (-80.0, 35.0)

    @pytest.mark.parametrize("loader", [load_states, load_earthquakes, load_releases])
    def test_missing_file_raises(self, tmp_path, loader):
        with pytest.raises(FileNotFoundError):
            loader(tmp_path / "nope")

    def test_malformed_csv_raises(self, tmp_path):
        path = tmp_path / "earthquakes.csv"
        pd.DataFrame({"mag": [1.0], "latitude": [1.0]}).to_csv(path, index=False)
        with pytest.raises(ValueError, match="earthquakes.csv is missing required columns"):
            load_earthquakes(path)
