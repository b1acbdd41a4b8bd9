"""
Shared synthetic fixtures: a two-state world, small CSVs and a shapefile
written under a temporary project root.
"""
import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import box

from quaketri import config
from quaketri.schema import EarthquakeRecord, ReleaseRecord, StatePolygon

# Alpha covers (-100, 40), Bravo covers (-80, 35)
ALPHA = box(-110.0, 35.0, -90.0, 45.0)
BRAVO = box(-90.0, 30.0, -70.0, 40.0)


@pytest.fixture
def two_states():
    return (
        StatePolygon(index=0, geometry=ALPHA, name="Alpha"),
        StatePolygon(index=1, geometry=BRAVO, name="Bravo"),
    )


@pytest.fixture
def releases():
    return (
        ReleaseRecord(amount_kg=10.0, latitude=40.0, longitude=-100.0),
        ReleaseRecord(amount_kg=30.0, latitude=40.0, longitude=-100.0),
        ReleaseRecord(amount_kg=5.0, latitude=35.0, longitude=-80.0),
    )


@pytest.fixture
def earthquakes():
    return (
        EarthquakeRecord(magnitude=1.2, latitude=38.0, longitude=-105.0, depth=5.0, status="reviewed"),
        EarthquakeRecord(magnitude=2.5, latitude=36.0, longitude=-95.0, depth=8.0, status="reviewed"),
        EarthquakeRecord(magnitude=4.0, latitude=41.0, longitude=-101.0, depth=12.0, status="reviewed"),
        EarthquakeRecord(magnitude=4.5, latitude=33.0, longitude=-85.0, depth=30.0, status="reviewed"),
        EarthquakeRecord(magnitude=5.6, latitude=34.0, longitude=-75.0, depth=-1.5, status="reviewed"),
    )


@pytest.fixture
def earthquake_frame():
    return pd.DataFrame({
        "mag": [1.2, 2.5, 2.51, 4.5, 4.6, 3.0],
        "latitude": [38.0, 36.0, 37.0, 33.0, 34.0, 39.0],
        "longitude": [-105.0, -95.0, -96.0, -85.0, -75.0, -100.0],
        "depth": [5.0, 8.0, 9.0, 30.0, 10.0, 7.0],
        "status": ["reviewed", "reviewed", "reviewed", "reviewed", "reviewed", "automatic"],
    })


@pytest.fixture
def tri_frame():
    return pd.DataFrame({
        "CAS_CHEM_NAME": ["n-Hexane", "n-Hexane", "Toluene", "n-Hexane", "n-Hexane"],
        "TOTAL_ON_OFF_SITE_RELEASE": [100.0, 0.0, 50.0, 250.0, 40.0],
        "LATITUDE": [40.0, 41.0, 40.0, 35.0, None],
        "LONGITUDE": [-100.0, -101.0, -100.0, -80.0, -99.0],
        "FACILITY_NAME": ["A", "B", "C", "D", "E"],
    })


@pytest.fixture
def project_root(tmp_path, earthquake_frame, tri_frame):
    data_dir = tmp_path / config.DATA_DIR
    data_dir.mkdir()

    states = gpd.GeoDataFrame(
        {"NAME": ["Alpha", "Bravo"]}, geometry=[ALPHA, BRAVO], crs="EPSG:4326"
    )
    states.to_file(data_dir / config.STATES_FILE)
    earthquake_frame.to_csv(data_dir / config.EARTHQUAKES_FILE, index=False)
    tri_frame.to_csv(data_dir / config.RELEASES_FILE, index=False)
    return tmp_path
