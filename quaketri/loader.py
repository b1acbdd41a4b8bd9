"""
Loaders for the three report inputs: state boundaries, earthquakes and
the Toxics Release Inventory (TRI).

Each loader reads the raw file, checks its columns, applies the row filters
and returns immutable records. Any missing file or malformed row aborts
the run.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

import geopandas as gpd
import pandas as pd

from .config import DEFAULT_CHEMICAL, LB_TO_KG, REVIEWED_STATUS
from .schema import (
    EARTHQUAKE_COLUMNS, RELEASE_COLUMNS, RELEASE_RENAMES,
    EarthquakeRecord, ReleaseRecord, StatePolygon,
)
from .validation import coerce_numeric, validate_columns

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _require_file(path: PathLike, what: str) -> Path:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{what} not found: {path}")
    return path


def load_states(path: PathLike) -> Tuple[StatePolygon, ...]:
    """
    Load state boundary polygons in dataset order.

    Args:
        path: Path to the state shapefile (sidecar files alongside)

    Returns:
        Tuple of StatePolygon, one per shapefile row
    """
    path = _require_file(path, "State shapefile")
    logger.info(f"Loading state boundaries from {path}")
    states_gdf = gpd.read_file(path)

    # Ensure consistent CRS (EPSG:4326)
    if states_gdf.crs is not None and states_gdf.crs != "EPSG:4326":
        states_gdf = states_gdf.to_crs("EPSG:4326")

    names = states_gdf["NAME"] if "NAME" in states_gdf.columns else [None] * len(states_gdf)
    states = tuple(
        StatePolygon(index=idx, geometry=geom, name=None if pd.isna(name) else str(name))
        for idx, (geom, name) in enumerate(zip(states_gdf.geometry, names))
    )
    logger.info(f"Loaded {len(states)} state polygons")
    return states


def filter_earthquakes(df: pd.DataFrame, source_path: Optional[str] = None) -> pd.DataFrame:
    """
    Keep reviewed earthquakes with usable coordinates.

    Returns:
        DataFrame with columns mag, latitude, longitude, depth, status
    """
    validate_columns(df, EARTHQUAKE_COLUMNS, source_path)

    quakes = df[df["status"] == REVIEWED_STATUS]
    quakes = quakes[["mag", "latitude", "longitude", "depth", "status"]]
    quakes = coerce_numeric(quakes, ["mag", "latitude", "longitude", "depth"], source_path)

    # Rows without a magnitude or position can't be banded or plotted
    quakes = quakes.dropna(subset=["mag", "latitude", "longitude", "depth"])
    return quakes.reset_index(drop=True)


def filter_releases(
    df: pd.DataFrame,
    chemical: str = DEFAULT_CHEMICAL,
    source_path: Optional[str] = None
) -> pd.DataFrame:
    """
    Select one chemical's non-zero releases and convert pounds to kilograms.

    Returns:
        DataFrame with columns amount (kg), latitude, longitude
    """
    validate_columns(df, RELEASE_COLUMNS, source_path)

    tri = coerce_numeric(df, list(RELEASE_RENAMES), source_path)
    tri = tri[(tri["CAS_CHEM_NAME"] == chemical) & (tri["TOTAL_ON_OFF_SITE_RELEASE"] != 0)]
    tri = tri[list(RELEASE_RENAMES)].rename(columns=RELEASE_RENAMES)
    tri = tri.dropna()

    tri["amount"] = tri["amount"] * LB_TO_KG  # pounds -> kilograms
    return tri.reset_index(drop=True)


def load_earthquakes(path: PathLike) -> Tuple[EarthquakeRecord, ...]:
    """Load earthquakes.csv and keep the reviewed events."""
    path = _require_file(path, "Earthquake CSV")
    logger.info(f"Loading earthquakes from {path}")
    raw = pd.read_csv(path)
    quakes = filter_earthquakes(raw, str(path))
    logger.info(f"Kept {len(quakes)}/{len(raw)} reviewed earthquakes")
    return tuple(
        EarthquakeRecord(
            magnitude=row.mag,
            latitude=row.latitude,
            longitude=row.longitude,
            depth=row.depth,
            status=row.status,
        )
        for row in quakes.itertuples(index=False)
    )


def load_releases(path: PathLike, chemical: str = DEFAULT_CHEMICAL) -> Tuple[ReleaseRecord, ...]:
    """Load tri.csv and keep the non-zero releases of ``chemical`` in kilograms."""
    path = _require_file(path, "TRI CSV")
    logger.info(f"Loading toxic releases from {path}")
    raw = pd.read_csv(path, low_memory=False)
    tri = filter_releases(raw, chemical, str(path))
    logger.info(f"Kept {len(tri)}/{len(raw)} {chemical} release records")
    return tuple(
        ReleaseRecord(amount_kg=row.amount, latitude=row.latitude, longitude=row.longitude)
        for row in tri.itertuples(index=False)
    )
