"""
Record types and input column contracts.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from .config import LOW_MAG_MAX, MEDIUM_MAG_MAX

# Input columns that must be present
EARTHQUAKE_COLUMNS = {"mag", "latitude", "longitude", "depth", "status"}
RELEASE_COLUMNS = {"CAS_CHEM_NAME", "TOTAL_ON_OFF_SITE_RELEASE", "LATITUDE", "LONGITUDE"}

# TRI column -> ReleaseRecord field
RELEASE_RENAMES = {
    "TOTAL_ON_OFF_SITE_RELEASE": "amount",
    "LATITUDE": "latitude",
    "LONGITUDE": "longitude",
}

MAGNITUDE_BANDS = ("low", "medium", "high")


@dataclass(frozen=True)
class EarthquakeRecord:
    magnitude: float
    latitude: float
    longitude: float
    depth: float
    status: str


@dataclass(frozen=True)
class StatePolygon:
    """One state boundary; ``index`` is its row position in the shapefile."""

    index: int
    geometry: BaseGeometry
    name: Optional[str] = None


@dataclass(frozen=True)
class ReleaseRecord:
    amount_kg: float
    latitude: float
    longitude: float

    @property
    def point(self) -> Point:
        return Point(self.longitude, self.latitude)


@dataclass(frozen=True)
class AggregatedPolygon:
    polygon: StatePolygon
    amount_sum: float
    normalized_amount_sum: float


def magnitude_band(magnitude: float) -> str:
    """
    Classify a magnitude into its display band.

    Args:
        magnitude: Earthquake magnitude

    Returns:
        "low" for (-inf, 2.5], "medium" for (2.5, 4.5], "high" above 4.5
    """
    if magnitude <= LOW_MAG_MAX:
        return "low"
    elif magnitude <= MEDIUM_MAG_MAX:
        return "medium"
    else:
        return "high"
