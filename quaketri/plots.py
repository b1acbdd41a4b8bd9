"""
The two report figures.

- earthquakes_scatter.png: state outlines + earthquakes colored by magnitude band
- earthquakes_tri.png: states shaded by total toxic release, with M>=4
  earthquakes (halo sized by depth) and the release facilities on top
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import geopandas as gpd

from . import config
from .aggregate import aggregate_polygons, amount_color
from .layers import MapBuilder, PointLayer, PolygonLayer
from .schema import (
    MAGNITUDE_BANDS, AggregatedPolygon, EarthquakeRecord, ReleaseRecord, StatePolygon,
    magnitude_band,
)
from .spatial import join_releases

logger = logging.getLogger(__name__)


def states_series(states: Sequence[StatePolygon]) -> gpd.GeoSeries:
    return gpd.GeoSeries([s.geometry for s in states], crs="EPSG:4326")


def partition_by_band(earthquakes: Sequence[EarthquakeRecord]) -> Dict[str, List[EarthquakeRecord]]:
    """Split earthquakes into the low / medium / high magnitude bands."""
    bands: Dict[str, List[EarthquakeRecord]] = {band: [] for band in MAGNITUDE_BANDS}
    for quake in earthquakes:
        bands[magnitude_band(quake.magnitude)].append(quake)
    return bands


def _halo_sizes(quakes: Sequence[EarthquakeRecord]) -> List[float]:
    # marker area is the raw depth; events above sea level get no halo
    sizes = [max(q.depth, 0.0) for q in quakes]
    negative = sum(1 for q in quakes if q.depth < 0)
    if negative:
        logger.warning(f"{negative} earthquakes have negative depth; drawing them without a halo")
    return sizes


def build_scatter_map(
    earthquakes: Sequence[EarthquakeRecord],
    states: Sequence[StatePolygon],
) -> MapBuilder:
    builder = MapBuilder()
    builder.add(PolygonLayer("states", states_series(states), outline_only=True))

    for band, quakes in partition_by_band(earthquakes).items():
        builder.add(PointLayer(
            f"quakes_{band}",
            x=[q.longitude for q in quakes],
            y=[q.latitude for q in quakes],
            color=config.BAND_COLORS[band],
            alpha=config.BAND_ALPHA,
            label=config.BAND_LABELS[band],
        ))
    return builder


def build_tri_map(
    earthquakes: Sequence[EarthquakeRecord],
    states: Sequence[StatePolygon],
    releases: Sequence[ReleaseRecord],
    aggregated: Sequence[AggregatedPolygon],
) -> MapBuilder:
    """
    Assemble the release overlay: base states -> release totals ->
    earthquake halos -> earthquake centers -> facilities.
    """
    builder = MapBuilder()
    builder.add(PolygonLayer(
        "states",
        states_series(states),
        facecolor=config.BASE_FILL_COLOR,
        alpha=config.BASE_FILL_ALPHA,
    ))
    builder.add(PolygonLayer(
        "release_totals",
        gpd.GeoSeries([agg.polygon.geometry for agg in aggregated], crs="EPSG:4326"),
        facecolor=[amount_color(agg.normalized_amount_sum) for agg in aggregated],
        edgecolor=None,
        alpha=config.CHOROPLETH_ALPHA,
    ))

    strong = [q for q in earthquakes if q.magnitude >= config.OVERLAY_MIN_MAGNITUDE]
    lons = [q.longitude for q in strong]
    lats = [q.latitude for q in strong]
    builder.add(PointLayer(
        "quake_halos", x=lons, y=lats,
        color=config.HALO_COLOR,
        size=_halo_sizes(strong),
        alpha=config.HALO_ALPHA,
    ))
    builder.add(PointLayer(
        "quake_centers", x=lons, y=lats,
        color=config.CENTER_COLOR,
        size=config.CENTER_SIZE,
    ))

    builder.add(PointLayer(
        "facilities",
        x=[r.longitude for r in releases],
        y=[r.latitude for r in releases],
        color=config.FACILITY_COLOR,
        size=config.FACILITY_SIZE,
    ))
    return builder


def plot_earthquakes_scatter(
    earthquakes: Sequence[EarthquakeRecord],
    states: Sequence[StatePolygon],
    plots_dir: Union[str, os.PathLike],
) -> Path:
    """
    Plot earthquakes on the USA map, colored by magnitude band.

    Args:
        earthquakes: Reviewed earthquake records
        states: State polygons for the base map
        plots_dir: Directory receiving earthquakes_scatter.png

    Returns:
        Path of the written image
    """
    builder = build_scatter_map(earthquakes, states)
    return builder.render(Path(plots_dir) / config.SCATTER_PNG)


def plot_earthquakes_tri(
    earthquakes: Sequence[EarthquakeRecord],
    states: Sequence[StatePolygon],
    releases: Sequence[ReleaseRecord],
    plots_dir: Union[str, os.PathLike],
    *,
    aggregated: Optional[Sequence[AggregatedPolygon]] = None,
    use_index: bool = False,
    show_progress: bool = False,
) -> Path:
    """
    Plot state release totals with earthquakes and facilities on top.

    Args:
        earthquakes: Reviewed earthquake records (M>=4 are drawn)
        states: State polygons
        releases: Release facilities (kg)
        plots_dir: Directory receiving earthquakes_tri.png
        aggregated: Precomputed per-state totals; joined from ``releases`` when omitted
        use_index: Use the STRtree join instead of the linear scan
        show_progress: Show a progress bar while joining

    Returns:
        Path of the written image
    """
    if aggregated is None:
        joined, _ = join_releases(
            releases, states, use_index=use_index, show_progress=show_progress
        )
        aggregated = aggregate_polygons(joined)

    builder = build_tri_map(earthquakes, states, releases, aggregated)
    return builder.render(Path(plots_dir) / config.TRI_PNG)
