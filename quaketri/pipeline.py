"""Load the inputs, join and aggregate, write both figures."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from .aggregate import aggregate_polygons
from .config import RunConfig
from .loader import load_earthquakes, load_releases, load_states
from .plots import plot_earthquakes_scatter, plot_earthquakes_tri
from .schema import AggregatedPolygon
from .spatial import join_releases

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Figures written by one run, with the counts and per-state totals behind them."""

    scatter_path: Path
    tri_path: Path
    earthquake_count: int
    release_count: int
    unmatched_releases: int
    aggregated: Tuple[AggregatedPolygon, ...]


def run(config: RunConfig) -> RunResult:
    """
    Produce earthquakes_scatter.png and earthquakes_tri.png for one project root.

    Any missing input or malformed row raises and nothing further is written.
    """
    logger.info(f"Building earthquake/TRI maps under {config.project_root}")

    states = load_states(config.states_path)
    earthquakes = load_earthquakes(config.earthquakes_path)
    releases = load_releases(config.releases_path, config.chemical)

    joined, unmatched = join_releases(
        releases,
        states,
        use_index=config.use_spatial_index,
        show_progress=config.show_progress,
    )
    aggregated = aggregate_polygons(joined)
    logger.info(f"Aggregated {config.chemical} releases into {len(aggregated)} states")

    scatter_path = plot_earthquakes_scatter(earthquakes, states, config.plots_dir)
    tri_path = plot_earthquakes_tri(
        earthquakes, states, releases, config.plots_dir, aggregated=aggregated
    )

    return RunResult(
        scatter_path=scatter_path,
        tri_path=tri_path,
        earthquake_count=len(earthquakes),
        release_count=len(releases),
        unmatched_releases=unmatched,
        aggregated=aggregated,
    )
