"""
Per-state release totals and their color encoding.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Tuple

from .config import GRAY_MAX, GRAY_SLOPE
from .schema import AggregatedPolygon, StatePolygon
from .spatial import JoinedRelease

logger = logging.getLogger(__name__)


def aggregate(joined: Iterable[JoinedRelease]) -> Dict[int, float]:
    """Sum release amounts (kg) per polygon index, keys in first-seen order."""
    sums: Dict[int, float] = {}
    for record, polygon in joined:
        sums[polygon.index] = sums.get(polygon.index, 0.0) + record.amount_kg
    return sums


def normalize(sums: Mapping[int, float]) -> Dict[int, float]:
    """
    Min-max normalize polygon totals into [0, 1].

    When every total is equal (including a single polygon) there is no range
    to scale against and every polygon maps to 0.0.
    """
    if not sums:
        return {}

    lo = min(sums.values())
    hi = max(sums.values())
    span = hi - lo
    if span == 0:
        logger.warning(
            f"All {len(sums)} aggregated polygons share the same total ({lo:.3f}); "
            "normalizing every polygon to 0.0"
        )
        return {key: 0.0 for key in sums}
    return {key: (value - lo) / span for key, value in sums.items()}


def aggregate_polygons(joined: Iterable[JoinedRelease]) -> Tuple[AggregatedPolygon, ...]:
    """
    Group joined releases by state, sum them and attach normalized totals.

    Args:
        joined: (ReleaseRecord, StatePolygon) pairs from the spatial join

    Returns:
        One AggregatedPolygon per state that received at least one release,
        in first-seen order
    """
    polygons: Dict[int, StatePolygon] = {}
    pairs = list(joined)
    for _, polygon in pairs:
        polygons.setdefault(polygon.index, polygon)

    sums = aggregate(pairs)
    scaled = normalize(sums)

    result = tuple(
        AggregatedPolygon(
            polygon=polygons[key],
            amount_sum=sums[key],
            normalized_amount_sum=scaled[key],
        )
        for key in sums
    )
    for agg in result:
        label = agg.polygon.name or f"polygon #{agg.polygon.index}"
        logger.debug(f"{label}: {agg.amount_sum:.1f} kg (normalized {agg.normalized_amount_sum:.3f})")
    return result


def amount_color(normalized: float) -> Tuple[float, float, float]:
    """
    Map a normalized total to an RGB color.

    0.0 -> near-white blue (250/255, 250/255, 1.0), 1.0 -> pure blue (0, 0, 1.0).
    """
    level = round(GRAY_SLOPE * normalized + GRAY_MAX)
    return (level / 255, level / 255, 1.0)
