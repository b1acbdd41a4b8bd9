"""
Facility -> state spatial join.

Each facility point is tested against the state polygons in dataset order
and assigned to the first polygon that contains it. With ~50 states and a
few hundred facilities the brute-force loop is fine; the STRtree variant
returns the same polygon (lowest dataset index among matches), so the two
agree even where polygons overlap.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from shapely.geometry import Point
from shapely.strtree import STRtree
from tqdm import tqdm

from .schema import ReleaseRecord, StatePolygon

logger = logging.getLogger(__name__)

JoinedRelease = Tuple[ReleaseRecord, StatePolygon]


def locate_polygon(point: Point, polygons: Sequence[StatePolygon]) -> Optional[StatePolygon]:
    """
    Return the first polygon containing ``point``.

    Args:
        point: Shapely point in (longitude, latitude) order
        polygons: State polygons in dataset order

    Returns:
        The first StatePolygon whose geometry the point lies within, or None
    """
    for polygon in polygons:
        if point.within(polygon.geometry):
            return polygon
    return None


def build_polygon_index(polygons: Sequence[StatePolygon]) -> STRtree:
    return STRtree([p.geometry for p in polygons])


def locate_polygon_indexed(
    point: Point,
    tree: STRtree,
    polygons: Sequence[StatePolygon],
) -> Optional[StatePolygon]:
    """Indexed equivalent of :func:`locate_polygon` (first match in dataset order)."""
    hits = tree.query(point, predicate="within")
    if len(hits) == 0:
        return None
    return polygons[int(np.min(hits))]


def join_releases(
    releases: Sequence[ReleaseRecord],
    polygons: Sequence[StatePolygon],
    *,
    use_index: bool = False,
    show_progress: bool = False,
) -> Tuple[List[JoinedRelease], int]:
    """
    Assign every release facility to the state that contains it.

    Returns:
        (joined, unmatched): joined (record, polygon) pairs in input order and
        the number of records that fell inside no polygon
    """
    tree = build_polygon_index(polygons) if use_index else None

    joined: List[JoinedRelease] = []
    unmatched = 0
    for record in tqdm(releases, desc="Locating facilities", unit="pt", disable=not show_progress):
        point = record.point
        if tree is not None:
            polygon = locate_polygon_indexed(point, tree, polygons)
        else:
            polygon = locate_polygon(point, polygons)

        if polygon is None:
            unmatched += 1
            continue
        joined.append((record, polygon))

    logger.info(f"Matched {len(joined)}/{len(releases)} facilities to a state")
    if unmatched:
        logger.info(f"{unmatched} facilities fell outside every state polygon and were dropped")
    return joined, unmatched
