"""
Map layer builder.

A figure is an ordered stack of layers drawn in a single pass. Each layer
is drawn with ``zorder`` equal to its position in the stack.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import geopandas as gpd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .config import LAT_RANGE, LEGEND_COLUMNS, LON_RANGE, OUTLINE_COLOR

logger = logging.getLogger(__name__)

Color = Union[str, Tuple[float, float, float]]


@dataclass
class PolygonLayer:
    """
    Polygons drawn as outlines or filled shapes.

    ``facecolor`` is either one color (a name or an RGB tuple) for every
    geometry or a list with one color per geometry.
    """

    name: str
    geometries: gpd.GeoSeries
    facecolor: Union[Color, List[Color]] = "none"
    edgecolor: Optional[str] = OUTLINE_COLOR
    alpha: float = 1.0
    linewidth: float = 0.5
    outline_only: bool = False
    label: Optional[str] = None

    def draw(self, ax, zorder: int) -> None:
        if self.geometries.empty:
            return
        if self.outline_only:
            self.geometries.boundary.plot(
                ax=ax, color=self.edgecolor, linewidth=self.linewidth, zorder=zorder
            )
            return

        if not isinstance(self.facecolor, list):
            self.geometries.plot(
                ax=ax,
                facecolor=self.facecolor,
                edgecolor=self.edgecolor or "none",
                alpha=self.alpha,
                linewidth=self.linewidth,
                zorder=zorder,
            )
            return

        if len(self.facecolor) != len(self.geometries):
            raise ValueError(
                f"Layer '{self.name}': {len(self.facecolor)} colors for "
                f"{len(self.geometries)} geometries"
            )
        # one call per geometry keeps each RGB tuple a single color
        for geom, color in zip(self.geometries, self.facecolor):
            gpd.GeoSeries([geom]).plot(
                ax=ax,
                facecolor=color,
                edgecolor=self.edgecolor or "none",
                alpha=self.alpha,
                linewidth=self.linewidth,
                zorder=zorder,
            )


@dataclass
class PointLayer:
    """Scatter markers at (x=longitude, y=latitude)."""

    name: str
    x: Sequence[float]
    y: Sequence[float]
    color: Color
    size: Union[float, Sequence[float]] = 20.0
    alpha: float = 1.0
    label: Optional[str] = None

    def __len__(self) -> int:
        return len(self.x)

    def draw(self, ax, zorder: int) -> None:
        ax.scatter(
            self.x,
            self.y,
            s=self.size,
            color=self.color,
            alpha=self.alpha,
            label=self.label,
            linewidths=0,
            zorder=zorder,
        )


Layer = Union[PolygonLayer, PointLayer]


class MapBuilder:
    """Accumulates map layers in draw order and renders them once."""

    def __init__(
        self,
        lon_range: Tuple[float, float] = LON_RANGE,
        lat_range: Tuple[float, float] = LAT_RANGE,
        legend_columns: int = LEGEND_COLUMNS,
    ):
        self.lon_range = lon_range
        self.lat_range = lat_range
        self.legend_columns = legend_columns
        self._layers: List[Layer] = []

    def add(self, layer: Layer) -> "MapBuilder":
        self._layers.append(layer)
        return self

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return tuple(self._layers)

    @property
    def layer_names(self) -> List[str]:
        return [layer.name for layer in self._layers]

    def layer(self, name: str) -> Layer:
        for layer in self._layers:
            if layer.name == name:
                return layer
        raise KeyError(f"No layer named '{name}' (have: {self.layer_names})")

    def render(self, path: Union[str, Path]) -> Path:
        """
        Draw every layer onto one figure and save it as an image.

        Args:
            path: Output file; parent directories are created

        Returns:
            The path written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        fig, ax = plt.subplots()
        try:
            for zorder, layer in enumerate(self._layers, start=1):
                layer.draw(ax, zorder)

            ax.set_xlim(*self.lon_range)
            ax.set_ylim(*self.lat_range)
            ax.set_axis_off()

            if any(layer.label for layer in self._layers):
                ax.legend(
                    loc="lower center",
                    bbox_to_anchor=(0.5, 1.0),
                    ncol=self.legend_columns,
                    frameon=False,
                )
            fig.savefig(path, bbox_inches="tight")
        finally:
            plt.close(fig)

        logger.info(f"Saved: {path}")
        return path
