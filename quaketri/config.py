# -------------------------
# quaketri file structure
# -------------------------
# config.py — constants & defaults, RunConfig.
# schema.py — record types, required columns, magnitude bands.
# validation.py — column checks for loaded tables.
# loader.py — read + filter the three input datasets.
# spatial.py — facility -> state point-in-polygon join.
# aggregate.py — per-state sums, min-max normalization, amount colors.
# layers.py — MapBuilder: accumulate layers, render once.
# plots.py — the two map figures.
# pipeline.py — orchestration (run).
# cli.py — argparse entrypoint.
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# Project layout (relative to the project root)
DATA_DIR = "data"
PLOTS_DIR = "plots"
STATES_FILE = "cb_2018_us_state_500k.shp"
EARTHQUAKES_FILE = "earthquakes.csv"
RELEASES_FILE = "tri.csv"

SCATTER_PNG = "earthquakes_scatter.png"
TRI_PNG = "earthquakes_tri.png"

# Source checkout root; installed copies fall back to the working directory
DEFAULT_ROOT = Path(__file__).resolve().parent.parent

# Row filters
REVIEWED_STATUS = "reviewed"
DEFAULT_CHEMICAL = "n-Hexane"
LB_TO_KG = 0.453592
OVERLAY_MIN_MAGNITUDE = 4.0

# Magnitude bands: (-inf, 2.5], (2.5, 4.5], (4.5, inf)
LOW_MAG_MAX = 2.5
MEDIUM_MAG_MAX = 4.5

# Continental US view
LON_RANGE = (-130.0, -65.0)
LAT_RANGE = (20.0, 50.0)

# Layer styling
OUTLINE_COLOR = "gray"
BASE_FILL_COLOR = "lightgray"
BASE_FILL_ALPHA = 0.7
CHOROPLETH_ALPHA = 0.2
BAND_COLORS = {"low": "blue", "medium": "green", "high": "red"}
BAND_LABELS = {
    "low": "Mag <= 2.5",
    "medium": "2.5 < Mag <= 4.5",
    "high": "Mag > 4.5",
}
BAND_ALPHA = 0.5
HALO_COLOR = "red"
HALO_ALPHA = 0.5
CENTER_COLOR = "black"
CENTER_SIZE = 1.0
FACILITY_COLOR = "purple"
FACILITY_SIZE = 3.0
LEGEND_COLUMNS = 3

# Amount colors: level = round(GRAY_SLOPE * normalized + GRAY_MAX)
GRAY_MAX = 250.0
GRAY_SLOPE = -250.0


def default_root() -> Path:
    """Project root used when none is given: the checkout if it holds data/, else the cwd."""
    if (DEFAULT_ROOT / DATA_DIR).is_dir():
        return DEFAULT_ROOT
    return Path.cwd()


@dataclass(frozen=True)
class RunConfig:
    """Where one report run reads its inputs and writes its figures."""

    project_root: Path
    states_path: Path
    earthquakes_path: Path
    releases_path: Path
    plots_dir: Path
    chemical: str = DEFAULT_CHEMICAL
    use_spatial_index: bool = False
    show_progress: bool = False

    @classmethod
    def from_root(
        cls,
        root: str | Path | None = None,
        *,
        chemical: str = DEFAULT_CHEMICAL,
        use_spatial_index: bool = False,
        show_progress: bool = False,
    ) -> "RunConfig":
        root = default_root() if root is None else Path(root)
        data_dir = root / DATA_DIR
        return cls(
            project_root=root,
            states_path=data_dir / STATES_FILE,
            earthquakes_path=data_dir / EARTHQUAKES_FILE,
            releases_path=data_dir / RELEASES_FILE,
            plots_dir=root / PLOTS_DIR,
            chemical=chemical,
            use_spatial_index=use_spatial_index,
            show_progress=show_progress,
        )

    @property
    def scatter_path(self) -> Path:
        return self.plots_dir / SCATTER_PNG

    @property
    def tri_path(self) -> Path:
        return self.plots_dir / TRI_PNG
