from .config import RunConfig
from .pipeline import RunResult, run
from .plots import plot_earthquakes_scatter, plot_earthquakes_tri
from .spatial import locate_polygon

__all__ = [
    "RunConfig",
    "RunResult",
    "run",
    "plot_earthquakes_scatter",
    "plot_earthquakes_tri",
    "locate_polygon",
]
