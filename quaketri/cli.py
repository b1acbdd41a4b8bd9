import argparse
import logging
import sys
from typing import Optional

from . import config
from .pipeline import run

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Render earthquake and toxic-release maps for the continental US"
    )
    ap.add_argument(
        "--root",
        default=None,
        help=f"Project root holding {config.DATA_DIR}/ and receiving {config.PLOTS_DIR}/ "
             f"(default: the source checkout if it has {config.DATA_DIR}/, else the current directory)",
    )
    ap.add_argument(
        "--chemical",
        default=config.DEFAULT_CHEMICAL,
        help=f"TRI CAS_CHEM_NAME to aggregate (default: {config.DEFAULT_CHEMICAL})",
    )
    ap.add_argument(
        "--use-spatial-index",
        action="store_true",
        help="Join facilities to states through an STRtree instead of a linear scan",
    )
    ap.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while joining facilities to states",
    )
    ap.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    return ap


def run_cli(root: Optional[str] = None, chemical: str = config.DEFAULT_CHEMICAL,
            use_spatial_index: bool = False, progress: bool = False) -> int:
    run_config = config.RunConfig.from_root(
        root,
        chemical=chemical,
        use_spatial_index=use_spatial_index,
        show_progress=progress,
    )

    try:
        result = run(run_config)
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        return 130  # 128 + SIGINT
    except Exception as e:
        # detailed logging belongs inside modules
        logger.error(f"Fatal error: {e}")
        return 2

    logger.info(f"Wrote {result.scatter_path} and {result.tri_path}")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    return run_cli(args.root, args.chemical, args.use_spatial_index, args.progress)


if __name__ == "__main__":
    sys.exit(main())
