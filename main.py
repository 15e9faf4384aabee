"""Pipeline orchestrator – runs load → aggregate → render end-to-end.

Usage: uv run python main.py [--centers PATH] [--collaborators PATH]
                             [--output PATH] [--mode continuous|split] [--table PATH]
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

from pydantic import ValidationError

import aggregate as aggregate_module
import load as load_module
import render as render_module
from states import StateLookupError

logger = logging.getLogger(__name__)


def _flag(argv: list[str], name: str, default: str | None) -> str | None:
    if name in argv:
        idx = argv.index(name)
        if idx + 1 < len(argv):
            return argv[idx + 1]
    return default


def run_pipeline(
    centers_path: str = load_module.DEFAULT_CENTERS_PATH,
    collaborators_path: str = load_module.DEFAULT_COLLABORATORS_PATH,
    output_path: str = render_module.DEFAULT_OUTPUT_PATH,
    mode: str = render_module.DEFAULT_MODE,
    table_path: str | None = None,
) -> list[aggregate_module.StateCount]:
    """Load, aggregate and render.  Any failure propagates before the image is written."""
    if mode not in render_module.MODES:
        raise ValueError(f"unknown render mode {mode!r}; expected one of {render_module.MODES}")

    # -----------------------------------------------------------------------
    # Step 1 – load
    # -----------------------------------------------------------------------
    centers, points = load_module.run_load(centers_path, collaborators_path)

    # -----------------------------------------------------------------------
    # Step 2 – aggregate
    # -----------------------------------------------------------------------
    state_rows = aggregate_module.build_state_table(centers, points)
    counted_points = aggregate_module.attach_collaborator_counts(points)

    # -----------------------------------------------------------------------
    # Step 3 – render (table first; the map is the last thing written)
    # -----------------------------------------------------------------------
    if table_path:
        render_module.write_state_table(state_rows, table_path)
    render_module.render_map(state_rows, counted_points, output_path, mode)

    return state_rows


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    argv = sys.argv[1:] if argv is None else argv

    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    logger.info("=== pipeline start  run_id=%s ===", run_id)

    try:
        run_pipeline(
            centers_path=_flag(argv, "--centers", load_module.DEFAULT_CENTERS_PATH),
            collaborators_path=_flag(argv, "--collaborators", load_module.DEFAULT_COLLABORATORS_PATH),
            output_path=_flag(argv, "--output", render_module.DEFAULT_OUTPUT_PATH),
            mode=_flag(argv, "--mode", render_module.DEFAULT_MODE),
            table_path=_flag(argv, "--table", None),
        )
    except (OSError, ValueError, ValidationError, StateLookupError) as e:
        logger.error("=== pipeline ABORTED: %s ===", e)
        sys.exit(1)

    logger.info("=== pipeline complete  run_id=%s ===", run_id)


if __name__ == "__main__":
    main()
