"""Step 3 – Render the center choropleth with collaborator markers to a static image.

Standalone: python render.py [--output output/center_map.png] [--mode continuous|split]
Module:     from render import render_map
"""

from __future__ import annotations

import csv
import logging
import sys
from pathlib import Path

import plotly.graph_objects as go

import states as states_module
from aggregate import CountedPoint, StateCount

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configuration constants (adjust as needed)
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_PATH: str = "output/center_map.png"
DEFAULT_MODE: str = "continuous"
MODES: tuple[str, ...] = ("continuous", "split")

TITLE: str = "Network member centers and grant collaborators by state"

# nine wide by five tall
IMAGE_WIDTH: int = 900
IMAGE_HEIGHT: int = 500
IMAGE_SCALE: float = 2.0

CENTER_COLORSCALE: str = "Blues"
ZERO_FILL_COLOR: str = "#D9D9D9"
STATE_BORDER_COLOR: str = "white"

MARKER_COLOR: str = "#D95F02"
MIN_MARKER_SIZE: float = 5.0
MAX_MARKER_SIZE: float = 18.0


# ---------------------------------------------------------------------------
# Marker sizing
# ---------------------------------------------------------------------------


def marker_size(count: int, max_count: int) -> float:
    """Linear in count between MIN_MARKER_SIZE and MAX_MARKER_SIZE; never decreasing."""
    if max_count <= 0:
        return MIN_MARKER_SIZE
    frac = min(max(count, 0), max_count) / max_count
    return MIN_MARKER_SIZE + (MAX_MARKER_SIZE - MIN_MARKER_SIZE) * frac


# ---------------------------------------------------------------------------
# Traces
# ---------------------------------------------------------------------------


def _choropleth(rows: list[StateCount], zmax: int, **kwargs) -> go.Choropleth:
    return go.Choropleth(
        locations=[r.state_code for r in rows],
        z=[r.center_count for r in rows],
        text=[r.state_name.title() for r in rows],
        locationmode="USA-states",
        zmin=0,
        zmax=zmax,
        marker_line_color=STATE_BORDER_COLOR,
        marker_line_width=0.75,
        hovertemplate="%{text}: %{z} centers<extra></extra>",
        **kwargs,
    )


def _center_traces(state_rows: list[StateCount], mode: str) -> list[go.Choropleth]:
    zmax = max((r.center_count for r in state_rows), default=0) or 1
    if mode == "continuous":
        return [_choropleth(
            state_rows, zmax,
            colorscale=CENTER_COLORSCALE,
            colorbar_title="Centers",
            name="Centers",
        )]

    # split: zero-coverage states in a flat neutral fill, no colorbar
    covered = [r for r in state_rows if r.center_count > 0]
    uncovered = [r for r in state_rows if r.center_count == 0]
    traces: list[go.Choropleth] = []
    if uncovered:
        traces.append(_choropleth(
            uncovered, zmax,
            colorscale=[[0.0, ZERO_FILL_COLOR], [1.0, ZERO_FILL_COLOR]],
            showscale=False,
            name="No centers",
        ))
    if covered:
        traces.append(_choropleth(
            covered, zmax,
            colorscale=CENTER_COLORSCALE,
            colorbar_title="Centers",
            name="Centers",
        ))
    return traces


def _collaborator_trace(points: list[CountedPoint]) -> go.Scattergeo:
    max_count = max((p.collaborator_count for p in points), default=0)
    return go.Scattergeo(
        lat=[p.latitude for p in points],
        lon=[p.longitude for p in points],
        text=[f"{p.state_name.title()}: {p.collaborator_count} collaborators" for p in points],
        mode="markers",
        marker=dict(
            size=[marker_size(p.collaborator_count, max_count) for p in points],
            color=MARKER_COLOR,
            opacity=0.7,
            line=dict(color="white", width=0.5),
        ),
        hoverinfo="text",
        name="Collaborators",
    )


def build_figure(
    state_rows: list[StateCount],
    points: list[CountedPoint],
    mode: str = DEFAULT_MODE,
) -> go.Figure:
    """Choropleth of center counts with collaborator points overlaid."""
    if mode not in MODES:
        raise ValueError(f"unknown render mode {mode!r}; expected one of {MODES}")

    fig = go.Figure()
    for trace in _center_traces(state_rows, mode):
        fig.add_trace(trace)
    fig.add_trace(_collaborator_trace(points))

    fig.update_layout(
        title_text=TITLE,
        geo=dict(scope="usa", projection_type="albers usa", showlakes=False, bgcolor="white"),
        margin=dict(l=10, r=10, t=50, b=10),
        showlegend=False,
    )
    return fig


# ---------------------------------------------------------------------------
# Writers
# ---------------------------------------------------------------------------


def render_map(
    state_rows: list[StateCount],
    points: list[CountedPoint],
    output_path: str = DEFAULT_OUTPUT_PATH,
    mode: str = DEFAULT_MODE,
) -> Path:
    """Build the figure and write it once.  Format follows the file extension.

    Static export goes through kaleido, which drives a local Chrome; run
    ``plotly_get_chrome`` once if kaleido reports that Chrome is missing.
    """
    fig = build_figure(state_rows, points, mode)
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_image(str(path), width=IMAGE_WIDTH, height=IMAGE_HEIGHT, scale=IMAGE_SCALE)
    logger.info("render: wrote %s (mode=%s, %d states, %d points)", path, mode, len(state_rows), len(points))
    return path


def write_state_table(state_rows: list[StateCount], filepath: str) -> None:
    fieldnames = ["state_name", "state_code", "fips_code", "center_count", "collaborator_count"]
    rows = []
    for r in state_rows:
        ref = states_module.get_state_by_code(r.state_code)
        rows.append({
            "state_name": r.state_name,
            "state_code": r.state_code,
            "fips_code": ref["fips_code"] if ref else "",
            "center_count": r.center_count,
            "collaborator_count": r.collaborator_count,
        })
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
    logger.info("render: wrote %s (%d rows)", filepath, len(rows))


# ---------------------------------------------------------------------------
# Standalone entry-point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import aggregate as aggregate_module
    import load as load_module

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    output_file = DEFAULT_OUTPUT_PATH
    mode = DEFAULT_MODE
    if "--output" in sys.argv:
        idx = sys.argv.index("--output")
        if idx + 1 < len(sys.argv):
            output_file = sys.argv[idx + 1]
    if "--mode" in sys.argv:
        idx = sys.argv.index("--mode")
        if idx + 1 < len(sys.argv):
            mode = sys.argv[idx + 1]

    centers, points = load_module.run_load()
    table = aggregate_module.build_state_table(centers, points)
    render_map(table, aggregate_module.attach_collaborator_counts(points), output_file, mode)
    logger.info("render: done.")
