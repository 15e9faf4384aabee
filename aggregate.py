"""Step 2 – Deduplicate centers, count per state, zero-fill all 51 jurisdictions.

Standalone: python aggregate.py [--centers raw_data/centers.xlsx] [--collaborators raw_data/collaborators.xlsx]
Module:     from aggregate import build_state_table, attach_collaborator_counts
"""

from __future__ import annotations

import logging
import sys
from collections import Counter

from pydantic import BaseModel, Field

import states as states_module
from load import CenterRecord, CollaboratorPoint

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class StateCount(BaseModel):
    """One row of the aggregated table; always 51 of these."""
    state_name: str                               # lowercase full name
    state_code: str
    center_count: int = Field(ge=0)
    collaborator_count: int = Field(default=0, ge=0)


class CountedPoint(CollaboratorPoint):
    """A collaborator point carrying its state's collaborator count."""
    state_name: str
    collaborator_count: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _center_key(record: CenterRecord) -> str:
    return record.name.strip().lower()


def dedupe_centers(records: list[CenterRecord]) -> list[CenterRecord]:
    """Keep the first record per center name (case-insensitive)."""
    seen: set[str] = set()
    deduped: list[CenterRecord] = []
    for rec in records:
        key = _center_key(rec)
        if key in seen:
            logger.info("aggregate: deduped center %r (row %d, network=%s)", rec.name, rec.source_row_index, rec.network)
            continue
        seen.add(key)
        deduped.append(rec)
    return deduped


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def count_centers_by_state(records: list[CenterRecord]) -> dict[str, int]:
    """{lowercase state name: distinct-center count} for all 51 jurisdictions.

    Dedup runs before grouping so a center enrolled in several networks counts
    once.  States with no centers are present with 0.
    """
    deduped = dedupe_centers(records)
    if len(deduped) != len(records):
        logger.info("aggregate: %d distinct centers (of %d roster rows)", len(deduped), len(records))

    grouped = Counter(states_module.full_name(rec.state_code) for rec in deduped)

    # outer join against the lookup; absent states → 0
    counts = {name: grouped.get(name, 0) for name in states_module.all_full_names()}
    zero = sum(1 for n in counts.values() if n == 0)
    logger.info("aggregate: %d states with centers, %d zero-filled", len(counts) - zero, zero)
    return counts


def count_collaborators_by_state(points: list[CollaboratorPoint]) -> dict[str, int]:
    """{state abbreviation: collaborator count}.  No dedup; absent states are omitted."""
    counts: Counter[str] = Counter()
    for point in points:
        code = point.state_code.strip().upper()
        states_module.full_name(code)  # unmapped code → StateLookupError
        counts[code] += 1
    return dict(counts)


def attach_collaborator_counts(points: list[CollaboratorPoint]) -> list[CountedPoint]:
    """Attach each point's state collaborator count to the point itself."""
    counts = count_collaborators_by_state(points)
    counted: list[CountedPoint] = []
    for point in points:
        code = point.state_code.strip().upper()
        counted.append(CountedPoint(
            **point.model_dump(),
            state_name=states_module.full_name(code),
            collaborator_count=counts[code],
        ))
    return counted


def build_state_table(
    centers: list[CenterRecord],
    points: list[CollaboratorPoint] | None = None,
) -> list[StateCount]:
    """51-row table in lookup order with center and collaborator counts."""
    center_counts = count_centers_by_state(centers)
    collab_counts = count_collaborators_by_state(points or [])

    rows: list[StateCount] = []
    for ref in states_module.JURISDICTIONS:
        name = ref["name"].lower()
        rows.append(StateCount(
            state_name=name,
            state_code=ref["usps_code"],
            center_count=center_counts[name],
            collaborator_count=collab_counts.get(ref["usps_code"], 0),
        ))
    logger.info(
        "aggregate: %d rows, %d centers, %d collaborators",
        len(rows),
        sum(r.center_count for r in rows),
        sum(r.collaborator_count for r in rows),
    )
    return rows


# ---------------------------------------------------------------------------
# Standalone entry-point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import load as load_module

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    centers_file = load_module.DEFAULT_CENTERS_PATH
    collaborators_file = load_module.DEFAULT_COLLABORATORS_PATH
    if "--centers" in sys.argv:
        idx = sys.argv.index("--centers")
        if idx + 1 < len(sys.argv):
            centers_file = sys.argv[idx + 1]
    if "--collaborators" in sys.argv:
        idx = sys.argv.index("--collaborators")
        if idx + 1 < len(sys.argv):
            collaborators_file = sys.argv[idx + 1]

    centers, points = load_module.run_load(centers_file, collaborators_file)
    for row in build_state_table(centers, points):
        logger.info("%-22s %s  centers=%-3d collaborators=%d", row.state_name, row.state_code, row.center_count, row.collaborator_count)
