"""Tests for aggregate.py – dedup, distinct-center counts, zero-fill, collaborator counts."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from aggregate import (  # noqa: E402
    attach_collaborator_counts,
    build_state_table,
    count_centers_by_state,
    count_collaborators_by_state,
    dedupe_centers,
)
from load import CenterRecord, CollaboratorPoint  # noqa: E402
from states import StateLookupError, all_full_names  # noqa: E402


def _center(name: str, code: str, network: str | None = None) -> CenterRecord:
    return CenterRecord(name=name, state_code=code, network=network)


def _point(code: str, lat: float = 40.0, lon: float = -100.0) -> CollaboratorPoint:
    return CollaboratorPoint(latitude=lat, longitude=lon, state_code=code)


# ---------------------------------------------------------------------------
# Dedup
# ---------------------------------------------------------------------------


class TestDedupeCenters:
    def test_keeps_first_occurrence(self, sample_centers):
        deduped = dedupe_centers(sample_centers)
        assert [c.name for c in deduped] == ["OHSU", "Fred Hutch", "Georgetown Lombardi"]
        assert deduped[0].network == "NCTN"

    def test_case_insensitive(self):
        deduped = dedupe_centers([_center("OHSU", "OR"), _center("ohsu", "OR"), _center("Ohsu ", "OR")])
        assert len(deduped) == 1

    def test_idempotent(self, sample_centers):
        once = dedupe_centers(sample_centers)
        assert dedupe_centers(once) == once


# ---------------------------------------------------------------------------
# Center counts
# ---------------------------------------------------------------------------


class TestCountCentersByState:
    def test_duplicate_center_counted_once(self):
        counts = count_centers_by_state([_center("OHSU", "OR", "NCTN"), _center("OHSU", "OR", "NCORP")])
        assert counts["oregon"] == 1

    def test_all_jurisdictions_present(self, sample_centers):
        counts = count_centers_by_state(sample_centers)
        assert sorted(counts) == sorted(all_full_names())
        assert all(isinstance(n, int) and n >= 0 for n in counts.values())

    def test_zero_fill(self, sample_centers):
        counts = count_centers_by_state(sample_centers)
        assert counts["texas"] == 0
        assert counts["district of columbia"] == 1

    def test_empty_roster_all_zero(self):
        counts = count_centers_by_state([])
        assert len(counts) == 51
        assert set(counts.values()) == {0}

    def test_distinct_centers_same_state(self):
        counts = count_centers_by_state([_center("A", "CA"), _center("B", "ca"), _center("A", "CA")])
        assert counts["california"] == 2

    def test_counts_stable_on_deduped_input(self, sample_centers):
        deduped = dedupe_centers(sample_centers)
        assert count_centers_by_state(deduped) == count_centers_by_state(deduped)
        assert count_centers_by_state(deduped) == count_centers_by_state(sample_centers)

    def test_unmapped_state_aborts(self):
        with pytest.raises(StateLookupError):
            count_centers_by_state([_center("Somewhere", "XX")])


# ---------------------------------------------------------------------------
# Collaborator counts
# ---------------------------------------------------------------------------


class TestCollaboratorCounts:
    def test_simple_group_count(self, sample_points):
        assert count_collaborators_by_state(sample_points) == {"OR": 3, "WA": 1}

    def test_no_dedup_of_identical_points(self):
        assert count_collaborators_by_state([_point("TX"), _point("TX")]) == {"TX": 2}

    def test_count_attached_to_every_row(self, sample_points):
        counted = attach_collaborator_counts(sample_points)
        oregon = [p for p in counted if p.state_code == "OR"]
        assert len(oregon) == 3
        assert all(p.collaborator_count == 3 for p in oregon)
        assert all(p.state_name == "oregon" for p in oregon)

    def test_coordinates_preserved(self, sample_points):
        counted = attach_collaborator_counts(sample_points)
        assert [(p.latitude, p.longitude) for p in counted] == [
            (p.latitude, p.longitude) for p in sample_points
        ]

    def test_unmapped_state_aborts(self):
        with pytest.raises(StateLookupError):
            count_collaborators_by_state([_point("PR")])


# ---------------------------------------------------------------------------
# 51-row table
# ---------------------------------------------------------------------------


class TestBuildStateTable:
    def test_one_row_per_jurisdiction(self, sample_centers, sample_points):
        rows = build_state_table(sample_centers, sample_points)
        assert len(rows) == 51
        assert len({r.state_name for r in rows}) == 51

    def test_counts(self, sample_centers, sample_points):
        rows = {r.state_code: r for r in build_state_table(sample_centers, sample_points)}
        assert rows["OR"].center_count == 1
        assert rows["OR"].collaborator_count == 3
        assert rows["WA"].collaborator_count == 1
        assert rows["DC"].state_name == "district of columbia"
        assert rows["ME"].center_count == 0
        assert rows["ME"].collaborator_count == 0

    def test_without_points(self, sample_centers):
        rows = build_state_table(sample_centers)
        assert all(r.collaborator_count == 0 for r in rows)
