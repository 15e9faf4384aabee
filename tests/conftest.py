"""Shared fixtures for pipeline tests."""

import sys
from pathlib import Path
from typing import Callable

import pytest

# Ensure repo root is on sys.path so imports like `import states` work
REPO_ROOT = Path(__file__).resolve().parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from load import CenterRecord, CollaboratorPoint  # noqa: E402


@pytest.fixture
def sample_centers() -> list[CenterRecord]:
    """OHSU appears twice (two networks); one center each in WA and DC."""
    return [
        CenterRecord(name="OHSU", state_code="OR", network="NCTN", source_row_index=2),
        CenterRecord(name="OHSU", state_code="OR", network="NCORP", source_row_index=3),
        CenterRecord(name="Fred Hutch", state_code="WA", network="NCTN", source_row_index=4),
        CenterRecord(name="Georgetown Lombardi", state_code="DC", network="NCTN", source_row_index=5),
    ]


@pytest.fixture
def sample_points() -> list[CollaboratorPoint]:
    """Three collaborators in OR, one in WA."""
    return [
        CollaboratorPoint(latitude=45.50, longitude=-122.68, state_code="OR", source_row_index=2),
        CollaboratorPoint(latitude=44.05, longitude=-123.09, state_code="OR", source_row_index=3),
        CollaboratorPoint(latitude=44.56, longitude=-123.26, state_code="OR", source_row_index=4),
        CollaboratorPoint(latitude=47.61, longitude=-122.33, state_code="WA", source_row_index=5),
    ]


@pytest.fixture
def write_xlsx(tmp_path: Path) -> Callable[..., str]:
    """Return a helper that writes header + rows to a one-sheet xlsx and returns its path."""
    import openpyxl

    def _write(filename: str, header: list, rows: list[list], sheet: str = "Sheet1") -> str:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = sheet
        ws.append(header)
        for row in rows:
            ws.append(row)
        path = tmp_path / filename
        wb.save(path)
        return str(path)

    return _write
