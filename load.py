"""Step 1 – Read the center roster and collaborator coordinates from xlsx.

Standalone: python load.py [--centers raw_data/centers.xlsx] [--collaborators raw_data/collaborators.xlsx]
Module:     from load import run_load
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# ---------------------------------------------------------------------------
# Configuration constants (adjust as needed)
# ---------------------------------------------------------------------------

DEFAULT_CENTERS_PATH: str = "raw_data/centers.xlsx"
DEFAULT_COLLABORATORS_PATH: str = "raw_data/collaborators.xlsx"

# header (trimmed, lowercased) → model field
CENTER_COLUMNS: dict[str, str] = {"name": "name", "state": "state_code", "network": "network"}
CENTER_REQUIRED: tuple[str, ...] = ("name", "state")

COLLABORATOR_COLUMNS: dict[str, str] = {"lat": "latitude", "long": "longitude", "state": "state_code"}
COLLABORATOR_REQUIRED: tuple[str, ...] = ("lat", "long", "state")

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class CenterRecord(BaseModel):
    """One roster row.  The same center may appear once per network it belongs to."""
    model_config = ConfigDict(strict=False, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    state_code: str = Field(min_length=2, max_length=2)
    network: str | None = None
    source_row_index: int = 0                     # 1-based row number in xlsx

    @field_validator("state_code")
    @classmethod
    def _upper_code(cls, v: str) -> str:
        return v.upper()


class CollaboratorPoint(BaseModel):
    """One grant-collaborator location."""
    model_config = ConfigDict(strict=False, str_strip_whitespace=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    state_code: str = Field(min_length=2, max_length=2)
    source_row_index: int = 0

    @field_validator("state_code")
    @classmethod
    def _upper_code(cls, v: str) -> str:
        return v.upper()


class SchemaError(ValueError):
    """Raised when an input sheet is missing one or more required columns."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)


def _read_xlsx(filepath: str, sheet: str | None = None) -> tuple[list[str], list[tuple[int, dict]]]:
    """Read one worksheet and return (header, [(sheet row number, row dict)]).

    Headers are trimmed and lowercased.  Reads the first sheet unless one is named.
    Fully blank rows are skipped.
    """
    import openpyxl

    fpath = Path(filepath)
    if not fpath.exists():
        raise FileNotFoundError(f"input not found: {fpath}")

    wb = openpyxl.load_workbook(fpath, read_only=True, data_only=True)
    try:
        ws = wb[sheet] if sheet is not None else wb.worksheets[0]
        rows_iter = ws.iter_rows(values_only=True)
        try:
            header_row = next(rows_iter)
        except StopIteration:
            raise SchemaError(f"{fpath}: sheet is empty, no header row") from None
        header = [str(cell).strip().lower() if cell is not None else "" for cell in header_row]

        records: list[tuple[int, dict]] = []
        for row_index, row in enumerate(rows_iter, start=2):  # row 1 is header → data starts at 2
            if all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in row):
                continue
            records.append((row_index, dict(zip(header, row))))
    finally:
        wb.close()

    return header, records


def _check_columns(filepath: str, header: list[str], required: tuple[str, ...]) -> None:
    missing = [col for col in required if col not in header]
    if missing:
        raise SchemaError(f"{filepath}: missing required column(s) {missing}; found {header}")


def _remap(raw: dict, columns: dict[str, str]) -> dict:
    """Rename header keys to model fields; drop columns we don't use."""
    out: dict = {}
    for col, field in columns.items():
        if col not in raw:
            continue
        val = raw[col]
        # openpyxl hands back ints/floats for numeric-looking cells
        if field in ("name", "state_code", "network") and val is not None:
            val = str(val)
        out[field] = val
    return out


def _parse_rows(filepath: str, records: list[tuple[int, dict]], columns: dict[str, str], model: type[BaseModel]) -> list:
    parsed = []
    for i, rec in records:
        try:
            parsed.append(model(**_remap(rec, columns), source_row_index=i))
        except ValidationError as e:
            logger.error("load: %s row %d failed validation: %s", filepath, i, e)
            raise
    return parsed


# ---------------------------------------------------------------------------
# Public loaders
# ---------------------------------------------------------------------------


def load_centers(filepath: str = DEFAULT_CENTERS_PATH, sheet: str | None = None) -> list[CenterRecord]:
    """Read the center roster.  Duplicate centers are kept here; dedup happens in aggregate."""
    logger.info("load: reading centers from %s", filepath)
    header, records = _read_xlsx(filepath, sheet)
    _check_columns(filepath, header, CENTER_REQUIRED)
    centers = _parse_rows(filepath, records, CENTER_COLUMNS, CenterRecord)
    logger.info("load: %d center rows read", len(centers))
    return centers


def load_collaborators(filepath: str = DEFAULT_COLLABORATORS_PATH, sheet: str | None = None) -> list[CollaboratorPoint]:
    """Read collaborator coordinates."""
    logger.info("load: reading collaborators from %s", filepath)
    header, records = _read_xlsx(filepath, sheet)
    _check_columns(filepath, header, COLLABORATOR_REQUIRED)
    points = _parse_rows(filepath, records, COLLABORATOR_COLUMNS, CollaboratorPoint)
    logger.info("load: %d collaborator points read", len(points))
    return points


def run_load(
    centers_path: str = DEFAULT_CENTERS_PATH,
    collaborators_path: str = DEFAULT_COLLABORATORS_PATH,
) -> tuple[list[CenterRecord], list[CollaboratorPoint]]:
    """Load both inputs.

    Returns:
        (centers, collaborator_points)

    Raises FileNotFoundError, SchemaError or pydantic.ValidationError; nothing is
    recovered.
    """
    return load_centers(centers_path), load_collaborators(collaborators_path)


# ---------------------------------------------------------------------------
# Standalone entry-point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    centers_file = DEFAULT_CENTERS_PATH
    collaborators_file = DEFAULT_COLLABORATORS_PATH
    if "--centers" in sys.argv:
        idx = sys.argv.index("--centers")
        if idx + 1 < len(sys.argv):
            centers_file = sys.argv[idx + 1]
    if "--collaborators" in sys.argv:
        idx = sys.argv.index("--collaborators")
        if idx + 1 < len(sys.argv):
            collaborators_file = sys.argv[idx + 1]

    centers, points = run_load(centers_file, collaborators_file)
    networks = {c.network for c in centers if c.network}
    logger.info(
        "load: %d center rows across %d networks, %d collaborator points",
        len(centers),
        len(networks),
        len(points),
    )
