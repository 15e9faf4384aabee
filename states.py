"""Static reference data for the 50 U.S. states plus the District of Columbia.

The generic state table covers the 50 states only. DC is added as a single
manual row so roster entries for Washington, D.C. centers still resolve.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# State reference data
# ---------------------------------------------------------------------------
# Fields:
#   name       – canonical full name (title case)
#   usps_code  – 2-letter USPS postal code
#   fips_code  – 2-digit zero-padded FIPS state code
# ---------------------------------------------------------------------------

STATES: tuple[dict, ...] = (
    {"name": "Alabama",        "usps_code": "AL", "fips_code": "01"},
    {"name": "Alaska",         "usps_code": "AK", "fips_code": "02"},
    {"name": "Arizona",        "usps_code": "AZ", "fips_code": "04"},
    {"name": "Arkansas",       "usps_code": "AR", "fips_code": "05"},
    {"name": "California",     "usps_code": "CA", "fips_code": "06"},
    {"name": "Colorado",       "usps_code": "CO", "fips_code": "08"},
    {"name": "Connecticut",    "usps_code": "CT", "fips_code": "09"},
    {"name": "Delaware",       "usps_code": "DE", "fips_code": "10"},
    {"name": "Florida",        "usps_code": "FL", "fips_code": "12"},
    {"name": "Georgia",        "usps_code": "GA", "fips_code": "13"},
    {"name": "Hawaii",         "usps_code": "HI", "fips_code": "15"},
    {"name": "Idaho",          "usps_code": "ID", "fips_code": "16"},
    {"name": "Illinois",       "usps_code": "IL", "fips_code": "17"},
    {"name": "Indiana",        "usps_code": "IN", "fips_code": "18"},
    {"name": "Iowa",           "usps_code": "IA", "fips_code": "19"},
    {"name": "Kansas",         "usps_code": "KS", "fips_code": "20"},
    {"name": "Kentucky",       "usps_code": "KY", "fips_code": "21"},
    {"name": "Louisiana",      "usps_code": "LA", "fips_code": "22"},
    {"name": "Maine",          "usps_code": "ME", "fips_code": "23"},
    {"name": "Maryland",       "usps_code": "MD", "fips_code": "24"},
    {"name": "Massachusetts",  "usps_code": "MA", "fips_code": "25"},
    {"name": "Michigan",       "usps_code": "MI", "fips_code": "26"},
    {"name": "Minnesota",      "usps_code": "MN", "fips_code": "27"},
    {"name": "Mississippi",    "usps_code": "MS", "fips_code": "28"},
    {"name": "Missouri",       "usps_code": "MO", "fips_code": "29"},
    {"name": "Montana",        "usps_code": "MT", "fips_code": "30"},
    {"name": "Nebraska",       "usps_code": "NE", "fips_code": "31"},
    {"name": "Nevada",         "usps_code": "NV", "fips_code": "32"},
    {"name": "New Hampshire",  "usps_code": "NH", "fips_code": "33"},
    {"name": "New Jersey",     "usps_code": "NJ", "fips_code": "34"},
    {"name": "New Mexico",     "usps_code": "NM", "fips_code": "35"},
    {"name": "New York",       "usps_code": "NY", "fips_code": "36"},
    {"name": "North Carolina", "usps_code": "NC", "fips_code": "37"},
    {"name": "North Dakota",   "usps_code": "ND", "fips_code": "38"},
    {"name": "Ohio",           "usps_code": "OH", "fips_code": "39"},
    {"name": "Oklahoma",       "usps_code": "OK", "fips_code": "40"},
    {"name": "Oregon",         "usps_code": "OR", "fips_code": "41"},
    {"name": "Pennsylvania",   "usps_code": "PA", "fips_code": "42"},
    {"name": "Rhode Island",   "usps_code": "RI", "fips_code": "44"},
    {"name": "South Carolina", "usps_code": "SC", "fips_code": "45"},
    {"name": "South Dakota",   "usps_code": "SD", "fips_code": "46"},
    {"name": "Tennessee",      "usps_code": "TN", "fips_code": "47"},
    {"name": "Texas",          "usps_code": "TX", "fips_code": "48"},
    {"name": "Utah",           "usps_code": "UT", "fips_code": "49"},
    {"name": "Vermont",        "usps_code": "VT", "fips_code": "50"},
    {"name": "Virginia",       "usps_code": "VA", "fips_code": "51"},
    {"name": "Washington",     "usps_code": "WA", "fips_code": "53"},
    {"name": "West Virginia",  "usps_code": "WV", "fips_code": "54"},
    {"name": "Wisconsin",      "usps_code": "WI", "fips_code": "55"},
    {"name": "Wyoming",        "usps_code": "WY", "fips_code": "56"},
)

# Not in the generic 50-state table; added by hand.
DISTRICT_OF_COLUMBIA: dict = {"name": "District of Columbia", "usps_code": "DC", "fips_code": "11"}

JURISDICTIONS: tuple[dict, ...] = STATES + (DISTRICT_OF_COLUMBIA,)


class StateLookupError(KeyError):
    """Raised when a state abbreviation is not one of the 51 recognized codes."""

    def __init__(self, code: str) -> None:
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"no match for state abbreviation {self.code!r}"


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------

_BY_CODE: dict[str, dict] = {s["usps_code"].upper(): s for s in JURISDICTIONS}
_BY_NAME: dict[str, dict] = {s["name"].lower(): s for s in JURISDICTIONS}


def get_state_by_code(code: str) -> dict | None:
    """Look up a jurisdiction by 2-letter USPS code (case-insensitive)."""
    return _BY_CODE.get(code.strip().upper())


def get_state_by_name(name: str) -> dict | None:
    """Look up a jurisdiction by full name (case-insensitive, exact match)."""
    return _BY_NAME.get(name.strip().lower())


def full_name(code: str) -> str:
    """'OR' → 'oregon', 'DC' → 'district of columbia'.

    Raises StateLookupError for anything outside the 51 recognized codes.
    """
    ref = get_state_by_code(code)
    if ref is None:
        raise StateLookupError(code)
    return ref["name"].lower()


def all_full_names() -> list[str]:
    """Lowercase names of all 51 jurisdictions, in table order."""
    return [s["name"].lower() for s in JURISDICTIONS]
