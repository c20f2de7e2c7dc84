from __future__ import annotations

import re
from typing import Any, Dict

from .models import ParsedAddress

STATE_ABBR: Dict[str, str] = {
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
    "district of columbia": "DC",
}

PROVINCE_ABBR: Dict[str, str] = {
    "alberta": "AB",
    "british columbia": "BC",
    "manitoba": "MB",
    "new brunswick": "NB",
    "newfoundland and labrador": "NL",
    "nova scotia": "NS",
    "northwest territories": "NT",
    "nunavut": "NU",
    "ontario": "ON",
    "prince edward island": "PE",
    "quebec": "QC",
    "saskatchewan": "SK",
    "yukon": "YT",
}

REGION_ABBR: Dict[str, str] = {**STATE_ABBR, **PROVINCE_ABBR}
REGION_CODES = frozenset(REGION_ABBR.values())

US_ZIP_RE = re.compile(r"\b(\d{5}(?:-\d{4})?)\b")
CA_POSTAL_RE = re.compile(r"\b([A-Z]\d[A-Z] ?\d[A-Z]\d)\b", re.IGNORECASE)
# bare "CA" is a state code, never stripped as a country
COUNTRY_TOKEN_RE = re.compile(
    r"(?<![\w.])(?:U\.S\.A\.?|USA|United States(?: of America)?|US|Canada)(?![\w])",
    re.IGNORECASE,
)
_UNIT_KEYWORDS = r"(?:(?:apartment|apt|unit|suite|ste)\b\.?|#)"
UNIT_RE = re.compile(rf"(?:(?<!\w)){_UNIT_KEYWORDS}\s*([a-z0-9-]+)", re.IGNORECASE)
STREET_RE = re.compile(
    rf"^(\d+(?:-\d+)?[a-z]?)\s+(.+?)(?:\s+{_UNIT_KEYWORDS}.*)?$",
    re.IGNORECASE,
)


def normalize_state(value: str) -> str:
    v = (value or "").strip()
    if not v:
        return ""
    if v.upper() in REGION_CODES:
        return v.upper()
    return REGION_ABBR.get(v.lower(), v)


def _parse_street(result: ParsedAddress, street_part: str) -> None:
    unit_match = UNIT_RE.search(street_part)
    if unit_match:
        result.unit = unit_match.group(1)

    street_match = STREET_RE.match(street_part)
    if street_match:
        result.street_number = street_match.group(1)
        result.street_name = street_match.group(2).strip()
    elif unit_match:
        result.street_name = street_part[: unit_match.start()].strip()
    else:
        result.street_name = street_part.strip()

    street = (
        f"{result.street_number} {result.street_name}"
        if result.street_number
        else result.street_name
    )
    if result.unit:
        street = f"{street} #{result.unit}"
    result.street_address = street.strip()


def parse_address(address: Any) -> ParsedAddress:
    """
    Split a single-line US or Canadian address into its components.

    Commas separate street, city and state; a ZIP or postal code and a
    trailing country name may appear anywhere. Missing parts stay empty.
    """
    if not isinstance(address, str) or not address:
        return ParsedAddress()

    result = ParsedAddress(original=address)
    working = re.sub(r"\s+", " ", address.strip())

    zip_match = US_ZIP_RE.search(working)
    postal_match = None if zip_match else CA_POSTAL_RE.search(working)
    if zip_match:
        result.postal_code = zip_match.group(1)
        result.country = "USA"
        working = (working[: zip_match.start()] + working[zip_match.end() :]).strip()
    elif postal_match:
        result.postal_code = postal_match.group(1).upper()
        result.country = "Canada"
        working = (working[: postal_match.start()] + working[postal_match.end() :]).strip()

    working = COUNTRY_TOKEN_RE.sub("", working).strip()
    parts = [part.strip() for part in working.split(",") if part.strip()]

    if parts:
        _parse_street(result, parts[0])
    if len(parts) >= 2:
        result.city = parts[1]
    if len(parts) >= 3:
        result.state = normalize_state(parts[2])

    if not result.state and result.city:
        city_tokens = result.city.split()
        if len(city_tokens) >= 2 and city_tokens[-1].upper() in REGION_CODES:
            result.state = city_tokens[-1].upper()
            result.city = " ".join(city_tokens[:-1])

    return result


__all__ = [
    "PROVINCE_ABBR",
    "REGION_ABBR",
    "REGION_CODES",
    "STATE_ABBR",
    "normalize_state",
    "parse_address",
]
