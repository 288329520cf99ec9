"""Unit tests for club field normalization."""

from __future__ import annotations

import pytest

from core.models import CSV_COLUMNS, RawClub
from quality.normalize import normalize_club, normalize_clubs


@pytest.mark.unit
def test_full_record_normalizes_every_field(full_club_payload: dict):
    """Populated fields flow through with derived values filled in."""
    club = normalize_club(full_club_payload)
    row = club.to_row()

    assert row["name"] == "Ottawa Code Club"
    assert row["postalCode"] == "K1A 0B1"
    assert row["address"] == "120 Metcalfe St, Floor 2"
    assert row["municipality"] == "Ottawa"
    assert row["province"] == "ON"
    assert row["venue"] == "Main Library (library)"
    assert row["coordinates"] == "45.123457, -75.987654"
    assert row["website"] == "https://example.org/ottawa"
    assert row["websiteHost"] == "example.org"
    assert row["publicAccess"] == "Yes"
    assert row["volunteersNeeded"] == "No"
    assert row["meetingFrequency"] == "Weekly"
    assert row["email"] == "club@example.org"
    assert row["startTime"] == "16:00"
    assert row["endTime"] == "17:30"
    assert row["day"] == "Tuesday"
    assert row["frequencyNote"] == "Term time only"
    assert row["attendanceType"] == "In person"
    assert row["brand"] == "Code Club"
    assert row["stage"] == "Running"
    assert club.city == "Ottawa"


@pytest.mark.unit
def test_empty_record_yields_sentinels_for_every_column(empty_club_payload: dict):
    """No column is ever missing; absent data becomes its sentinel."""
    row = normalize_club(empty_club_payload).to_row()

    assert tuple(row) == CSV_COLUMNS
    assert row == {
        "name": "Unnamed Club",
        "postalCode": "N/A",
        "address": "Not specified",
        "municipality": "N/A",
        "province": "Unknown",
        "venue": "Not specified",
        "coordinates": "N/A",
        "website": None,
        "websiteHost": "N/A",
        "publicAccess": "No",
        "volunteersNeeded": "No",
        "meetingFrequency": "Not specified",
        "email": "N/A",
        "startTime": "N/A",
        "endTime": "N/A",
        "day": "N/A",
        "frequencyNote": "N/A",
        "attendanceType": "N/A",
        "brand": "N/A",
        "stage": "N/A",
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    "field",
    ["name", "postalCode", "address1", "municipality", "venueName", "website", "email", "frequency"],
)
def test_each_missing_field_still_produces_a_value(full_club_payload: dict, field: str):
    """Dropping any single source field never leaves a hole in the row."""
    payload = dict(full_club_payload)
    payload.pop(field)
    row = normalize_club(payload).to_row()

    assert set(row) == set(CSV_COLUMNS)
    assert all(value for key, value in row.items() if key != "website")


@pytest.mark.unit
def test_internal_fields_keep_none_for_missing_data(empty_club_payload: dict):
    """Sentinels only appear in to_row(); the model itself keeps None."""
    club = normalize_club(empty_club_payload)

    assert club.name is None
    assert club.postal_code is None
    assert club.coordinates is None
    assert club.website is None


@pytest.mark.unit
def test_blank_strings_count_as_absent():
    """Whitespace-only values are treated like missing ones."""
    row = normalize_club({"name": "  ", "municipality": "", "email": "\t"}).to_row()

    assert row["name"] == "Unnamed Club"
    assert row["municipality"] == "N/A"
    assert row["email"] == "N/A"


@pytest.mark.unit
def test_address_joins_only_non_empty_parts():
    """address2 alone is used without a dangling separator."""
    club = normalize_club({"address1": "", "address2": "Unit 5"})

    assert club.address == "Unit 5"


@pytest.mark.unit
def test_single_address_form_passes_through_with_city(legacy_club_payload: dict):
    """Free-text address is kept and the city is the part before the first comma."""
    club = normalize_club(legacy_club_payload)

    assert club.address == "Whitehorse, YT"
    assert club.city == "Whitehorse"
    assert club.province == "YT"


@pytest.mark.unit
def test_administrative_area_wins_over_postal_code(full_club_payload: dict):
    """An explicit administrativeArea is used verbatim."""
    payload = dict(full_club_payload, administrativeArea="Ontario")

    assert normalize_club(payload).province == "Ontario"


@pytest.mark.unit
def test_province_from_postal_code_then_address():
    """Postal prefix first; address tokens when there is no postal code."""
    assert normalize_club({"postalCode": "v6b 4y8"}).province == "BC"
    assert normalize_club({"address1": "10 Main St", "address2": "Regina SK"}).province == "SK"
    assert normalize_club({"postalCode": "X0E"}).province == "NT"


@pytest.mark.unit
def test_venue_type_defaults_to_unknown():
    """A venue name without a type gets "(Unknown)"."""
    assert normalize_club({"venueName": "Community Hall"}).venue == "Community Hall (Unknown)"
    assert normalize_club({"venueType": "school"}).venue is None


@pytest.mark.unit
def test_coordinates_rounded_to_six_places():
    """Standard rounding to 6 decimals."""
    club = normalize_club({"latitude": 45.1234567, "longitude": -75.9876543})

    assert club.coordinates == "45.123457, -75.987654"


@pytest.mark.unit
def test_coordinate_ties_round_away_from_zero():
    """Exact halfway values round up in magnitude, not to even."""
    club = normalize_club({"latitude": 45.5078125, "longitude": -75.0078125})

    assert club.coordinates == "45.507813, -75.007813"


@pytest.mark.unit
def test_zero_coordinates_are_kept():
    """Latitude 0 is a real value, not a missing one."""
    club = normalize_club({"latitude": 0, "longitude": -75.5})

    assert club.coordinates == "0.000000, -75.500000"


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload",
    [
        {"latitude": 45.0},
        {"longitude": -75.0},
        {"latitude": "not-a-number", "longitude": -75.0},
        {"latitude": "nan", "longitude": -75.0},
    ],
)
def test_coordinates_need_both_values(payload: dict):
    """One missing or unusable coordinate gives N/A."""
    assert normalize_club(payload).to_row()["coordinates"] == "N/A"


@pytest.mark.unit
def test_numeric_string_coordinates_are_coerced():
    """Coordinates sent as strings are parsed."""
    club = normalize_club({"latitude": "49.2827", "longitude": "-123.1207"})

    assert club.coordinates == "49.282700, -123.120700"


@pytest.mark.unit
def test_bare_website_is_prefixed_with_https():
    """Websites without a scheme are accepted in lenient mode."""
    club = normalize_club({"website": "www.example.ca"})

    assert club.website_href == "https://www.example.ca/"
    assert club.website_host == "www.example.ca"


@pytest.mark.unit
def test_accented_bare_website_is_kept():
    """French hostnames without a scheme survive as punycode."""
    club = normalize_club({"website": "montréal-codeclub.ca"})

    assert club.website is not None
    assert club.website_host.startswith("xn--")
    assert club.to_row()["websiteHost"] == club.website_host


@pytest.mark.unit
def test_strict_website_mode_rejects_bare_host():
    """With lenient_urls off, bare hosts are dropped."""
    club = normalize_club({"website": "www.example.ca"}, lenient_urls=False)

    assert club.website is None
    assert club.to_row()["websiteHost"] == "N/A"


@pytest.mark.unit
def test_invalid_website_is_dropped():
    """An unparseable website leaves href None and host N/A."""
    row = normalize_club({"website": "call us!"}).to_row()

    assert row["website"] is None
    assert row["websiteHost"] == "N/A"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, "Yes"), (False, "No"), (None, "No"), ("true", "Yes"), ("no", "No")],
)
def test_boolean_flags_render_yes_no(value, expected):
    """Booleans and their common spellings render as Yes/No."""
    row = normalize_club({"openToPublic": value, "lookingForVolunteers": value}).to_row()

    assert row["publicAccess"] == expected
    assert row["volunteersNeeded"] == expected


@pytest.mark.unit
def test_accepts_parsed_raw_club(full_raw_club: RawClub):
    """RawClub instances are normalized without re-validation."""
    assert normalize_club(full_raw_club).name == "Ottawa Code Club"


@pytest.mark.unit
def test_normalize_clubs_preserves_order(full_club_payload: dict, legacy_club_payload: dict):
    """Batch normalization keeps input order."""
    names = [club.name for club in normalize_clubs([full_club_payload, legacy_club_payload, {}])]

    assert names == ["Ottawa Code Club", "Whitehorse | Coders", None]


@pytest.mark.unit
def test_unknown_keys_are_ignored():
    """Extra keys in the payload do not fail validation."""
    club = normalize_club({"name": "Club", "unexpectedField": {"nested": 1}})

    assert club.name == "Club"
