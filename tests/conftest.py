"""
Shared pytest fixtures and configuration for club-collector tests.
"""

import pytest
from pathlib import Path

from core.models import NormalizedClub, RawClub, ValidatedUrl


# ============================================================================
# Fixtures: Raw club payloads
# ============================================================================

@pytest.fixture
def full_club_payload() -> dict:
    """Club node in the split-address layout with every field populated."""
    return {
        "name": "Ottawa Code Club",
        "postalCode": "k1a 0b1",
        "address1": "120 Metcalfe St",
        "address2": "Floor 2",
        "email": "club@example.org",
        "startTime": "16:00",
        "endTime": "17:30",
        "day": "Tuesday",
        "frequency": "Weekly",
        "frequencyNote": "Term time only",
        "attendanceType": "In person",
        "brand": "Code Club",
        "stage": "Running",
        "latitude": 45.1234567,
        "longitude": -75.9876543,
        "website": "https://example.org/ottawa",
        "municipality": "Ottawa",
        "administrativeArea": None,
        "venueName": "Main Library",
        "venueType": "library",
        "openToPublic": True,
        "lookingForVolunteers": False,
    }


@pytest.fixture
def legacy_club_payload() -> dict:
    """Club node in the single free-text address layout."""
    return {
        "name": "Whitehorse | Coders",
        "postalCode": None,
        "address": "Whitehorse, YT",
        "latitude": 60.7212,
        "longitude": -135.0568,
        "website": "whitehorsecoders.ca",
    }


@pytest.fixture
def empty_club_payload() -> dict:
    """Club node with no usable fields."""
    return {}


@pytest.fixture
def full_raw_club(full_club_payload: dict) -> RawClub:
    """Parsed RawClub for the full payload."""
    return RawClub.model_validate(full_club_payload)


# ============================================================================
# Fixtures: Normalized clubs
# ============================================================================

@pytest.fixture
def sample_normalized_club() -> NormalizedClub:
    """Normalized club with every field populated."""
    return NormalizedClub(
        name="Halifax Makers, \"Tech\" Club",
        postal_code="B3H 1A1",
        address="1 Spring Garden Rd, Suite 4",
        city="Halifax",
        municipality="Halifax",
        province="NS",
        venue="Central Library (library)",
        latitude=44.642,
        longitude=-63.5752,
        website=ValidatedUrl(href="https://halifaxmakers.ca/", hostname="halifaxmakers.ca"),
        public_access=True,
        volunteers_needed=True,
        meeting_frequency="Weekly",
        email="hello@halifaxmakers.ca",
        start_time="18:00",
        end_time="19:00",
        day="Thursday",
        frequency_note="Bring a laptop\nif you have one",
        attendance_type="In person",
        brand="Code Club",
        stage="Running",
    )


@pytest.fixture
def sparse_normalized_club() -> NormalizedClub:
    """Normalized club with nothing but a name."""
    return NormalizedClub(name="Sparse Club")


# ============================================================================
# Fixtures: File Paths
# ============================================================================

@pytest.fixture
def schemas_dir() -> Path:
    """Path to schemas directory."""
    return Path(__file__).parent.parent / "schemas"


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "contract: contract schema compliance tests")
    config.addinivalue_line("markers", "integration: end-to-end integration tests")
    config.addinivalue_line("markers", "unit: unit tests")
