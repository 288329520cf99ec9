"""Integration tests for CSV and markdown exports."""

from __future__ import annotations

import csv
import io
import math

import pytest

from core.models import CSV_COLUMNS, NormalizedClub
from exporters import CsvExporter, MarkdownExporter, build_exporter, clubs_to_csv, clubs_to_markdown, export_clubs
from quality.normalize import normalize_clubs


def _read_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text back into dict rows."""
    return list(csv.DictReader(io.StringIO(text, newline="")))


@pytest.mark.integration
def test_csv_round_trip_matches_rows(
    sample_normalized_club: NormalizedClub,
    sparse_normalized_club: NormalizedClub,
    full_club_payload: dict,
    legacy_club_payload: dict,
):
    """Parsing the CSV back yields N rows equal to to_row() (None ↔ empty cell)."""
    clubs = [sample_normalized_club, sparse_normalized_club] + normalize_clubs(
        [full_club_payload, legacy_club_payload, {}]
    )

    parsed = _read_csv(clubs_to_csv(clubs))

    assert len(parsed) == len(clubs)
    for row, club in zip(parsed, clubs):
        expected = {key: (value if value is not None else "") for key, value in club.to_row().items()}
        assert row == expected


@pytest.mark.integration
def test_csv_header_uses_fixed_column_order():
    """Header row lists the export columns even with no records."""
    text = clubs_to_csv([])

    assert text.splitlines() == [",".join(CSV_COLUMNS)]


@pytest.mark.integration
def test_csv_quotes_separators_quotes_and_newlines(sample_normalized_club: NormalizedClub):
    """Fields with commas, quotes, or newlines are quoted."""
    text = clubs_to_csv([sample_normalized_club])

    assert '"Halifax Makers, ""Tech"" Club"' in text
    assert '"Bring a laptop\nif you have one"' in text
    assert '"44.642000, -63.575200"' in text


@pytest.mark.integration
def test_markdown_table_layout(full_club_payload: dict, legacy_club_payload: dict):
    """Heading with count, header row, and one row per club."""
    clubs = normalize_clubs([full_club_payload, legacy_club_payload])

    text = clubs_to_markdown(clubs, title="Canadian Code Clubs")
    lines = text.splitlines()

    assert lines[0] == "# Canadian Code Clubs (2 clubs)"
    assert lines[2] == "| Name | Location | Postal Code | Website | Coordinates |"
    assert lines[4] == (
        "| Ottawa Code Club | Ottawa, ON | K1A 0B1 | "
        "[example.org](https://example.org/ottawa) | 45.123457, -75.987654 |"
    )
    assert lines[5] == (
        "| Whitehorse ｜ Coders | Whitehorse, YT | N/A | "
        "[whitehorsecoders.ca](https://whitehorsecoders.ca/) | 60.721200, -135.056800 |"
    )


@pytest.mark.integration
def test_markdown_uses_sentinels_for_missing_values(sparse_normalized_club: NormalizedClub):
    """Missing city, province, website, and coordinates render as placeholders."""
    row = clubs_to_markdown([sparse_normalized_club]).splitlines()[-1]

    assert row == "| Sparse Club | Unknown, Unknown | N/A | N/A | N/A |"


@pytest.mark.integration
def test_markdown_name_pipes_are_replaced():
    """Literal pipes cannot break the table."""
    text = clubs_to_markdown([NormalizedClub(name="A|B|C")])

    assert "| A｜B｜C |" in text
    assert "A|B" not in text


@pytest.mark.integration
@pytest.mark.parametrize(("fmt", "exporter_type"), [("csv", CsvExporter), ("markdown", MarkdownExporter)])
def test_build_exporter(fmt: str, exporter_type: type):
    """Format names map to exporter classes."""
    assert isinstance(build_exporter(fmt), exporter_type)


@pytest.mark.integration
def test_build_exporter_rejects_unknown_format():
    """Unknown formats are a ValueError."""
    with pytest.raises(ValueError):
        build_exporter("xlsx")


@pytest.mark.integration
def test_export_clubs_writes_utf8_file(tmp_path, sample_normalized_club: NormalizedClub):
    """export_clubs writes the artifact and returns the record count."""
    club = sample_normalized_club.model_copy(update={"name": "Club Étoile"})
    output = tmp_path / "nested" / "clubs.csv"

    count = export_clubs([club], str(output), fmt="csv")

    assert count == 1
    rows = _read_csv(output.read_text(encoding="utf-8"))
    assert rows[0]["name"] == "Club Étoile"


@pytest.mark.integration
def test_invalid_row_fails_before_anything_is_written(tmp_path):
    """Schema validation runs on every row before the file is created."""
    bad = NormalizedClub(name="Broken", latitude=math.nan, longitude=1.0)
    output = tmp_path / "clubs.csv"

    with pytest.raises(ValueError, match="Export validation failed for row 1"):
        export_clubs([NormalizedClub(name="Fine"), bad], str(output), fmt="csv")

    assert not output.exists()
