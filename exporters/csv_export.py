"""CSV export of normalized clubs."""

from __future__ import annotations

import csv
import io
from typing import Sequence, TextIO

from core.models import CSV_COLUMNS, NormalizedClub
from exporters.base import FileExporter, validated_rows


def write_csv(clubs: Sequence[NormalizedClub], handle: TextIO) -> int:
    """Write a header row plus one row per club; returns rows written."""
    writer = csv.DictWriter(handle, fieldnames=list(CSV_COLUMNS), lineterminator="\r\n")
    writer.writeheader()
    rows = validated_rows(clubs)
    writer.writerows(rows)
    return len(rows)


def clubs_to_csv(clubs: Sequence[NormalizedClub]) -> str:
    """Render clubs as CSV text. A missing website becomes an empty cell."""
    buffer = io.StringIO()
    write_csv(clubs, buffer)
    return buffer.getvalue()


class CsvExporter(FileExporter):
    """Export stage writing `clubs.csv`-style files."""

    suffix = ".csv"

    def render(self, clubs: Sequence[NormalizedClub]) -> str:
        return clubs_to_csv(clubs)
