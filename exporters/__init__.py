"""Export module: CSV and markdown artifacts."""

from __future__ import annotations

from typing import Sequence

from core.models import NormalizedClub
from exporters.base import FileExporter, validated_rows
from exporters.csv_export import CsvExporter, clubs_to_csv, write_csv
from exporters.markdown_export import MarkdownExporter, clubs_to_markdown

EXPORT_FORMATS = ("csv", "markdown")


def build_exporter(fmt: str, title: str = "Code Clubs") -> FileExporter:
    """Return the exporter for a format name."""
    if fmt == "csv":
        return CsvExporter()
    if fmt == "markdown":
        return MarkdownExporter(title=title)
    raise ValueError(f"Unsupported export format: {fmt}")


def export_clubs(clubs: Sequence[NormalizedClub], output_path: str, fmt: str = "csv") -> int:
    """Validate and write clubs in the given format; returns the record count."""
    return build_exporter(fmt).export(clubs, output_path)


__all__ = [
    "EXPORT_FORMATS",
    "FileExporter",
    "CsvExporter",
    "MarkdownExporter",
    "build_exporter",
    "export_clubs",
    "clubs_to_csv",
    "clubs_to_markdown",
    "validated_rows",
    "write_csv",
]
