"""Shared export plumbing: row schema validation and file writing."""

from __future__ import annotations

import json
from abc import abstractmethod
from importlib.resources import files
from pathlib import Path
from typing import Any, Sequence

import jsonschema

from core.models import NormalizedClub
from core.pipeline import ClubExporter

CLUB_ROW_SCHEMA_FILE = files("schemas").joinpath("club_row.schema.json")
CLUB_ROW_SCHEMA: dict[str, Any] = json.loads(CLUB_ROW_SCHEMA_FILE.read_text(encoding="utf-8"))


def validated_rows(clubs: Sequence[NormalizedClub]) -> list[dict[str, str | None]]:
    """
    Flatten clubs to export rows, validating each one.

    On the first invalid row, raises ValueError and stops immediately.
    """
    rows: list[dict[str, str | None]] = []
    for index, club in enumerate(clubs):
        row = club.to_row()
        try:
            jsonschema.validate(row, CLUB_ROW_SCHEMA)
        except jsonschema.ValidationError as exc:
            raise ValueError(
                f"Export validation failed for row {index} ({row['name']}): {exc.message}"
            ) from exc
        rows.append(row)
    return rows


class FileExporter(ClubExporter):
    """Render the full artifact in memory, then write it in one go."""

    suffix: str = ""

    @abstractmethod
    def render(self, clubs: Sequence[NormalizedClub]) -> str:
        """Render all clubs as the artifact text."""

    def export(self, clubs: Sequence[NormalizedClub], output_path: str) -> int:
        """Write the rendered artifact to output_path and return the record count."""
        content = self.render(clubs)
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        return len(clubs)
