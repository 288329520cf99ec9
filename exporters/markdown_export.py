"""Markdown table export of normalized clubs."""

from __future__ import annotations

from typing import Sequence

from core.models import NOT_AVAILABLE, UNKNOWN, NormalizedClub
from exporters.base import FileExporter, validated_rows

FULLWIDTH_PIPE = "｜"

MARKDOWN_HEADER = (
    "| Name | Location | Postal Code | Website | Coordinates |\n"
    "|------|----------|-------------|---------|-------------|\n"
)


def sanitize_cell(value: str) -> str:
    """Keep a value from breaking table syntax."""
    return " ".join(value.replace("|", FULLWIDTH_PIPE).split())


def markdown_row(club: NormalizedClub) -> str:
    """One table row: name, city + province, postal code, website link, coordinates."""
    row = club.to_row()
    location = f"{club.city or UNKNOWN}, {row['province']}"
    if club.website is not None:
        href = club.website.href.replace("|", "%7C").replace(")", "%29")
        website = f"[{club.website.hostname}]({href})"
    else:
        website = NOT_AVAILABLE
    cells = [
        sanitize_cell(row["name"] or ""),
        sanitize_cell(location),
        sanitize_cell(row["postalCode"] or ""),
        website,
        row["coordinates"] or NOT_AVAILABLE,
    ]
    return "| " + " | ".join(cells) + " |"


def clubs_to_markdown(clubs: Sequence[NormalizedClub], title: str = "Code Clubs") -> str:
    """Render a heading with the club count followed by the table."""
    validated_rows(clubs)
    heading = f"# {title} ({len(clubs)} clubs)\n\n"
    return heading + MARKDOWN_HEADER + "\n".join(markdown_row(club) for club in clubs) + "\n"


class MarkdownExporter(FileExporter):
    """Export stage writing a markdown listing."""

    suffix = ".md"

    def __init__(self, title: str = "Code Clubs") -> None:
        self.title = title

    def render(self, clubs: Sequence[NormalizedClub]) -> str:
        return clubs_to_markdown(clubs, title=self.title)
