"""
Pipeline interface for club-collector.

Defines the contract for one run:
fetch (all pages) → normalize → export → hand results to the presenter

This is intentionally minimal and prescriptive:
- Pages are fetched strictly in order, one request at a time
- Any failure aborts the run; nothing is exported from partial state
- No retries at any layer
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Callable, Optional, Sequence

from core.errors import FetchCancelled
from core.models import FetchRun, NormalizedClub, RunStatus
from core.structured_logging import emit_error_event, emit_json_event


CancelCheck = Callable[[], bool]
ResultsCallback = Callable[[Sequence[NormalizedClub]], None]


# ============================================================================
# Stage Interfaces
# ============================================================================

class ClubSource(ABC):
    """
    Source stage: produce the complete, ordered list of normalized clubs.

    Responsibilities:
    - Cursor pagination until the API reports no further pages
    - Per-request timeout, page ceiling, pause between pages
    - Normalization of every node
    """

    country_code: str

    @abstractmethod
    def fetch_all(
        self,
        run_id: str,
        should_cancel: Optional[CancelCheck] = None,
    ) -> list[NormalizedClub]:
        """
        Fetch every page.

        Args:
            run_id: Run ID for tracking
            should_cancel: Checked between pages; True stops the run

        Returns:
            All normalized clubs, page order then in-page order

        Raises:
            ClubFetchError: Any transport, query, or shape failure
        """
        pass


class ClubExporter(ABC):
    """
    Export stage: serialize normalized clubs to one file.

    Responsibilities:
    - Validate each row before writing it
    - Write the whole artifact (CSV or markdown)
    """

    @abstractmethod
    def export(self, clubs: Sequence[NormalizedClub], output_path: str) -> int:
        """
        Write clubs to output_path.

        Returns:
            Number of records exported

        Raises:
            ValueError: If any row fails validation
            OSError: If the write fails
        """
        pass


# ============================================================================
# Pipeline Orchestrator
# ============================================================================

class ClubSyncPipeline:
    """
    Main orchestrator: fetch every page, export, then present.

    Usage:
        pipeline = ClubSyncPipeline(source, exporter, on_results=render)
        run = pipeline.run(run_id="...", output_path="clubs.csv")
    """

    def __init__(
        self,
        source: ClubSource,
        exporter: ClubExporter,
        on_results: Optional[ResultsCallback] = None,
    ):
        """Initialize stage instances and the optional presentation callback."""
        self.source = source
        self.exporter = exporter
        self.on_results = on_results

    @staticmethod
    def _finish(run: FetchRun, status: RunStatus, error_message: Optional[str] = None) -> FetchRun:
        run.status = status
        run.error_message = error_message
        run.ended_at = datetime.now(UTC)
        return run

    def run(
        self,
        run_id: str,
        output_path: str,
        should_cancel: Optional[CancelCheck] = None,
    ) -> FetchRun:
        """
        Execute one fetch-and-export run.

        Returns:
            FetchRun with final status. On failure `clubs` is empty, nothing
            is written, and `error_message` holds "Error: <reason>".
        """
        run = FetchRun(id=run_id, country_code=self.source.country_code)

        try:
            clubs = self.source.fetch_all(run_id, should_cancel=should_cancel)
            exported = self.exporter.export(clubs, output_path)
        except FetchCancelled as exc:
            emit_json_event(
                "pipeline_run_cancelled",
                run_id=run_id,
                level="warning",
                component="pipeline",
                pages_fetched=exc.pages_fetched,
            )
            run.pages_fetched = exc.pages_fetched
            return self._finish(run, RunStatus.CANCELLED, f"Error: {exc}")
        except Exception as exc:
            run.pages_fetched = getattr(self.source, "pages_fetched", 0)
            emit_error_event(
                "pipeline_run_error",
                exc,
                run_id=run_id,
                component="pipeline",
                pages_fetched=run.pages_fetched,
            )
            return self._finish(run, RunStatus.FAILED, f"Error: {exc}")

        run.clubs = list(clubs)
        run.records_count = exported
        run.pages_fetched = getattr(self.source, "pages_fetched", 0)
        run.output_path = output_path
        self._finish(run, RunStatus.COMPLETED)

        if self.on_results:
            self.on_results(run.clubs)
        return run
