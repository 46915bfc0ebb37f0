"""Append-only JSONL event logger.

Each event is one JSON object per line, flushed immediately so that the
log survives a crashed run.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from citefuse.audit.models import LogEvent
from citefuse.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with a persistent file handle.

    Attributes
    ----------
    run_id : str
        Run identifier stamped on every event.
    log_path : Path
        Path to the JSONL log file.
    current_stage : str | None
        Stage attached to events that do not name one.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Open the log file for appending.

        Parameters
        ----------
        run_id : str
            Run identifier.
        log_path : Path
            Path to JSONL log file; parent directories are created.
        """
        self.run_id = run_id
        self.log_path = log_path
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Set (or clear, with None) the current stage."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Write a structured event.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "citation_fused").
        data : dict[str, Any] | None, optional
            Event payload.
        level : str, optional
            "DEBUG", "INFO", "WARN" or "ERROR".
        stage : str | None, optional
            Stage identifier, defaults to current_stage.
        rid : str | None, optional
            Citation identifier if the event is citation-specific.
        """
        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data if data is not None else {},
            stage=stage if stage is not None else self.current_stage,
            rid=rid,
        )
        json.dump(asdict(log_event), self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log the start of a run with its command line and parameters."""
        self.event("run_started", data={"command": command, "parameters": parameters})

    def run_finished(
        self,
        status: str,
        duration_seconds: float,
        citations_processed: int | None = None,
    ) -> None:
        """Log the end of a run.

        Parameters
        ----------
        status : str
            "success", "failed" or "partial".
        duration_seconds : float
            Total run time.
        citations_processed : int | None, optional
            Number of candidate sets processed.
        """
        data: dict[str, Any] = {"status": status, "duration_seconds": duration_seconds}
        if citations_processed is not None:
            data["citations_processed"] = citations_processed
        self.event("run_finished", data=data)

    def stage_started(self, stage: str, expected_citations: int | None = None) -> None:
        """Log a stage start and make it the current stage."""
        self.set_stage(stage)
        data: dict[str, Any] = {}
        if expected_citations is not None:
            data["expected_citations"] = expected_citations
        self.event("stage_started", data=data, stage=stage)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Log a stage end with its counters."""
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters
        self.event("stage_finished", data=data, stage=stage)

    def citation_failed(self, rid: str | None, exception: Exception) -> None:
        """Log a citation whose candidates could not be fused.

        Parameters
        ----------
        rid : str | None
            Citation identifier.
        exception : Exception
            The fusion error.
        """
        self.event(
            "citation_failed",
            data={"exception_class": type(exception).__name__, "message": str(exception)},
            level="WARN",
            rid=rid,
        )

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        rid: str | None = None,
        traceback: str | None = None,
    ) -> None:
        """Log an error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        stage : str | None, optional
            Stage where the error occurred.
        rid : str | None, optional
            Citation identifier.
        traceback : str | None, optional
            Stack trace.
        """
        data: dict[str, Any] = {"exception_class": exception_class, "message": message}
        if traceback is not None:
            data["traceback"] = traceback
        self.event("error", data=data, stage=stage, level="ERROR", rid=rid)
