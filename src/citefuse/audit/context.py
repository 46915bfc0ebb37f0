"""Run context: audit log plus ``run.json`` manifest for one batch run."""

import json
import os
import sys
import traceback
from dataclasses import asdict
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from citefuse.audit.helpers import (
    generate_run_id,
    get_dependency_versions,
    get_package_version,
    get_platform_info,
    get_python_version,
)
from citefuse.audit.logger import AuditLogger
from citefuse.audit.models import (
    ArtifactInfo,
    CommandInfo,
    EnvironmentInfo,
    ErrorInfo,
    InputInfo,
    ManifestData,
    StageInfo,
)
from citefuse.utils import calculate_file_sha256, get_iso_timestamp

__all__ = ["MANIFEST_VERSION", "RunContext"]

MANIFEST_VERSION = "1.0.0"


class RunContext:
    """Lifecycle of one audited run.

    Events go to ``events.jsonl`` as they happen; the manifest is built in
    memory and written atomically to ``run.json`` by ``finish()``.

    Attributes
    ----------
    run_id : str
        Run identifier.
    output_dir : Path
        Directory holding events, manifest and artifacts.
    audit_logger : AuditLogger
        Event logger, pass it to library calls.
    manifest : ManifestData
        Manifest under construction.
    """

    def __init__(
        self,
        run_id: str,
        output_dir: Path,
        audit_logger: AuditLogger,
        manifest: ManifestData,
    ) -> None:
        self.run_id = run_id
        self.output_dir = output_dir
        self.audit_logger = audit_logger
        self.manifest = manifest
        self.start_time = datetime.now(UTC)
        self._stages: dict[str, StageInfo] = {}
        self._stage_start_times: dict[str, datetime] = {}

    @classmethod
    def start(
        cls,
        output_dir: Path,
        parameters: dict[str, Any],
        command_argv: list[str] | None = None,
    ) -> "RunContext":
        """Start a run: create the output directory, logger and manifest.

        Parameters
        ----------
        output_dir : Path
            Output directory.
        parameters : dict[str, Any]
            Configuration snapshot for the manifest.
        command_argv : list[str] | None, optional
            Command line, defaults to sys.argv.

        Returns
        -------
        RunContext
            Started run context.
        """
        run_id = generate_run_id()
        output_dir.mkdir(parents=True, exist_ok=True)

        command = CommandInfo(argv=list(command_argv or sys.argv), cwd=Path.cwd().name or None)
        manifest = ManifestData(
            manifest_version=MANIFEST_VERSION,
            run_id=run_id,
            created_at=get_iso_timestamp(),
            status="partial",
            command=command,
            environment=EnvironmentInfo(
                python_version=get_python_version(),
                platform=get_platform_info(),
                package_version=get_package_version(),
                dependencies=get_dependency_versions(["click", "jsonschema"]),
            ),
            parameters=parameters,
        )

        audit_logger = AuditLogger(run_id=run_id, log_path=output_dir / "events.jsonl")
        audit_logger.run_started(command=command.argv, parameters=parameters)

        return cls(
            run_id=run_id,
            output_dir=output_dir,
            audit_logger=audit_logger,
            manifest=manifest,
        )

    def add_input(self, path: Path, candidate_sets: int = 0) -> None:
        """Register a consumed candidate file in the manifest."""
        self.manifest.inputs.append(
            InputInfo(
                name=path.name,
                bytes=path.stat().st_size,
                sha256=calculate_file_sha256(path),
                candidate_sets=candidate_sets,
            )
        )

    def add_artifact(self, path: Path) -> None:
        """Register an output file; its path is stored relative to output_dir."""
        try:
            relative = path.relative_to(self.output_dir)
        except ValueError:
            relative = path
        self.manifest.artifacts.append(
            ArtifactInfo(
                path=relative.as_posix(),
                sha256=calculate_file_sha256(path),
                bytes=path.stat().st_size,
            )
        )

    def start_stage(self, stage_name: str, expected_citations: int | None = None) -> None:
        """Start a stage."""
        self._stage_start_times[stage_name] = datetime.now(UTC)
        stage = StageInfo(name=stage_name, started_at=get_iso_timestamp())
        self._stages[stage_name] = stage
        self.manifest.stages.append(stage)
        self.audit_logger.stage_started(stage_name, expected_citations=expected_citations)

    def finish_stage(self, stage_name: str, counters: dict[str, int] | None = None) -> None:
        """Finish a stage.

        Parameters
        ----------
        stage_name : str
            Stage identifier.
        counters : dict[str, int] | None, optional
            Final counters for the stage.

        Raises
        ------
        ValueError
            If the stage was not started.
        """
        start_time = self._stage_start_times.pop(stage_name, None)
        if start_time is None:
            raise ValueError(f"Stage not started: {stage_name}")

        duration = (datetime.now(UTC) - start_time).total_seconds()
        stage = self._stages[stage_name]
        stage.finished_at = get_iso_timestamp()
        stage.duration_seconds = duration
        if counters:
            stage.counters.update(counters)

        self.audit_logger.stage_finished(stage_name, duration_seconds=duration, counters=counters)
        self.audit_logger.set_stage(None)

    def record_error(
        self,
        exception: BaseException,
        stage: str | None = None,
        rid: str | None = None,
        include_traceback: bool = False,
    ) -> None:
        """Record an error in the event log and the manifest."""
        tb = None
        if include_traceback:
            tb = "".join(
                traceback.format_exception(type(exception), exception, exception.__traceback__)
            )

        error_info = ErrorInfo(
            timestamp=get_iso_timestamp(),
            exception_class=type(exception).__name__,
            message=str(exception),
            stage=stage,
            rid=rid,
            traceback=tb,
        )
        self.manifest.errors.append(error_info)
        self.audit_logger.error(
            exception_class=error_info.exception_class,
            message=error_info.message,
            stage=stage,
            rid=rid,
            traceback=tb,
        )

    def finish(self, status: str = "success", citations_processed: int | None = None) -> None:
        """Close the event log and write the manifest.

        The event log is closed first so that its hash covers every event.

        Parameters
        ----------
        status : str, optional
            "success", "failed" or "partial".
        citations_processed : int | None, optional
            Number of candidate sets processed.
        """
        duration = (datetime.now(UTC) - self.start_time).total_seconds()
        self.audit_logger.run_finished(
            status=status,
            duration_seconds=duration,
            citations_processed=citations_processed,
        )
        self.audit_logger.close()

        events_path = self.output_dir / "events.jsonl"
        if events_path.exists():
            self.add_artifact(events_path)

        self.manifest.status = status
        self.manifest.finished_at = get_iso_timestamp()
        self.manifest.duration_seconds = duration
        self._write_manifest(self.output_dir / "run.json")

    def _write_manifest(self, path: Path) -> None:
        """Write the manifest via temp file, fsync and rename."""
        temp_path = path.with_suffix(".tmp")
        with temp_path.open("w", encoding="utf-8") as f:
            json.dump(asdict(self.manifest), f, indent=2, ensure_ascii=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        temp_path.replace(path)

    def __enter__(self) -> "RunContext":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is not None:
            self.record_error(exc_val, include_traceback=True)
            self.finish(status="failed")
        else:
            self.finish(status="success")
