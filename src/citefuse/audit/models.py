"""Dataclasses for audit events and run manifests."""

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "ArtifactInfo",
    "CommandInfo",
    "EnvironmentInfo",
    "ErrorInfo",
    "InputInfo",
    "LogEvent",
    "ManifestData",
    "StageInfo",
]


@dataclass
class CommandInfo:
    """Command line of the run.

    Attributes
    ----------
    argv : list[str]
        Complete command-line arguments.
    cwd : str | None
        Working directory basename.
    """

    argv: list[str]
    cwd: str | None = None


@dataclass
class EnvironmentInfo:
    """Interpreter, platform and dependency versions.

    Attributes
    ----------
    python_version : str
        Python version (e.g., "3.12.3").
    platform : str
        OS and architecture.
    package_version : str
        citefuse version.
    dependencies : dict[str, str]
        Versions of key dependencies.
    """

    python_version: str
    platform: str
    package_version: str
    dependencies: dict[str, str] = field(default_factory=dict)


@dataclass
class InputInfo:
    """Candidate file consumed by the run.

    Attributes
    ----------
    name : str
        File name.
    bytes : int
        File size.
    sha256 : str
        Digest with "sha256:" prefix.
    candidate_sets : int
        Number of candidate sets read.
    """

    name: str
    bytes: int
    sha256: str
    candidate_sets: int = 0


@dataclass
class ArtifactInfo:
    """Output artifact.

    Attributes
    ----------
    path : str
        Path relative to the output directory.
    sha256 : str
        Digest with "sha256:" prefix.
    bytes : int | None
        File size.
    """

    path: str
    sha256: str
    bytes: int | None = None


@dataclass
class StageInfo:
    """Stage timing and counters."""

    name: str
    started_at: str
    counters: dict[str, int] = field(default_factory=dict)
    finished_at: str | None = None
    duration_seconds: float | None = None


@dataclass
class ErrorInfo:
    """Error captured during a run.

    Attributes
    ----------
    timestamp : str
        ISO8601 time of the error.
    exception_class : str
        Exception class name.
    message : str
        Error message.
    stage : str | None
        Stage where the error occurred.
    rid : str | None
        Citation identifier if the error is citation-specific.
    traceback : str | None
        Stack trace, if requested.
    """

    timestamp: str
    exception_class: str
    message: str
    stage: str | None = None
    rid: str | None = None
    traceback: str | None = None


@dataclass
class ManifestData:
    """Run manifest written to ``run.json``."""

    manifest_version: str
    run_id: str
    created_at: str
    status: str
    command: CommandInfo
    environment: EnvironmentInfo
    parameters: dict[str, Any]
    inputs: list[InputInfo] = field(default_factory=list)
    stages: list[StageInfo] = field(default_factory=list)
    artifacts: list[ArtifactInfo] = field(default_factory=list)
    errors: list[ErrorInfo] = field(default_factory=list)
    finished_at: str | None = None
    duration_seconds: float | None = None


@dataclass
class LogEvent:
    """One line of ``events.jsonl``.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp with microseconds (UTC).
    run_id : str
        Run identifier.
    level : str
        "DEBUG", "INFO", "WARN" or "ERROR".
    event : str
        Event type.
    data : dict[str, Any]
        Event payload.
    stage : str | None
        Current stage.
    rid : str | None
        Citation identifier if the event is citation-specific.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any]
    stage: str | None = None
    rid: str | None = None
