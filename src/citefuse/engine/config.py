"""Batch configuration, summary and result dataclasses."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from citefuse.fusion.config import FusionConfig


@dataclass
class BatchConfig:
    """Configuration for fusing a file of candidate sets.

    Attributes
    ----------
    fusion : FusionConfig
        Per-citation fusion settings.
    output_dir : Path
        Directory for ``fused_citations.jsonl`` and ``reports/``.
    track_execution_time : bool
        Record wall-clock time in the fusion summary.
    """

    fusion: FusionConfig = field(default_factory=FusionConfig)
    output_dir: Path = Path("out")
    track_execution_time: bool = False

    def __post_init__(self) -> None:
        """Coerce output_dir to Path."""
        self.output_dir = Path(self.output_dir)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "fusion": self.fusion.to_dict(),
            "output_dir": str(self.output_dir),
            "track_execution_time": self.track_execution_time,
        }


@dataclass
class FusionSummary:
    """Counters for one batch run.

    Attributes
    ----------
    citations_in : int
        Candidate sets read.
    citations_fused : int
        Candidate sets fused into a citation.
    citations_invalid : int
        Candidate sets rejected with InvalidInputError.
    citations_empty : int
        Candidate sets whose candidates were all below the score threshold.
    candidates_live : int
        Non-null candidates across all sets.
    publication_types_guessed : int
        Candidates that received a guessed publication type.
    mean_parse_score : float
        Mean parse score of fused citations (0.0 if none).
    timestamp : str
        ISO-8601 time the summary was produced.
    execution_time_seconds : float
        Wall-clock time, if tracked.
    """

    citations_in: int = 0
    citations_fused: int = 0
    citations_invalid: int = 0
    citations_empty: int = 0
    candidates_live: int = 0
    publication_types_guessed: int = 0
    mean_parse_score: float = 0.0
    timestamp: str = ""
    execution_time_seconds: float = 0.0

    @property
    def citations_failed(self) -> int:
        """Candidate sets that could not be fused."""
        return self.citations_invalid + self.citations_empty

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["citations_failed"] = self.citations_failed
        return data


@dataclass
class BatchResult:
    """Outcome of ``run_batch``.

    Attributes
    ----------
    success : bool
        Whether the input could be read and processed.
    summary : FusionSummary
        Counters for the run (partial on failure).
    output_files : dict[str, str]
        Artifact name to path.
    error_message : str | None
        Error message if the run failed.
    """

    success: bool
    summary: FusionSummary
    output_files: dict[str, str]
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "summary": self.summary.to_dict(),
            "output_files": dict(self.output_files),
            "error_message": self.error_message,
        }
