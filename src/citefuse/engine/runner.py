"""Batch runner: fuse every candidate set of a file.

Outputs under ``config.output_dir``:
    fused_citations.jsonl      one fused citation per line
    reports/fusion_summary.json
"""

import json
import time
from pathlib import Path
from typing import Any

from citefuse.audit.logger import AuditLogger
from citefuse.engine.config import BatchConfig, BatchResult, FusionSummary
from citefuse.fusion.demultiplexer import fuse_candidates, score_candidates
from citefuse.fusion.errors import EmptyResultError, InvalidInputError
from citefuse.hooks import HookRegistry
from citefuse.parse.candidates import CandidateSet, load_candidate_sets
from citefuse.utils import get_iso_timestamp

FUSED_CITATIONS_FILE = "fused_citations.jsonl"
SUMMARY_FILE = "reports/fusion_summary.json"


def _fuse_all(
    candidate_sets: list[CandidateSet],
    config: BatchConfig,
    summary: FusionSummary,
    output_path: Path,
    hooks: HookRegistry,
    logger: AuditLogger | None,
) -> None:
    """Fuse each candidate set and stream results to output_path."""
    parse_scores: list[float] = []

    with output_path.open("w", encoding="utf-8") as f:
        for candidate_set in candidate_sets:
            try:
                scored = score_candidates(candidate_set.candidates, config.fusion)
                summary.candidates_live += len(scored)
                summary.publication_types_guessed += sum(c.type_guessed for c in scored)
                citation = fuse_candidates(
                    scored,
                    config=config.fusion,
                    hooks=hooks,
                    logger=logger,
                    citation_id=candidate_set.citation_id,
                )
            except InvalidInputError as e:
                summary.citations_invalid += 1
                if logger:
                    logger.citation_failed(candidate_set.citation_id, e)
                continue
            except EmptyResultError as e:
                summary.citations_empty += 1
                if logger:
                    logger.citation_failed(candidate_set.citation_id, e)
                continue

            summary.citations_fused += 1
            parse_scores.append(citation.parse_score)

            record = {"citation_id": candidate_set.citation_id, **citation.to_dict()}
            json.dump(record, f, ensure_ascii=False, sort_keys=True)
            f.write("\n")

    if parse_scores:
        summary.mean_parse_score = round(sum(parse_scores) / len(parse_scores), 4)


def _write_summary(summary: FusionSummary, output_dir: Path) -> Path:
    summary_path = output_dir / SUMMARY_FILE
    summary_path.parent.mkdir(parents=True, exist_ok=True)
    with summary_path.open("w", encoding="utf-8") as f:
        json.dump(summary.to_dict(), f, indent=2, sort_keys=True)
    return summary_path


def run_batch(
    input_path: Path | str,
    config: BatchConfig | None = None,
    logger: AuditLogger | None = None,
    hooks: HookRegistry | None = None,
) -> BatchResult:
    """Fuse all candidate sets in a JSON or JSONL file.

    Citations whose candidates cannot be fused are counted in the summary
    and logged as ``citation_failed``; the run itself still succeeds.

    Parameters
    ----------
    input_path : Path | str
        Candidate file.
    config : BatchConfig | None, optional
        Batch configuration. If None, uses defaults.
    logger : AuditLogger | None, optional
        Audit logger. If None, no logging.
    hooks : HookRegistry | None, optional
        Hook registrations forwarded to every demultiplexer call.

    Returns
    -------
    BatchResult
        Run outcome; ``success`` is False if the input could not be read.

    Examples
    --------
        >>> from citefuse.engine import BatchConfig, run_batch
        >>> result = run_batch("candidates.jsonl", BatchConfig(output_dir=Path("out")))
        >>> result.summary.citations_fused
    """
    start_time = time.perf_counter()
    input_path = Path(input_path)
    if config is None:
        config = BatchConfig()
    if hooks is None:
        hooks = HookRegistry()

    summary = FusionSummary()
    output_files: dict[str, str] = {}

    try:
        if logger:
            logger.event("candidates_loading", data={"input": input_path.name})

        candidate_sets = load_candidate_sets(input_path)
        summary.citations_in = len(candidate_sets)

        config.output_dir.mkdir(parents=True, exist_ok=True)
        fused_path = config.output_dir / FUSED_CITATIONS_FILE
        _fuse_all(candidate_sets, config, summary, fused_path, hooks, logger)
        output_files["fused_citations"] = str(fused_path)

        summary.timestamp = get_iso_timestamp()
        if config.track_execution_time:
            summary.execution_time_seconds = time.perf_counter() - start_time
        output_files["fusion_summary"] = str(_write_summary(summary, config.output_dir))

        if logger:
            logger.event("batch_complete", data=_summary_event_data(summary))

        return BatchResult(success=True, summary=summary, output_files=output_files)

    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        if logger:
            logger.error(exception_class=type(e).__name__, message=str(e), stage="batch")
        return BatchResult(
            success=False,
            summary=summary,
            output_files=output_files,
            error_message=error_msg,
        )


def _summary_event_data(summary: FusionSummary) -> dict[str, Any]:
    return {
        "citations_in": summary.citations_in,
        "citations_fused": summary.citations_fused,
        "citations_failed": summary.citations_failed,
        "mean_parse_score": summary.mean_parse_score,
    }
