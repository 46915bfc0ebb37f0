"""Public API for citation fusion.

This module provides the main public API for citefuse, enabling:
- Fusing candidate descriptions of one citation
- Scoring a single candidate and guessing its publication type
- Loading candidate sets and exporting fused citations to JSONL
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from citefuse.fusion import (
    FusionConfig,
    demultiplex,
    guess_publication_type,
    score_description,
)
from citefuse.hooks import HookRegistry
from citefuse.models import Citation, MetadataDescription
from citefuse.parse import load_candidate_sets

__all__ = [
    "fuse",
    "guess_publication_type",
    "load_candidate_sets",
    "score_candidate",
    "write_jsonl",
]


def _as_description(candidate: Any) -> Any:
    """Wrap plain statement mappings; anything else is passed through."""
    if isinstance(candidate, Mapping) and not isinstance(candidate, MetadataDescription):
        return MetadataDescription(candidate)
    return candidate


def fuse(
    candidates: Sequence[MetadataDescription | Mapping[str, Any] | None],
    *,
    score_threshold: int | None = None,
    config: FusionConfig | None = None,
    hooks: HookRegistry | None = None,
) -> Citation:
    """Fuse candidate descriptions of one citation.

    Parameters
    ----------
    candidates : Sequence[MetadataDescription | Mapping[str, Any] | None]
        One entry per parser/lookup service. Plain mappings are treated as
        statements; None marks a service without output.
    score_threshold : int | None, optional
        Ignore candidates scoring below this. Overrides the threshold of
        ``config`` when both are given; defaults to 0 without a config.
    config : FusionConfig | None, optional
        Full fusion configuration.
    hooks : HookRegistry | None, optional
        Hook registrations for this call.

    Returns
    -------
    Citation
        Parsed citation with its parse score.

    Raises
    ------
    InvalidInputError
        If no candidate is usable.
    EmptyResultError
        If the threshold excludes every candidate.

    Examples
    --------
        >>> from citefuse import fuse
        >>> citation = fuse([
        ...     {"article-title": "Deep learning", "date": "2015"},
        ...     {"article-title": "Deep learning", "source": "Nature"},
        ...     None,
        ... ])
        >>> citation.description["article-title"]
        'Deep learning'
    """
    if config is None:
        config = FusionConfig(score_threshold=score_threshold or 0)
    elif score_threshold is not None:
        config = dataclasses.replace(config, score_threshold=score_threshold)

    if isinstance(candidates, Sequence) and not isinstance(candidates, (str, bytes)):
        candidates = [_as_description(c) for c in candidates]

    return demultiplex(candidates, config=config, hooks=hooks)


def score_candidate(candidate: MetadataDescription | Mapping[str, Any]) -> int:
    """Score the completeness of one candidate (0-100).

    Parameters
    ----------
    candidate : MetadataDescription | Mapping[str, Any]
        Candidate description or plain statements.

    Returns
    -------
    int
        Parse score.
    """
    return score_description(_as_description(candidate))


def write_jsonl(
    citations: Mapping[str, Citation] | Iterable[tuple[str, Citation]],
    path: str | Path,
) -> None:
    """Write fused citations to a JSONL file.

    Parameters
    ----------
    citations : Mapping[str, Citation] | Iterable[tuple[str, Citation]]
        Citation identifier to fused citation.
    path : str | Path
        Output file path; parent directories are created.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    items = citations.items() if isinstance(citations, Mapping) else citations
    with output_path.open("w", encoding="utf-8") as f:
        for citation_id, citation in items:
            json.dump(
                {"citation_id": citation_id, **citation.to_dict()},
                f,
                ensure_ascii=False,
                sort_keys=True,
            )
            f.write("\n")
