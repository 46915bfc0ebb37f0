"""Fuse scored candidate descriptions into a single citation.

Candidates are grouped by parse score and scanned from the highest score
down. For every statement the most frequent value wins; equal frequencies
are decided by the highest score that supplied the value, and remaining
ties by the value seen first during the scan (buckets by descending score,
candidates in input order within a bucket).
"""

import copy
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from citefuse.fusion.errors import EmptyResultError, InvalidInputError
from citefuse.fusion.models import ScoredCandidate
from citefuse.models import Citation, CitationState, FieldProvenance, MetadataDescription


@dataclass
class _ValueTally:
    """Occurrences of one distinct value of a statement."""

    value: Any
    max_score: int
    frequency: int = 0
    candidates: list[int] = field(default_factory=list)


def values_equal(left: Any, right: Any) -> bool:
    """Compare two statement values structurally.

    Values of different types are never equal, so ``1``, ``1.0`` and
    ``True`` are three distinct values. Mappings are compared key by key
    and lists/tuples element by element, recursively. NaN equals NaN.

    Parameters
    ----------
    left : Any
        First value.
    right : Any
        Second value.

    Returns
    -------
    bool
        True if both values are structurally identical.
    """
    if type(left) is not type(right):
        return False
    if isinstance(left, Mapping):
        return left.keys() == right.keys() and all(values_equal(left[k], right[k]) for k in left)
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(map(values_equal, left, right))
    if isinstance(left, float) and math.isnan(left):
        return math.isnan(right)
    return bool(left == right)


def bucket_by_score(candidates: Iterable[ScoredCandidate]) -> dict[int, list[ScoredCandidate]]:
    """Group candidates by score, highest score first.

    Parameters
    ----------
    candidates : Iterable[ScoredCandidate]
        Scored candidates.

    Returns
    -------
    dict[int, list[ScoredCandidate]]
        Buckets keyed by score in descending order; candidates keep their
        input order within a bucket.
    """
    buckets: dict[int, list[ScoredCandidate]] = {}
    for candidate in candidates:
        buckets.setdefault(candidate.score, []).append(candidate)
    return {score: buckets[score] for score in sorted(buckets, reverse=True)}


def _find_tally(tallies: list[_ValueTally], value: Any) -> _ValueTally | None:
    for tally in tallies:
        if values_equal(tally.value, value):
            return tally
    return None


def _select_best(tallies: list[_ValueTally]) -> tuple[_ValueTally, str]:
    """Pick the winning value of one statement and the rule that decided it."""
    if len(tallies) == 1:
        return tallies[0], "single_value"

    top_frequency = max(t.frequency for t in tallies)
    most_frequent = [t for t in tallies if t.frequency == top_frequency]
    if len(most_frequent) == 1:
        return most_frequent[0], "most_frequent"

    top_score = max(t.max_score for t in most_frequent)
    best_scored = [t for t in most_frequent if t.max_score == top_score]
    if len(best_scored) == 1:
        return best_scored[0], "highest_score"

    # tallies are in first-seen order
    return best_scored[0], "first_seen"


def fuse_scored_candidates(
    candidates: Sequence[ScoredCandidate],
    score_threshold: int = 0,
) -> Citation:
    """Derive one citation with a "best" set of values from scored candidates.

    Parameters
    ----------
    candidates : Sequence[ScoredCandidate]
        Scored candidates for the same citation.
    score_threshold : int, optional
        Candidates scoring below this value are ignored, both for value
        selection and for the overall score. 0 (default) keeps everything.

    Returns
    -------
    Citation
        Parsed citation with fused statements, provenance and parse score.

    Raises
    ------
    ValueError
        If score_threshold is outside [0, 100].
    InvalidInputError
        If no candidates were supplied.
    EmptyResultError
        If the threshold excludes every candidate.
    """
    if not 0 <= score_threshold <= 100:
        raise ValueError(f"score_threshold must be in [0, 100], got {score_threshold}")
    if not candidates:
        raise InvalidInputError("No candidates to fuse")

    buckets = bucket_by_score(candidates)
    retained = [(score, bucket) for score, bucket in buckets.items() if score >= score_threshold]
    if not retained:
        raise EmptyResultError(score_threshold, max(buckets))

    # Step 1: tally every value per statement. Buckets are scanned from the
    # highest score down, so the first score recorded for a value is its max.
    tallies_by_name: dict[str, list[_ValueTally]] = {}
    for score, bucket in retained:
        for candidate in bucket:
            for name, value in candidate.description.items():
                tallies = tallies_by_name.setdefault(name, [])
                tally = _find_tally(tallies, value)
                if tally is None:
                    tally = _ValueTally(value=value, max_score=score)
                    tallies.append(tally)
                tally.frequency += 1
                tally.candidates.append(candidate.index)

    # Step 2: pick the best value per statement.
    statements: dict[str, Any] = {}
    provenance: dict[str, FieldProvenance] = {}
    for name, tallies in tallies_by_name.items():
        best, rule = _select_best(tallies)
        statements[name] = copy.deepcopy(best.value)
        provenance[name] = FieldProvenance(
            rule=rule,
            from_candidates=list(best.candidates),
            frequency=best.frequency,
            max_score=best.max_score,
            competing_values=len(tallies),
        )

    # Step 3: overall score weighs the max and the average score 50% each.
    retained_count = sum(len(bucket) for _, bucket in retained)
    average_score = sum(score * len(bucket) for score, bucket in retained) / retained_count
    max_score = retained[0][0]
    parse_score = (max_score + average_score) / 2

    return Citation(
        description=MetadataDescription(statements),
        parse_score=parse_score,
        state=CitationState.PARSED,
        candidate_scores=[candidate.score for _, bucket in retained for candidate in bucket],
        provenance=provenance,
    )
