"""Tests for the citation demultiplexer."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from citefuse.audit.logger import AuditLogger
from citefuse.fusion import (
    EmptyResultError,
    FusionConfig,
    InvalidInputError,
    ScoredCandidate,
    demultiplex,
    fuse_candidates,
    score_candidates,
    supports,
)
from citefuse.hooks import HOOK_CANDIDATE_SCORED, HOOK_CITATION_FUSED, HookRegistry
from citefuse.models import Citation, CitationState, MetadataDescription

PUB_TYPE = "[@publication-type]"

# ---------------------------------------------------------------------------
# supports / input validation
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_supports(make_description: Callable[..., MetadataDescription]) -> None:
    """Only sequences of descriptions with at least one live entry are supported."""
    description = make_description({"a": 1})

    assert supports([description])
    assert supports([None, description, None])
    assert supports((description,))
    assert not supports([])
    assert not supports([None, None])
    assert not supports([description, {"a": 1}])
    assert not supports(description)
    assert not supports("not a sequence")


@pytest.mark.unit
def test_supports_checks_output_when_given(
    make_description: Callable[..., MetadataDescription],
) -> None:
    """A proposed output must be a parsed citation."""
    candidates = [make_description({"a": 1})]
    parsed = demultiplex(candidates)

    assert supports(candidates, parsed)
    assert supports(candidates, None)
    assert not supports(candidates, Citation())
    assert not supports(candidates, {"state": "parsed"})
    assert not supports([None], parsed)


@pytest.mark.unit
@pytest.mark.parametrize(
    "candidates",
    [pytest.param([], id="empty"), pytest.param([None, None], id="all_null")],
)
def test_no_live_candidates_raises(candidates: list) -> None:
    """Demultiplexing needs at least one non-null candidate."""
    with pytest.raises(InvalidInputError, match="non-null candidate"):
        demultiplex(candidates)


@pytest.mark.unit
def test_unrecognized_candidate_raises_with_index(
    make_description: Callable[..., MetadataDescription],
) -> None:
    """A candidate that is not a description is rejected with its position."""
    with pytest.raises(InvalidInputError, match="Candidate 1") as exc_info:
        demultiplex([make_description({"a": 1}), {"a": 1}])

    assert exc_info.value.index == 1


@pytest.mark.unit
def test_non_sequence_input_raises(make_description: Callable[..., MetadataDescription]) -> None:
    """A bare description is not a candidate sequence."""
    with pytest.raises(InvalidInputError, match="must be a sequence"):
        demultiplex(make_description({"a": 1}))  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# score_candidates
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_score_candidates_guesses_missing_type(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
) -> None:
    """A guessed type is added to a copy and counted in the score."""
    original = make_description({**guessable_statements, "volume": "1", "issue": "2"})

    [scored] = score_candidates([None, original])

    assert scored.index == 1
    assert scored.type_guessed is True
    assert scored.description[PUB_TYPE] == "journal"
    assert scored.score == 50
    assert not original.has_statement(PUB_TYPE)


@pytest.mark.unit
def test_score_candidates_keeps_existing_type(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
) -> None:
    """A present publication type is never replaced."""
    original = make_description({**guessable_statements, "volume": "1", PUB_TYPE: "book"})

    [scored] = score_candidates([original])

    assert scored.type_guessed is False
    assert scored.description[PUB_TYPE] == "book"


@pytest.mark.unit
def test_score_candidates_guessing_can_be_disabled(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
) -> None:
    """With guessing off, candidates are scored as given."""
    original = make_description({**guessable_statements, "volume": "1", "issue": "2"})

    [scored] = score_candidates([original], FusionConfig(guess_publication_type=False))

    assert scored.type_guessed is False
    assert scored.score == 33


# ---------------------------------------------------------------------------
# demultiplex
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_demultiplex_fuses_live_candidates(
    make_description: Callable[..., MetadataDescription],
    full_journal_statements: dict,
) -> None:
    """Null candidates are skipped and the rest fused."""
    weak = make_description({"article-title": "The Access Principle", "source": "Other"})

    citation = demultiplex([None, make_description(full_journal_statements), weak])

    assert isinstance(citation, Citation)
    assert citation.state == CitationState.PARSED
    assert citation.description["article-title"] == "The Access Principle"
    # equal frequency for "source": the 100-score candidate wins
    assert citation.description["source"] == "Journal of Open Scholarship"
    assert citation.candidate_scores == [100, 33]
    assert citation.parse_score == pytest.approx((100 + (100 + 33) / 2) / 2)


@pytest.mark.unit
def test_demultiplex_applies_configured_threshold(
    make_description: Callable[..., MetadataDescription],
) -> None:
    """Config threshold reaches the fusion step."""
    with pytest.raises(EmptyResultError):
        demultiplex(
            [make_description({"article-title": "T"})],
            config=FusionConfig(score_threshold=50),
        )


@pytest.mark.unit
def test_hook_can_exclude_candidates(
    make_description: Callable[..., MetadataDescription],
) -> None:
    """A truthy candidate_scored callback drops that candidate."""
    hooks = HookRegistry()
    hooks.register(
        HOOK_CANDIDATE_SCORED,
        lambda name, candidate: candidate.description.source == "noisy",
    )

    citation = demultiplex(
        [
            make_description({"date": "1999"}, source="noisy"),
            make_description({"date": "2001"}, source="clean"),
        ],
        hooks=hooks,
    )

    assert citation.description["date"] == "2001"
    assert citation.provenance["date"].from_candidates == [1]


@pytest.mark.unit
def test_hooks_excluding_everything_raises(
    make_description: Callable[..., MetadataDescription],
) -> None:
    """Excluding all candidates leaves nothing to fuse."""
    hooks = HookRegistry()
    hooks.register(HOOK_CANDIDATE_SCORED, lambda name, candidate: True)

    with pytest.raises(InvalidInputError, match="excluded by hooks"):
        demultiplex([make_description({"a": 1})], hooks=hooks)


@pytest.mark.unit
def test_citation_fused_hook_receives_result(
    make_description: Callable[..., MetadataDescription],
) -> None:
    """citation_fused observers see the fused citation."""
    seen: list[Citation] = []
    scored: list[ScoredCandidate] = []
    hooks = HookRegistry(record_calls=True)
    hooks.register(HOOK_CANDIDATE_SCORED, lambda name, c: scored.append(c))
    hooks.register(HOOK_CITATION_FUSED, lambda name, c: seen.append(c))

    citation = demultiplex([make_description({"a": 1}), None], hooks=hooks)

    assert seen == [citation]
    assert [c.index for c in scored] == [0]
    called = [name for name, _ in hooks.called_hooks]
    assert called == [HOOK_CANDIDATE_SCORED, HOOK_CITATION_FUSED]


@pytest.mark.unit
def test_demultiplex_logs_events(
    tmp_path: Path,
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
) -> None:
    """Guesses and the fused result are logged against the citation id."""
    log_path = tmp_path / "events.jsonl"
    with AuditLogger(run_id="run", log_path=log_path) as logger:
        demultiplex(
            [make_description({**guessable_statements, "isbn": "978"})],
            logger=logger,
            citation_id="cit-1",
        )

    events = [json.loads(line) for line in log_path.read_text().splitlines()]

    assert [e["event"] for e in events] == ["publication_type_guessed", "citation_fused"]
    assert events[0]["data"]["publication_type"] == "book"
    assert all(e["rid"] == "cit-1" for e in events)
    assert events[1]["data"]["candidates_fused"] == 1


@pytest.mark.unit
def test_demultiplex_does_not_mutate_candidates(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
) -> None:
    """Input descriptions are read-only."""
    candidates = [make_description({**guessable_statements, "volume": "1", "issue": "2"})]
    before = [c.statements() for c in candidates]

    demultiplex(candidates)

    assert [c.statements() for c in candidates] == before


@pytest.mark.unit
def test_fuse_candidates_from_scored(
    make_description: Callable[..., MetadataDescription],
    full_journal_statements: dict,
) -> None:
    """Pre-scored candidates fuse like demultiplex; an empty list is rejected."""
    candidates = [make_description(full_journal_statements), None]
    scored = score_candidates(candidates)

    citation = fuse_candidates(scored)

    assert citation.to_dict() == demultiplex(candidates).to_dict()
    with pytest.raises(InvalidInputError, match="No candidates"):
        fuse_candidates([])
