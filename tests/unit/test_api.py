"""Tests for the public API."""

import json
from pathlib import Path

import pytest

import citefuse
from citefuse import (
    Citation,
    CitationState,
    EmptyResultError,
    FusionConfig,
    InvalidInputError,
    MetadataDescription,
    PublicationType,
    fuse,
    guess_publication_type,
    score_candidate,
    write_jsonl,
)
from citefuse.hooks import HOOK_CITATION_FUSED, HookRegistry

# ---------------------------------------------------------------------------
# fuse
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_fuse_accepts_plain_mappings() -> None:
    """Plain statement dicts and None mix with descriptions."""
    citation = fuse(
        [
            {"article-title": "Deep learning", "date": "2015"},
            MetadataDescription({"article-title": "Deep learning", "source": "Nature"}),
            None,
        ]
    )

    assert isinstance(citation, Citation)
    assert citation.state == CitationState.PARSED
    assert citation.description["article-title"] == "Deep learning"
    assert citation.description["source"] == "Nature"
    assert citation.description["date"] == "2015"


@pytest.mark.unit
def test_fuse_score_threshold() -> None:
    """score_threshold drops weak candidates."""
    citation = fuse(
        [{"date": "2015"}, {"date": "2016", "article-title": "T", "source": "S"}],
        score_threshold=50,
    )

    assert citation.description["date"] == "2016"
    assert citation.candidate_scores == [50]


@pytest.mark.unit
def test_fuse_config_threshold_used_without_keyword() -> None:
    """Without score_threshold the config threshold applies."""
    with pytest.raises(EmptyResultError):
        fuse([{"date": "2015"}], config=FusionConfig(score_threshold=90))


@pytest.mark.unit
def test_fuse_threshold_keyword_overrides_config() -> None:
    """score_threshold replaces the config threshold and keeps the other settings."""
    config = FusionConfig(score_threshold=90, guess_publication_type=False)
    candidates = [
        {
            'person-group[@person-group-type="editor"]': [],
            "article-title": "T",
            "date": "2015",
            "isbn": "978",
        }
    ]

    citation = fuse(candidates, score_threshold=0, config=config)

    assert citation.candidate_scores == [33]
    assert "[@publication-type]" not in citation.description
    assert config.score_threshold == 90

    with pytest.raises(ValueError, match="score_threshold"):
        fuse(candidates, score_threshold=101, config=config)


@pytest.mark.unit
def test_fuse_forwards_hooks() -> None:
    """Hooks given to fuse() are dispatched."""
    hooks = HookRegistry()
    seen: list[Citation] = []
    hooks.register(HOOK_CITATION_FUSED, lambda name, c: seen.append(c))

    citation = fuse([{"date": "2015"}], hooks=hooks)

    assert seen == [citation]


@pytest.mark.unit
@pytest.mark.parametrize(
    "candidates",
    [
        pytest.param([], id="empty"),
        pytest.param([None], id="only_null"),
        pytest.param(["text"], id="string_candidate"),
        pytest.param("text", id="string_input"),
    ],
)
def test_fuse_invalid_input(candidates: object) -> None:
    """Unusable input raises InvalidInputError."""
    with pytest.raises(InvalidInputError):
        fuse(candidates)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# score_candidate / guess_publication_type
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_score_candidate_accepts_mapping() -> None:
    """Plain mappings are scored like descriptions."""
    statements = {"article-title": "T", "date": "2001", "[@publication-type]": "book"}

    assert score_candidate(statements) == 50
    assert score_candidate(MetadataDescription(statements)) == 50
    assert score_candidate({}) == 0


@pytest.mark.unit
def test_guess_publication_type_exported() -> None:
    """The guesser is available from the package root."""
    description = MetadataDescription(
        {
            'person-group[@person-group-type="editor"]': [],
            "article-title": "Proceedings paper",
            "date": "2004",
            "conf-name": "JCDL",
            "conf-loc": "Tucson",
        }
    )

    assert guess_publication_type(description) == PublicationType.CONFERENCE_PROCEEDINGS


# ---------------------------------------------------------------------------
# write_jsonl
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_write_jsonl_from_mapping(tmp_path: Path) -> None:
    """Each citation becomes one record with its id."""
    citations = {
        "a": fuse([{"date": "2001"}]),
        "b": fuse([{"date": "2002"}]),
    }
    path = tmp_path / "nested" / "fused.jsonl"

    write_jsonl(citations, path)

    records = [json.loads(line) for line in path.read_text().splitlines()]
    assert [r["citation_id"] for r in records] == ["a", "b"]
    assert records[1]["statements"] == {"date": "2002"}
    assert records[0]["state"] == "parsed"


@pytest.mark.unit
def test_write_jsonl_from_pairs(tmp_path: Path) -> None:
    """An iterable of (id, citation) pairs keeps its order."""
    path = tmp_path / "fused.jsonl"

    write_jsonl(iter([("z", fuse([{"a": 1}])), ("y", fuse([{"a": 2}]))]), str(path))

    assert [json.loads(line)["citation_id"] for line in path.read_text().splitlines()] == [
        "z",
        "y",
    ]


@pytest.mark.unit
def test_package_version() -> None:
    """The package exposes its version."""
    assert citefuse.__version__ == "0.3.0"
