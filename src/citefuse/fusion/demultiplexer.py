"""Citation demultiplexer.

Takes the descriptions several parser/lookup services produced for the
same citation and creates a single citation from them:

1. Guess a publication type for candidates that lack one.
2. Score every candidate by completeness.
3. Let ``candidate_scored`` hooks exclude candidates.
4. Fuse the remaining candidates (see ``value_fusion``).
"""

from collections.abc import Sequence
from typing import Any

from citefuse.audit.logger import AuditLogger
from citefuse.fusion.config import FusionConfig
from citefuse.fusion.errors import InvalidInputError
from citefuse.fusion.models import ScoredCandidate
from citefuse.fusion.scoring import score_description
from citefuse.fusion.type_guess import guess_publication_type
from citefuse.fusion.value_fusion import fuse_scored_candidates
from citefuse.hooks import HOOK_CANDIDATE_SCORED, HOOK_CITATION_FUSED, HookRegistry
from citefuse.models import (
    PUBLICATION_TYPE_PROPERTY,
    Citation,
    CitationState,
    MetadataDescription,
)

__all__ = ["demultiplex", "fuse_candidates", "score_candidates", "supports"]


def supports(candidates: Any, output: Any = None) -> bool:
    """Check whether the input (and optionally an output) can be demultiplexed.

    Parameters
    ----------
    candidates : Any
        Proposed input.
    output : Any, optional
        Proposed result. None skips the output check.

    Returns
    -------
    bool
        True for a non-empty sequence holding at least one
        ``MetadataDescription`` and nothing but descriptions or None, and,
        if given, an output that is a parsed ``Citation``.
    """
    if isinstance(candidates, (str, bytes)) or not isinstance(candidates, Sequence):
        return False

    found = False
    for candidate in candidates:
        if candidate is None:
            continue
        if not isinstance(candidate, MetadataDescription):
            return False
        found = True
    if not found:
        return False

    if output is None:
        return True
    return isinstance(output, Citation) and output.state == CitationState.PARSED


def _validate(candidates: Sequence[MetadataDescription | None]) -> None:
    """Raise InvalidInputError describing why the input is unsupported."""
    if supports(candidates):
        return
    if isinstance(candidates, (str, bytes)) or not isinstance(candidates, Sequence):
        raise InvalidInputError(
            f"Candidates must be a sequence, got {type(candidates).__name__}"
        )
    for index, candidate in enumerate(candidates):
        if candidate is not None and not isinstance(candidate, MetadataDescription):
            raise InvalidInputError(
                f"Candidate {index} is not a MetadataDescription: {type(candidate).__name__}",
                index=index,
            )
    raise InvalidInputError("At least one non-null candidate is required")


def score_candidates(
    candidates: Sequence[MetadataDescription | None],
    config: FusionConfig | None = None,
) -> list[ScoredCandidate]:
    """Guess missing publication types and score every live candidate.

    Input descriptions are left untouched; a guessed type is added to a
    copy.

    Parameters
    ----------
    candidates : Sequence[MetadataDescription | None]
        Candidate descriptions; None entries are skipped.
    config : FusionConfig | None, optional
        Fusion configuration. If None, uses defaults.

    Returns
    -------
    list[ScoredCandidate]
        Scored candidates in input order.

    Raises
    ------
    InvalidInputError
        If the input is not supported (see ``supports``).
    """
    _validate(candidates)
    if config is None:
        config = FusionConfig()

    scored: list[ScoredCandidate] = []
    for index, description in enumerate(candidates):
        if description is None:
            continue

        type_guessed = False
        if config.guess_publication_type and not description.has_statement(
            PUBLICATION_TYPE_PROPERTY
        ):
            publication_type = guess_publication_type(
                description,
                completeness_indicators=config.completeness_indicators,
                typical_property_names=config.typical_property_names,
            )
            if publication_type is not None:
                description = description.with_statement(
                    PUBLICATION_TYPE_PROPERTY, publication_type.value
                )
                type_guessed = True

        scored.append(
            ScoredCandidate(
                score=score_description(description, config.expected_properties),
                description=description,
                index=index,
                type_guessed=type_guessed,
            )
        )
    return scored


def fuse_candidates(
    scored: Sequence[ScoredCandidate],
    config: FusionConfig | None = None,
    hooks: HookRegistry | None = None,
    logger: AuditLogger | None = None,
    citation_id: str | None = None,
) -> Citation:
    """Dispatch hooks over scored candidates and fuse the accepted ones.

    Parameters
    ----------
    scored : Sequence[ScoredCandidate]
        Output of ``score_candidates``.
    config : FusionConfig | None, optional
        Fusion configuration. If None, uses defaults.
    hooks : HookRegistry | None, optional
        Hook registrations to dispatch. If None, no hooks run.
    logger : AuditLogger | None, optional
        Audit logger. If None, no logging.
    citation_id : str | None, optional
        Identifier attached to logged events.

    Returns
    -------
    Citation
        Parsed citation with "best" values and overall parse score.

    Raises
    ------
    InvalidInputError
        If no candidate was supplied or a hook excluded all of them.
    EmptyResultError
        If the score threshold excludes every candidate.
    """
    if config is None:
        config = FusionConfig()
    if not scored:
        raise InvalidInputError("No candidates to fuse")

    accepted: list[ScoredCandidate] = []
    for candidate in scored:
        if logger and candidate.type_guessed:
            logger.event(
                "publication_type_guessed",
                data={
                    "candidate": candidate.index,
                    "publication_type": candidate.description.get_statement(
                        PUBLICATION_TYPE_PROPERTY
                    ),
                },
                rid=citation_id,
            )
        if hooks is not None and hooks.call(HOOK_CANDIDATE_SCORED, candidate):
            if logger:
                logger.event(
                    "candidate_excluded",
                    data={"candidate": candidate.index, "score": candidate.score},
                    rid=citation_id,
                )
            continue
        accepted.append(candidate)

    if not accepted:
        raise InvalidInputError("All candidates were excluded by hooks")

    citation = fuse_scored_candidates(accepted, score_threshold=config.score_threshold)

    if hooks is not None:
        hooks.call(HOOK_CITATION_FUSED, citation)

    if logger:
        logger.event(
            "citation_fused",
            data={
                "parse_score": citation.parse_score,
                "candidates_live": len(scored),
                "candidates_fused": len(citation.candidate_scores),
                "statements": len(citation.description),
            },
            rid=citation_id,
        )

    return citation


def demultiplex(
    candidates: Sequence[MetadataDescription | None],
    config: FusionConfig | None = None,
    hooks: HookRegistry | None = None,
    logger: AuditLogger | None = None,
    citation_id: str | None = None,
) -> Citation:
    """Create one citation from several candidate descriptions.

    Runs ``score_candidates`` followed by ``fuse_candidates``.

    Parameters
    ----------
    candidates : Sequence[MetadataDescription | None]
        Descriptions produced by the configured services; None marks a
        service that produced nothing.
    config : FusionConfig | None, optional
        Fusion configuration. If None, uses defaults.
    hooks : HookRegistry | None, optional
        Hook registrations to dispatch. If None, no hooks run.
    logger : AuditLogger | None, optional
        Audit logger. If None, no logging.
    citation_id : str | None, optional
        Identifier attached to logged events.

    Returns
    -------
    Citation
        Parsed citation with "best" values and overall parse score.

    Raises
    ------
    InvalidInputError
        If no usable candidate was supplied or a hook excluded all of them.
    EmptyResultError
        If the score threshold excludes every candidate.
    """
    if config is None:
        config = FusionConfig()

    scored = score_candidates(candidates, config)
    return fuse_candidates(scored, config, hooks=hooks, logger=logger, citation_id=citation_id)
