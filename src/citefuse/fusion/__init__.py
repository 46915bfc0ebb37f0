"""Citation fusion: scoring, publication type guessing and value fusion."""

from citefuse.fusion.config import FusionConfig
from citefuse.fusion.demultiplexer import (
    demultiplex,
    fuse_candidates,
    score_candidates,
    supports,
)
from citefuse.fusion.errors import EmptyResultError, FusionError, InvalidInputError
from citefuse.fusion.models import ScoredCandidate
from citefuse.fusion.scoring import EXPECTED_PROPERTIES, score_description
from citefuse.fusion.type_guess import (
    COMPLETENESS_INDICATORS,
    TYPICAL_PROPERTY_NAMES,
    count_type_indicators,
    guess_publication_type,
)
from citefuse.fusion.value_fusion import bucket_by_score, fuse_scored_candidates, values_equal

__all__ = [
    "COMPLETENESS_INDICATORS",
    "EXPECTED_PROPERTIES",
    "TYPICAL_PROPERTY_NAMES",
    "EmptyResultError",
    "FusionConfig",
    "FusionError",
    "InvalidInputError",
    "ScoredCandidate",
    "bucket_by_score",
    "count_type_indicators",
    "demultiplex",
    "fuse_candidates",
    "fuse_scored_candidates",
    "guess_publication_type",
    "score_candidates",
    "score_description",
    "supports",
    "values_equal",
]
