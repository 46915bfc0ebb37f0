"""Candidate file parsing."""

from citefuse.parse.candidates import (
    CandidateFileError,
    CandidateSet,
    load_candidate_sets,
    parse_candidate_set,
)
from citefuse.parse.schema import CANDIDATE_SET_SCHEMA

__all__ = [
    "CANDIDATE_SET_SCHEMA",
    "CandidateFileError",
    "CandidateSet",
    "load_candidate_sets",
    "parse_candidate_set",
]
