"""Citation metadata fusion for multi-parser reference extraction.

This package provides:
- Data models (citefuse.models): descriptions, publication types, citations
- Fusion (citefuse.fusion): scoring, type guessing, value fusion
- Hooks (citefuse.hooks): injected callback registrations
- Parsing (citefuse.parse): candidate set files
- Engine (citefuse.engine): batch runner
- Audit (citefuse.audit): JSONL events and run manifests
- CLI (citefuse.cli): command-line interface
- Public API (citefuse.api): high-level convenience functions
"""

__version__ = "0.3.0"
__license__ = "MIT"

from citefuse.api import (
    fuse,
    guess_publication_type,
    load_candidate_sets,
    score_candidate,
    write_jsonl,
)
from citefuse.fusion import EmptyResultError, FusionConfig, FusionError, InvalidInputError
from citefuse.models import Citation, CitationState, MetadataDescription, PublicationType
from citefuse.parse import CandidateFileError

__all__ = [
    "__version__",
    "__license__",
    "CandidateFileError",
    "Citation",
    "CitationState",
    "EmptyResultError",
    "FusionConfig",
    "FusionError",
    "InvalidInputError",
    "MetadataDescription",
    "PublicationType",
    "fuse",
    "guess_publication_type",
    "load_candidate_sets",
    "score_candidate",
    "write_jsonl",
]
