"""Read candidate sets from JSON and JSONL files.

A candidate set holds the descriptions every configured service produced
for one citation::

    {"citation_id": "c1",
     "candidates": [{"source": "parscit", "statements": {"article-title": "..."}},
                    null]}

``.jsonl`` / ``.ndjson`` files hold one candidate set per line; any other
file holds a single JSON document that is either one candidate set or a
list of them.
"""

import json
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from citefuse.models import MetadataDescription
from citefuse.parse.schema import CANDIDATE_SET_SCHEMA

__all__ = [
    "JSONL_EXTENSIONS",
    "CandidateFileError",
    "CandidateSet",
    "load_candidate_sets",
    "parse_candidate_set",
]

JSONL_EXTENSIONS = frozenset({".jsonl", ".ndjson"})

_VALIDATOR = Draft202012Validator(CANDIDATE_SET_SCHEMA)


class CandidateFileError(Exception):
    """Raised when a candidate file cannot be read."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
        line: int | None = None,
    ) -> None:
        """Initialize candidate file error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where the error occurred.
        line : int | None, optional
            1-based line number (JSONL files only).
        """
        location = ""
        if file is not None:
            location = f"{file}:{line}: " if line is not None else f"{file}: "
        super().__init__(f"{location}{message}")
        self.file = file
        self.line = line


@dataclass
class CandidateSet:
    """Candidate descriptions for one citation.

    Attributes
    ----------
    citation_id : str
        Citation identifier.
    candidates : list[MetadataDescription | None]
        One entry per service; None where a service produced nothing.
    """

    citation_id: str
    candidates: list[MetadataDescription | None] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "citation_id": self.citation_id,
            "candidates": [c.to_dict() if c is not None else None for c in self.candidates],
        }


def parse_candidate_set(data: Any) -> CandidateSet:
    """Validate and convert one decoded candidate set.

    Parameters
    ----------
    data : Any
        Decoded JSON value.

    Returns
    -------
    CandidateSet
        Parsed candidate set.

    Raises
    ------
    CandidateFileError
        If the value does not match the candidate set schema.
    """
    error = best_match(_VALIDATOR.iter_errors(data))
    if error is not None:
        path = "/".join(str(p) for p in error.absolute_path) or "<root>"
        raise CandidateFileError(f"Invalid candidate set at {path}: {error.message}")

    return CandidateSet(
        citation_id=data["citation_id"],
        candidates=[
            MetadataDescription.from_dict(c) if c is not None else None
            for c in data["candidates"]
        ],
    )


def _iter_jsonl(path: Path) -> Iterator[CandidateSet]:
    with path.open("rb") as f:
        for line_number, raw_line in enumerate(f, start=1):
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError as e:
                message = f"Not valid UTF-8: {e.reason}"
                raise CandidateFileError(message, str(path), line_number) from e
            if not line.strip():
                continue
            try:
                yield parse_candidate_set(json.loads(line))
            except json.JSONDecodeError as e:
                raise CandidateFileError(f"Invalid JSON: {e.msg}", str(path), line_number) from e
            except CandidateFileError as e:
                raise CandidateFileError(str(e), str(path), line_number) from e


def load_candidate_sets(path: str | Path) -> list[CandidateSet]:
    """Load all candidate sets from a file.

    Parameters
    ----------
    path : str | Path
        JSON or JSONL file.

    Returns
    -------
    list[CandidateSet]
        Candidate sets in file order.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    CandidateFileError
        If the file is not valid UTF-8 JSON or a candidate set is malformed.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if file_path.suffix.lower() in JSONL_EXTENSIONS:
        sets = list(_iter_jsonl(file_path))
    else:
        try:
            with file_path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            raise CandidateFileError(f"Invalid JSON: {e.msg}", str(file_path), e.lineno) from e
        except UnicodeDecodeError as e:
            raise CandidateFileError(f"Not valid UTF-8: {e.reason}", str(file_path)) from e

        items = document if isinstance(document, list) else [document]
        try:
            sets = [parse_candidate_set(item) for item in items]
        except CandidateFileError as e:
            raise CandidateFileError(str(e), str(file_path)) from e

    seen: set[str] = set()
    for candidate_set in sets:
        if candidate_set.citation_id in seen:
            raise CandidateFileError(
                f"Duplicate citation_id: {candidate_set.citation_id}", str(file_path)
            )
        seen.add(candidate_set.citation_id)

    return sets
