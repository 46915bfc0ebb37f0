"""Citation metadata data models for citefuse.

A citation is described by statements keyed by NLM citation property
names (e.g. ``article-title`` or ``person-group[@person-group-type="author"]``).
Parser and lookup services each produce one ``MetadataDescription``; the
demultiplexer fuses them into a single ``Citation``.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

# Statement holding the publication type of a description
PUBLICATION_TYPE_PROPERTY = "[@publication-type]"


class PublicationType(StrEnum):
    """NLM publication type tags.

    Attributes
    ----------
    JOURNAL : str
        Journal article.
    BOOK : str
        Book or book chapter.
    CONFERENCE_PROCEEDINGS : str
        Paper in conference proceedings.
    UNKNOWN : str
        Type could not be determined.
    """

    JOURNAL = "journal"
    BOOK = "book"
    CONFERENCE_PROCEEDINGS = "conf-proc"
    UNKNOWN = "unknown"


class CitationState(StrEnum):
    """Processing state of a citation.

    Attributes
    ----------
    RAW : str
        Citation has not been parsed yet.
    PARSED : str
        Citation holds fused parser output.
    """

    RAW = "raw"
    PARSED = "parsed"


class MetadataDescription(Mapping[str, Any]):
    """Read-only set of metadata statements for one citation.

    Presence of a statement is distinct from its value being empty:
    ``has_statement("issue")`` is true for ``{"issue": ""}``.

    Parameters
    ----------
    statements : Mapping[str, Any] | None, optional
        Property name to value.
    source : str | None, optional
        Name of the service that produced the description.
    """

    __slots__ = ("_statements", "source")

    def __init__(
        self,
        statements: Mapping[str, Any] | None = None,
        source: str | None = None,
    ) -> None:
        statements = dict(statements or {})
        for name in statements:
            if not isinstance(name, str) or not name:
                raise TypeError(f"Statement names must be non-empty strings, got {name!r}")
        self._statements = MappingProxyType(statements)
        self.source = source

    def __getitem__(self, name: str) -> Any:
        return self._statements[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._statements)

    def __len__(self) -> int:
        return len(self._statements)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetadataDescription):
            return NotImplemented
        return dict(self._statements) == dict(other._statements)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"MetadataDescription({dict(self._statements)!r}, source={self.source!r})"

    def has_statement(self, name: str) -> bool:
        """Return True if a statement for ``name`` is set."""
        return name in self._statements

    def get_statement(self, name: str, default: Any = None) -> Any:
        """Return the value for ``name`` or ``default``."""
        return self._statements.get(name, default)

    def statements(self) -> dict[str, Any]:
        """Return a shallow copy of all statements in insertion order."""
        return dict(self._statements)

    def set_property_names(self) -> frozenset[str]:
        """Return the names of all set statements."""
        return frozenset(self._statements)

    def with_statement(self, name: str, value: Any) -> "MetadataDescription":
        """Return a copy of this description with one statement added or replaced."""
        statements = dict(self._statements)
        statements[name] = value
        return MetadataDescription(statements, source=self.source)

    @property
    def publication_type(self) -> PublicationType | None:
        """Publication type statement, if set and recognized."""
        value = self._statements.get(PUBLICATION_TYPE_PROPERTY)
        if value is None:
            return None
        try:
            return PublicationType(value)
        except ValueError:
            return PublicationType.UNKNOWN

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"source": self.source, "statements": self.statements()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MetadataDescription":
        """Create a description from its dictionary form.

        Parameters
        ----------
        data : Mapping[str, Any]
            Dictionary with ``statements`` and optional ``source``.

        Returns
        -------
        MetadataDescription
            New description.
        """
        return cls(data.get("statements") or {}, source=data.get("source"))


@dataclass(frozen=True)
class FieldProvenance:
    """Provenance for a single fused statement.

    Attributes
    ----------
    rule : str
        Rule that decided the value ("single_value", "most_frequent",
        "highest_score" or "first_seen").
    from_candidates : list[int]
        Input positions of candidates that supplied the winning value.
    frequency : int
        Number of retained candidates that supplied the winning value.
    max_score : int
        Highest score among those candidates.
    competing_values : int
        Number of distinct values seen for the statement.
    """

    rule: str
    from_candidates: list[int]
    frequency: int
    max_score: int
    competing_values: int


@dataclass
class Citation:
    """Fused citation with its overall parse score.

    Attributes
    ----------
    description : MetadataDescription
        Fused "best" statements.
    parse_score : float
        Overall confidence in [0, 100].
    state : CitationState
        Processing state.
    candidate_scores : list[int]
        Scores of the candidates that took part in fusion, highest first.
    provenance : dict[str, FieldProvenance]
        Per-statement provenance.
    """

    description: MetadataDescription = field(default_factory=MetadataDescription)
    parse_score: float = 0.0
    state: CitationState = CitationState.RAW
    candidate_scores: list[int] = field(default_factory=list)
    provenance: dict[str, FieldProvenance] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Returns
        -------
        dict[str, Any]
            Dictionary representation.
        """
        return {
            "state": str(self.state),
            "parse_score": self.parse_score,
            "candidate_scores": list(self.candidate_scores),
            "statements": self.description.statements(),
            "provenance": {
                name: {
                    "rule": prov.rule,
                    "from_candidates": list(prov.from_candidates),
                    "frequency": prov.frequency,
                    "max_score": prov.max_score,
                    "competing_values": prov.competing_values,
                }
                for name, prov in self.provenance.items()
            },
        }
