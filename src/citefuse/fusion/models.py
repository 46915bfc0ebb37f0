"""Data models used while fusing candidate descriptions."""

from dataclasses import dataclass

from citefuse.models import MetadataDescription


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate description with its parse score.

    Attributes
    ----------
    score : int
        Parse score in [0, 100].
    description : MetadataDescription
        Candidate statements (with a guessed publication type, if any).
    index : int
        Position of the candidate in the demultiplexer input.
    type_guessed : bool
        Whether the publication type was added by the guesser.
    """

    score: int
    description: MetadataDescription
    index: int
    type_guessed: bool = False

    def __post_init__(self) -> None:
        """Validate score range."""
        if not 0 <= self.score <= 100:
            raise ValueError(f"score must be in [0, 100], got {self.score}")
