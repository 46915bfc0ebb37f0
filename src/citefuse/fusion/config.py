"""Fusion configuration."""

from dataclasses import dataclass
from typing import Any

from citefuse.fusion.scoring import EXPECTED_PROPERTIES
from citefuse.fusion.type_guess import COMPLETENESS_INDICATORS, TYPICAL_PROPERTY_NAMES
from citefuse.models import PublicationType


@dataclass(frozen=True)
class FusionConfig:
    """Configuration for fusing one citation's candidates.

    Attributes
    ----------
    score_threshold : int
        Candidates scoring below this are ignored (default: 0 = keep all).
    guess_publication_type : bool
        Guess a missing publication type before scoring (default: True).
    expected_properties : tuple[str, ...]
        Properties counted by the completeness score.
    completeness_indicators : tuple[str, ...]
        Properties required before a publication type is guessed.
    typical_property_names : tuple[tuple[str, PublicationType], ...]
        Ordered voting table of indicator property to implied type.
    """

    score_threshold: int = 0
    guess_publication_type: bool = True
    expected_properties: tuple[str, ...] = EXPECTED_PROPERTIES
    completeness_indicators: tuple[str, ...] = COMPLETENESS_INDICATORS
    typical_property_names: tuple[tuple[str, PublicationType], ...] = TYPICAL_PROPERTY_NAMES

    def __post_init__(self) -> None:
        """Validate thresholds and tables."""
        if not 0 <= self.score_threshold <= 100:
            raise ValueError(f"score_threshold must be in [0, 100], got {self.score_threshold}")

        if not self.expected_properties:
            raise ValueError("expected_properties must not be empty")

        for name, publication_type in self.typical_property_names:
            if not isinstance(publication_type, PublicationType):
                raise ValueError(
                    f"Indicator {name!r} maps to {publication_type!r}, not a PublicationType"
                )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "score_threshold": self.score_threshold,
            "guess_publication_type": self.guess_publication_type,
            "expected_properties": list(self.expected_properties),
            "completeness_indicators": list(self.completeness_indicators),
            "typical_property_names": [
                [name, str(publication_type)]
                for name, publication_type in self.typical_property_names
            ],
        }
