"""Completeness scoring for candidate descriptions."""

from collections.abc import Sequence

from citefuse.models import PUBLICATION_TYPE_PROPERTY, MetadataDescription

# Properties a well-parsed citation is expected to carry
EXPECTED_PROPERTIES: tuple[str, ...] = (
    'person-group[@person-group-type="author"]',
    "article-title",
    "source",
    "date",
    "fpage",
    PUBLICATION_TYPE_PROPERTY,
)


def score_description(
    description: MetadataDescription,
    expected_properties: Sequence[str] = EXPECTED_PROPERTIES,
) -> int:
    """Compute the parse score of a candidate description.

    The score is the share of expected properties that are set, scaled to
    0-100 and rounded half up to an integer.

    Parameters
    ----------
    description : MetadataDescription
        Candidate to score.
    expected_properties : Sequence[str], optional
        Properties that count towards completeness.

    Returns
    -------
    int
        Parse score in [0, 100].

    Raises
    ------
    ValueError
        If expected_properties is empty.
    """
    expected = set(expected_properties)
    if not expected:
        raise ValueError("expected_properties must not be empty")

    hits = len(expected & description.set_property_names())
    # Integer round-half-up of 100 * hits / len(expected)
    return min(100, (200 * hits + len(expected)) // (2 * len(expected)))
