"""Heuristic publication type guessing.

A description without a publication type is classified by counting
"indicator" properties whose presence is typical for one type, e.g.
``volume`` for journal articles or ``isbn`` for books. The type with the
strictly highest count wins; ties yield no guess.
"""

from collections import Counter
from collections.abc import Sequence

from citefuse.models import PUBLICATION_TYPE_PROPERTY, MetadataDescription, PublicationType

# Sparse descriptions are not classified at all
COMPLETENESS_INDICATORS: tuple[str, ...] = (
    'person-group[@person-group-type="editor"]',
    "article-title",
    "date",
)

TYPICAL_PROPERTY_NAMES: tuple[tuple[str, PublicationType], ...] = (
    ("volume", PublicationType.JOURNAL),
    ("issue", PublicationType.JOURNAL),
    ("season", PublicationType.JOURNAL),
    ('issn[@pub-type="ppub"]', PublicationType.JOURNAL),
    ('issn[@pub-type="epub"]', PublicationType.JOURNAL),
    ('pub-id[@pub-id-type="pmid"]', PublicationType.JOURNAL),
    ('person-group[@person-group-type="editor"]', PublicationType.BOOK),
    ("edition", PublicationType.BOOK),
    ("chapter-title", PublicationType.BOOK),
    ("isbn", PublicationType.BOOK),
    ("publisher-name", PublicationType.BOOK),
    ("publisher-loc", PublicationType.BOOK),
    ("conf-date", PublicationType.CONFERENCE_PROCEEDINGS),
    ("conf-loc", PublicationType.CONFERENCE_PROCEEDINGS),
    ("conf-name", PublicationType.CONFERENCE_PROCEEDINGS),
    ("conf-sponsor", PublicationType.CONFERENCE_PROCEEDINGS),
)


def count_type_indicators(
    description: MetadataDescription,
    typical_property_names: Sequence[tuple[str, PublicationType]] = TYPICAL_PROPERTY_NAMES,
) -> Counter[PublicationType]:
    """Count indicator properties present on a description, per type.

    Parameters
    ----------
    description : MetadataDescription
        Description to inspect.
    typical_property_names : Sequence[tuple[str, PublicationType]], optional
        Ordered (property name, implied type) table.

    Returns
    -------
    Counter[PublicationType]
        Hit count per publication type (types without hits are absent).
    """
    hits: Counter[PublicationType] = Counter()
    for property_name, publication_type in typical_property_names:
        if description.has_statement(property_name):
            hits[publication_type] += 1
    return hits


def guess_publication_type(
    description: MetadataDescription,
    completeness_indicators: Sequence[str] = COMPLETENESS_INDICATORS,
    typical_property_names: Sequence[tuple[str, PublicationType]] = TYPICAL_PROPERTY_NAMES,
) -> PublicationType | None:
    """Guess the publication type of a description.

    Parameters
    ----------
    description : MetadataDescription
        Description without a publication type statement.
    completeness_indicators : Sequence[str], optional
        Properties that must all be set before a guess is attempted.
    typical_property_names : Sequence[tuple[str, PublicationType]], optional
        Ordered (property name, implied type) voting table.

    Returns
    -------
    PublicationType | None
        The type with the strictly highest number of indicator hits, or
        None if the description is too sparse, has no hits, or the highest
        count is shared by several types.

    Raises
    ------
    ValueError
        If the description already has a publication type.
    """
    if description.has_statement(PUBLICATION_TYPE_PROPERTY):
        raise ValueError(
            "Refusing to guess: description already has a publication type "
            f"({description.get_statement(PUBLICATION_TYPE_PROPERTY)!r})"
        )

    if not all(description.has_statement(name) for name in completeness_indicators):
        return None

    hits = count_type_indicators(description, typical_property_names)
    if not hits:
        return None

    highest = max(hits.values())
    leaders = [publication_type for publication_type, count in hits.items() if count == highest]
    if len(leaders) > 1:
        return None
    return leaders[0]
