"""Tests for publication type guessing."""

from collections.abc import Callable

import pytest

from citefuse.fusion.type_guess import (
    COMPLETENESS_INDICATORS,
    count_type_indicators,
    guess_publication_type,
)
from citefuse.models import MetadataDescription, PublicationType

EDITORS = 'person-group[@person-group-type="editor"]'

# ---------------------------------------------------------------------------
# Completeness gate
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize("missing", COMPLETENESS_INDICATORS)
def test_sparse_description_is_not_guessed(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
    missing: str,
) -> None:
    """Any missing gate property prevents a guess, whatever the indicators say."""
    statements = {
        **guessable_statements,
        "volume": "1",
        "issue": "2",
        "season": "Spring",
        'pub-id[@pub-id-type="pmid"]': "123",
    }
    del statements[missing]

    assert guess_publication_type(make_description(statements)) is None


@pytest.mark.unit
def test_existing_publication_type_raises(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
) -> None:
    """The guesser never overwrites an existing publication type."""
    description = make_description({**guessable_statements, "[@publication-type]": "book"})

    with pytest.raises(ValueError, match="already has a publication type"):
        guess_publication_type(description)


# ---------------------------------------------------------------------------
# Voting
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_editor_gate_counts_as_book_indicator(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
) -> None:
    """The editor group is both a gate property and a book indicator."""
    hits = count_type_indicators(make_description(guessable_statements))

    assert hits == {PublicationType.BOOK: 1}
    assert guess_publication_type(make_description(guessable_statements)) == PublicationType.BOOK


@pytest.mark.unit
@pytest.mark.parametrize(
    ("indicators", "expected"),
    [
        pytest.param({"volume": "3", "issue": "1"}, PublicationType.JOURNAL, id="journal"),
        pytest.param(
            {"isbn": "978-3-16", "publisher-name": "Springer"},
            PublicationType.BOOK,
            id="book",
        ),
        pytest.param(
            {"conf-name": "JCDL", "conf-loc": "Vancouver"},
            PublicationType.CONFERENCE_PROCEEDINGS,
            id="conference",
        ),
        pytest.param(
            {"volume": "3", "issue": "1", "season": "Fall", "isbn": "978"},
            PublicationType.JOURNAL,
            id="journal_outvotes_book",
        ),
    ],
)
def test_unambiguous_indicators_win(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
    indicators: dict,
    expected: PublicationType,
) -> None:
    """The type with strictly the most indicator hits is returned."""
    description = make_description({**guessable_statements, **indicators})

    assert guess_publication_type(description) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "indicators",
    [
        pytest.param({"volume": "3"}, id="journal_ties_book"),
        pytest.param({"conf-name": "JCDL"}, id="conference_ties_book"),
        pytest.param(
            {"volume": "3", "issue": "1", "conf-name": "X", "conf-loc": "Y"},
            id="journal_ties_conference",
        ),
    ],
)
def test_tied_indicators_yield_no_guess(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
    indicators: dict,
) -> None:
    """Two types sharing the highest count produce no guess."""
    description = make_description({**guessable_statements, **indicators})

    assert guess_publication_type(description) is None


@pytest.mark.unit
def test_indicators_checked_by_property_name(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
) -> None:
    """A statement named after a type tag is not an indicator."""
    description = make_description({**guessable_statements, "journal": "x", "conf-proc": "y"})

    assert count_type_indicators(description) == {PublicationType.BOOK: 1}


@pytest.mark.unit
def test_no_hits_yield_no_guess(
    make_description: Callable[..., MetadataDescription],
) -> None:
    """Without any indicator hit there is nothing to guess."""
    description = make_description({EDITORS: [], "article-title": "T", "date": "2001"})

    assert guess_publication_type(description, typical_property_names=()) is None


@pytest.mark.unit
def test_guess_does_not_mutate_input(
    make_description: Callable[..., MetadataDescription],
    guessable_statements: dict,
) -> None:
    """Guessing leaves the description untouched."""
    description = make_description(guessable_statements)
    before = description.statements()

    guess_publication_type(description)

    assert description.statements() == before
