"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from citefuse.models import MetadataDescription  # noqa: E402

AUTHORS = 'person-group[@person-group-type="author"]'
EDITORS = 'person-group[@person-group-type="editor"]'
PUB_TYPE = "[@publication-type]"

_AUTHOR_LIST = [{"surname": "Willinsky", "given-names": "John"}]


@pytest.fixture
def make_description() -> Callable[..., MetadataDescription]:
    """Factory for descriptions from keyword-free statement dicts.

    Statement names contain characters that are not valid identifiers, so
    statements are passed as a dict; ``source`` labels the service.
    """

    def _factory(
        statements: dict[str, Any] | None = None,
        source: str | None = "test",
    ) -> MetadataDescription:
        return MetadataDescription(statements or {}, source=source)

    return _factory


@pytest.fixture
def full_journal_statements() -> dict[str, Any]:
    """Statements that satisfy every expected property (score 100)."""
    return {
        AUTHORS: _AUTHOR_LIST,
        "article-title": "The Access Principle",
        "source": "Journal of Open Scholarship",
        "date": "2006",
        "fpage": "12",
        PUB_TYPE: "journal",
        "volume": "3",
        "issue": "1",
    }


@pytest.fixture
def guessable_statements() -> dict[str, Any]:
    """Statements passing the completeness gate, without publication type."""
    return {
        EDITORS: [{"surname": "Smith"}],
        "article-title": "A Chapter",
        "date": "2010",
    }
