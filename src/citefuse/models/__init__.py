"""Data models for citation metadata and fused citations."""

from citefuse.models.records import (
    PUBLICATION_TYPE_PROPERTY,
    Citation,
    CitationState,
    FieldProvenance,
    MetadataDescription,
    PublicationType,
)

__all__ = [
    "PUBLICATION_TYPE_PROPERTY",
    "Citation",
    "CitationState",
    "FieldProvenance",
    "MetadataDescription",
    "PublicationType",
]
