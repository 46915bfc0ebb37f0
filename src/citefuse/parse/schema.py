"""JSON schema for candidate sets on disk."""

from typing import Any

__all__ = ["CANDIDATE_SET_SCHEMA"]

CANDIDATE_SET_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "citefuse candidate set",
    "type": "object",
    "required": ["citation_id", "candidates"],
    "properties": {
        "citation_id": {"type": "string", "minLength": 1},
        "candidates": {
            "type": "array",
            "minItems": 1,
            "items": {
                "oneOf": [
                    {"type": "null"},
                    {
                        "type": "object",
                        "required": ["statements"],
                        "properties": {
                            "source": {"type": ["string", "null"]},
                            "statements": {
                                "type": "object",
                                "propertyNames": {"minLength": 1},
                            },
                        },
                        "additionalProperties": False,
                    },
                ]
            },
        },
    },
    "additionalProperties": True,
}
