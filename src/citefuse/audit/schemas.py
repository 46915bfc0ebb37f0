"""JSON schemas for audit events and run manifests."""

from typing import Any

__all__ = ["LOG_EVENT_SCHEMA", "RUN_MANIFEST_SCHEMA"]

LOG_EVENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "citefuse log event",
    "type": "object",
    "required": ["ts", "run_id", "level", "event", "data"],
    "properties": {
        "ts": {"type": "string"},
        "run_id": {"type": "string", "minLength": 1},
        "level": {"enum": ["DEBUG", "INFO", "WARN", "ERROR"]},
        "event": {"type": "string", "minLength": 1},
        "data": {"type": "object"},
        "stage": {"type": ["string", "null"]},
        "rid": {"type": ["string", "null"]},
    },
    "additionalProperties": False,
}

RUN_MANIFEST_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "citefuse run manifest",
    "type": "object",
    "required": [
        "manifest_version",
        "run_id",
        "created_at",
        "status",
        "command",
        "environment",
        "parameters",
        "inputs",
        "stages",
        "artifacts",
        "errors",
    ],
    "properties": {
        "manifest_version": {"type": "string"},
        "run_id": {"type": "string", "minLength": 1},
        "created_at": {"type": "string"},
        "status": {"enum": ["success", "failed", "partial"]},
        "command": {
            "type": "object",
            "required": ["argv"],
            "properties": {
                "argv": {"type": "array", "items": {"type": "string"}},
                "cwd": {"type": ["string", "null"]},
            },
        },
        "environment": {
            "type": "object",
            "required": ["python_version", "platform", "package_version"],
        },
        "parameters": {"type": "object"},
        "inputs": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "bytes", "sha256", "candidate_sets"],
            },
        },
        "stages": {
            "type": "array",
            "items": {"type": "object", "required": ["name", "started_at", "counters"]},
        },
        "artifacts": {
            "type": "array",
            "items": {"type": "object", "required": ["path", "sha256"]},
        },
        "errors": {"type": "array"},
        "finished_at": {"type": ["string", "null"]},
        "duration_seconds": {"type": ["number", "null"]},
    },
}
