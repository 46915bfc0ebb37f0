"""Audit logging and run manifests for citefuse batch runs.

Main Components
---------------
- RunContext: run lifecycle, writes ``events.jsonl`` and ``run.json``
- AuditLogger: JSONL event logger accepted by library calls
"""

from citefuse.audit.context import RunContext
from citefuse.audit.helpers import generate_run_id
from citefuse.audit.logger import AuditLogger
from citefuse.audit.schemas import LOG_EVENT_SCHEMA, RUN_MANIFEST_SCHEMA

__all__ = [
    "LOG_EVENT_SCHEMA",
    "RUN_MANIFEST_SCHEMA",
    "AuditLogger",
    "RunContext",
    "generate_run_id",
]
