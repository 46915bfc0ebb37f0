"""Batch engine for fusing files of candidate sets."""

from citefuse.engine.config import BatchConfig, BatchResult, FusionSummary
from citefuse.engine.runner import run_batch

__all__ = [
    "BatchConfig",
    "BatchResult",
    "FusionSummary",
    "run_batch",
]
