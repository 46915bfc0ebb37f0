"""Shared helpers for citefuse: hashing and timestamps."""

from citefuse.utils.hashing import calculate_file_sha256
from citefuse.utils.timestamps import get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "calculate_file_sha256",
]
