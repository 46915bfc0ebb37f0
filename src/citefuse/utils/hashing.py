"""SHA-256 helpers for run inputs and artifacts."""

import hashlib
from pathlib import Path

__all__ = ["calculate_file_sha256"]


def calculate_file_sha256(path: Path) -> str:
    """Hash a file in chunks.

    Parameters
    ----------
    path : Path
        File to hash.

    Returns
    -------
    str
        Digest with "sha256:" prefix.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256_hash = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256_hash.update(chunk)

    return f"sha256:{sha256_hash.hexdigest()}"
