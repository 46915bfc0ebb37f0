"""Run identifiers and environment information for run manifests."""

import importlib.metadata
import platform
import secrets
import sys

from citefuse.utils import get_iso_timestamp

__all__ = [
    "generate_run_id",
    "get_dependency_versions",
    "get_package_version",
    "get_platform_info",
    "get_python_version",
]


def generate_run_id() -> str:
    """Generate a unique run identifier.

    Returns
    -------
    str
        Run ID in format ``<ISO8601 timestamp>__<8 hex chars>``.
    """
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"


def get_package_version() -> str:
    """Return the installed citefuse version or "unknown"."""
    try:
        return importlib.metadata.version("citefuse")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_python_version() -> str:
    """Return the interpreter version (e.g., "3.12.3")."""
    return sys.version.split()[0]


def get_platform_info() -> str:
    """Return "<system>-<release>-<machine>"."""
    return f"{platform.system()}-{platform.release()}-{platform.machine()}"


def get_dependency_versions(packages: list[str]) -> dict[str, str]:
    """Look up installed versions of packages.

    Parameters
    ----------
    packages : list[str]
        Distribution names.

    Returns
    -------
    dict[str, str]
        Name to version, "unknown" for packages that are not installed.
    """
    versions: dict[str, str] = {}
    for package in packages:
        try:
            versions[package] = importlib.metadata.version(package)
        except importlib.metadata.PackageNotFoundError:
            versions[package] = "unknown"
    return versions
