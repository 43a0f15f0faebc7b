"""Version information for taskboard.

Base version comes from the installed distribution metadata (written by
hatchling at build time).
"""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version


@lru_cache(maxsize=1)
def get_version() -> str:
    """Get the installed version string, or ``0.0.0`` for a source checkout."""
    try:
        return pkg_version("taskboard")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = get_version()
