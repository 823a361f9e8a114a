from __future__ import annotations

import importlib.metadata


def get_version_string() -> str:
    """Installed distribution version, or the package version when running from a checkout."""
    try:
        return importlib.metadata.version("tedit")
    except importlib.metadata.PackageNotFoundError:
        from . import __version__
        return __version__
