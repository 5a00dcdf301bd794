"""build-scan-enricher: CI, IDE and git metadata for build scans."""

from .enhancer import BuildScanEnhancer, configure_build_scan
from .environment import Environment
from .facts import Link, RecordingSink, Tag, Value


def _get_version() -> str:
    """Get package version with fallback mechanisms."""
    # Method 1: Try importlib.metadata (preferred for installed packages)
    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("build-scan-enricher")
    except PackageNotFoundError:
        pass

    # Method 2: Try reading from pyproject.toml directly
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("tool", {}).get("poetry", {}).get("version", "unknown")
    except (OSError, ValueError):
        pass

    return "unknown"


__version__ = _get_version()

__all__ = [
    "BuildScanEnhancer",
    "Environment",
    "Link",
    "RecordingSink",
    "Tag",
    "Value",
    "configure_build_scan",
    "__version__",
]
