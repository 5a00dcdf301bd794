"""CLI module for build-scan-enricher.

Runs the enhancer against the current process and prints the facts a build
scan would receive. Nothing is published.
"""

from .main import build_config, cli, main, parse_key_values

__all__ = [
    "build_config",
    "cli",
    "main",
    "parse_key_values",
]
