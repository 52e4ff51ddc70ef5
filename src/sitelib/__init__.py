"""Core library for sitectl.

Icon loading, cursor file generation and the site metadata record, shared by
the CLI and by build scripts that import it directly.
"""

__all__ = [
    "build",
    "config",
    "cursors",
    "icons",
    "metadata",
]
