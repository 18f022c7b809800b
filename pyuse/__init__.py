"""
pyuse - install packages on demand and import them at runtime.

Each package version is installed into its own aliased directory under a
shared global root, so several versions can coexist and a pinned version
that is already installed is never installed again.

Example usage:
    import pyuse

    six = await pyuse.use("six@1.16.0")
    yaml = pyuse.use_sync("PyYAML@6.0.1")
"""

__version__ = "0.1.0"

from pyuse.core import Use, use, use_sync
from pyuse.errors import (
    InstallError,
    LoadError,
    ParseError,
    ResolutionError,
    UseError,
)

__all__ = [
    "__version__",
    "InstallError",
    "LoadError",
    "ParseError",
    "ResolutionError",
    "Use",
    "UseError",
    "use",
    "use_sync",
]
