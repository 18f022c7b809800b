"""
Alias Builder.

Derives the directory name a package version is installed under, so that
several versions of one package, and scoped and unscoped packages sharing a
base name, can sit side by side under the global install root.
"""

import re


def build_alias(name: str, version: str) -> str:
    """
    Build the install alias for a package version.

    Args:
        name: Package name, optionally scoped (``@scope/pkg``)
        version: Version string

    Returns:
        Alias such as ``scope-pkg-v1.0.0``

    Raises:
        ValueError: If the alias would not be a single path segment
    """
    alias = f"{name.removeprefix('@').replace('/', '-', 1)}-v{version}"

    if "@" in alias or "/" in alias:
        raise ValueError(f"Cannot build a path-safe alias from {name!r} and {version!r}")

    return alias


def module_name_for(alias: str) -> str:
    """Module name an aliased package is imported under."""
    return "pyuse_" + re.sub(r"\W", "_", alias)
