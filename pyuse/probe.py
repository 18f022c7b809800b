"""
Resolution Prober.

Checks whether an aliased package directory holds a loadable entry point
for the requested sub-path. Read-only.

The entry point is found through the distribution metadata pip writes next
to the package in its ``.dist-info`` directory: ``top_level.txt`` when
present, otherwise the top-level names listed in ``RECORD``. Metadata files
that exist but cannot be read raise instead of counting as absent.
"""

import importlib.metadata
import logging
import stat
from pathlib import Path

from packaging.utils import canonicalize_name

logger = logging.getLogger(__name__)

_NOT_FOUND = (FileNotFoundError, NotADirectoryError)

_METADATA_FILES = ("METADATA", "top_level.txt", "RECORD")


def probe(package_dir: Path, name: str, sub_path: str = "") -> Path | None:
    """
    Resolve the entry point of an installed package.

    Args:
        package_dir: Aliased install directory
        name: Package name as requested (scope allowed)
        sub_path: Module path inside the package, e.g. ``/lib/index``

    Returns:
        Absolute path of the entry file, or None if unresolved

    Raises:
        OSError: For filesystem errors other than "not found"
    """
    if not _is_dir(package_dir):
        logger.debug("Package directory %s does not exist", package_dir)
        return None

    top_level = _find_top_level(package_dir, name)
    if top_level is None:
        logger.debug("No distribution metadata for %s in %s", name, package_dir)
        return None

    segments = [part for part in sub_path.split("/") if part]
    base = package_dir.joinpath(top_level, *segments)

    candidates = [base.with_name(base.name + ".py"), base / "__init__.py"]
    if base.suffix == ".py":
        candidates.append(base)

    for candidate in candidates:
        if _is_file(candidate):
            return candidate.absolute()

    logger.debug("No entry file for %s%s under %s", name, sub_path, package_dir)
    return None


def _find_top_level(package_dir: Path, name: str) -> str | None:
    """
    Find the top-level import name declared by a package's distribution.

    Args:
        package_dir: Aliased install directory
        name: Package name as requested

    Returns:
        Top-level module or package name, or None if undeclared
    """
    wanted = canonicalize_name(name.rsplit("/", 1)[-1])

    for dist_info in sorted(package_dir.iterdir()):
        if not dist_info.name.endswith(".dist-info") or not _is_file(dist_info / "METADATA"):
            continue

        # importlib.metadata reads unreadable files as missing ones
        for filename in _METADATA_FILES:
            _check_readable(dist_info / filename)

        dist = importlib.metadata.Distribution.at(dist_info)
        dist_name = dist.metadata.get("Name")
        if not dist_name or canonicalize_name(dist_name) != wanted:
            continue

        names = _declared_top_levels(dist)
        if not names:
            return None

        preferred = wanted.replace("-", "_")
        for top in names:
            if top.lower() == preferred:
                return top
        return sorted(names, key=lambda top: (top.startswith("_"), top))[0]

    return None


def _declared_top_levels(dist: importlib.metadata.Distribution) -> list[str]:
    """Top-level names from top_level.txt, falling back to RECORD."""
    text = dist.read_text("top_level.txt")
    if text:
        return [line.strip() for line in text.splitlines() if line.strip()]

    names = set()
    for file in dist.files or []:
        parts = file.parts
        if not parts or parts[0].endswith((".dist-info", ".data")) or parts[0] == "..":
            continue
        if parts[0] == "__pycache__":
            continue
        if not parts[-1].endswith(".py"):
            continue
        names.add(parts[0][:-3] if len(parts) == 1 else parts[0])
    return sorted(names)


def _is_dir(path: Path) -> bool:
    try:
        return stat.S_ISDIR(path.stat().st_mode)
    except _NOT_FOUND:
        return False


def _is_file(path: Path) -> bool:
    try:
        return stat.S_ISREG(path.stat().st_mode)
    except _NOT_FOUND:
        return False


def _check_readable(path: Path) -> None:
    try:
        path.open("rb").close()
    except _NOT_FOUND:
        pass
