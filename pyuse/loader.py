"""
Dynamic Package Loader.

This module imports a resolved entry point and normalizes what it exports.

Key features:
- importlib integration, one module name per alias so versions don't clash
- Only the alias being loaded is on sys.path; modules it shadows are re-imported from it
- Sub-modules imported through their parent package, so relative imports work
- Unwrapping of modules whose only export is ``default``
- sys.modules clean-up on failure
"""

import importlib
import importlib.machinery
import importlib.util
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol

from pyuse.errors import LoadError

logger = logging.getLogger(__name__)

# sys.path entries added for alias directories
_alias_roots: set[str] = set()


class ModuleLoader(Protocol):
    """Imports the module at a resolved path."""

    def __call__(self, resolved_path: Path, root: Path, module_name: str) -> Any: ...


def import_path(resolved_path: Path, root: Path, module_name: str) -> ModuleType:
    """
    Import a module from an aliased install directory.

    The top-level module or package is registered as ``module_name``; a
    deeper entry point is then imported as a sub-module of it.

    Args:
        resolved_path: Entry file inside ``root``
        root: Aliased install directory
        module_name: Name to register the top-level module under

    Returns:
        Imported module

    Raises:
        ImportError: If the entry point cannot be turned into a module spec
        Exception: Whatever the module raises while executing
    """
    parts = resolved_path.relative_to(root).parts

    for name in [name for name in sys.modules if name.startswith(module_name + ".")]:
        del sys.modules[name]

    _activate(root)

    added: list[str] = []
    try:
        if len(parts) == 1:
            return _exec_file(module_name, resolved_path, added)

        top_dir = root / parts[0]
        top_init = top_dir / "__init__.py"
        if top_init.is_file():
            package = _exec_file(module_name, top_init, added, package_dir=top_dir)
        else:
            package = _namespace(module_name, top_dir, added)

        dotted = list(parts[1:-1])
        if resolved_path.name != "__init__.py":
            dotted.append(resolved_path.stem)
        if not dotted:
            return package

        before = set(sys.modules)
        try:
            return importlib.import_module(".".join([module_name, *dotted]))
        finally:
            added.extend(set(sys.modules) - before)
    except BaseException:
        for name in added:
            sys.modules.pop(name, None)
        raise


def _activate(root: Path) -> None:
    """
    Put an alias directory first on sys.path in place of earlier ones.

    Absolute imports made by the package and its dependencies then resolve
    inside ``root``. Cached modules under the names ``root`` provides are
    evicted so they are executed again from this alias rather than served
    from another version, or from a stale copy of this one.
    """
    current = str(root)
    sys.path[:] = [entry for entry in sys.path if entry not in _alias_roots]
    sys.path.insert(0, current)
    _alias_roots.add(current)

    shadowed = _top_level_names(root)
    for name in [name for name in sys.modules if name.partition(".")[0] in shadowed]:
        del sys.modules[name]

    if shadowed:
        logger.debug("Evicted cached modules shadowed by %s: %s", root, sorted(shadowed))


def _top_level_names(root: Path) -> set[str]:
    """Importable top-level names inside an alias directory."""
    suffixes = tuple(importlib.machinery.all_suffixes())
    names = set()

    for entry in root.iterdir():
        if entry.is_dir():
            if entry.name.isidentifier() and entry.name != "__pycache__":
                names.add(entry.name)
        elif entry.name.endswith(suffixes):
            names.add(entry.name.partition(".")[0])

    return names


def _exec_file(
    module_name: str, path: Path, added: list[str], package_dir: Path | None = None
) -> ModuleType:
    locations = [str(package_dir)] if package_dir is not None else None
    spec = importlib.util.spec_from_file_location(
        module_name, path, submodule_search_locations=locations
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"Failed to create module spec for {path}")

    module = importlib.util.module_from_spec(spec)

    # Registered before execution so the module can import itself
    sys.modules[module_name] = module
    added.append(module_name)
    spec.loader.exec_module(module)

    return module


def _namespace(module_name: str, package_dir: Path, added: list[str]) -> ModuleType:
    spec = importlib.machinery.ModuleSpec(module_name, None, is_package=True)
    spec.submodule_search_locations = [str(package_dir)]
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    added.append(module_name)
    return module


def exported_names(module: Any) -> set[str]:
    """
    Names a loaded module exports.

    Mapping keys for mappings, ``__all__`` when declared, otherwise every
    attribute not starting with an underscore.
    """
    if isinstance(module, Mapping):
        return set(module)

    declared = getattr(module, "__all__", None)
    if declared is not None:
        return set(declared)

    return {name for name in getattr(module, "__dict__", {}) if not name.startswith("_")}


def normalize(module: Any) -> Any:
    """
    Unwrap a module whose only export is ``default``.

    Args:
        module: Loaded module, mapping or namespace

    Returns:
        The ``default`` value, or the module itself when it exports anything
        else or ``default`` is None
    """
    if exported_names(module) != {"default"}:
        return module

    value = module["default"] if isinstance(module, Mapping) else getattr(module, "default")
    return module if value is None else value


def load(
    resolved_path: Path,
    logical_path: Path,
    root: Path,
    module_name: str,
    loader: ModuleLoader = import_path,
    package: str | None = None,
) -> Any:
    """
    Import a resolved entry point and normalize its exports.

    Args:
        resolved_path: Concrete entry file
        logical_path: Aliased package path the entry was resolved from
        root: Aliased install directory
        module_name: Name to register the module under
        loader: Import primitive
        package: ``name@version`` named in the error message

    Returns:
        Normalized module

    Raises:
        LoadError: If importing fails
    """
    logger.debug("Loading %s as %s", resolved_path, module_name)

    try:
        module = loader(resolved_path, root, module_name)
    except Exception as e:
        target = f"{package} from '{logical_path}'" if package else f"'{logical_path}'"
        raise LoadError(
            f"Failed to import {target} resolved as '{resolved_path}'.",
            logical_path=str(logical_path),
            resolved_path=str(resolved_path),
        ) from e

    return normalize(module)
