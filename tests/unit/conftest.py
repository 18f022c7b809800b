"""
Shared fixtures for pyuse tests.

FakeRunner stands in for the installer process: the root command prints a
temporary global root and the install command writes a package into the
``--target`` directory.
"""

import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from pyuse import loader
from pyuse.commands import CommandResult
from pyuse.config import UseSettings


def make_package(
    package_dir: Path,
    dist_name: str,
    version: str,
    files: dict[str, str],
    top_level: list[str] | None = None,
) -> Path:
    """
    Lay out an installed distribution the way pip --target does.

    Args:
        package_dir: Aliased install directory
        dist_name: Distribution name written to METADATA
        version: Distribution version
        files: Relative path -> source text
        top_level: Lines of top_level.txt; omitted when None

    Returns:
        The dist-info directory
    """
    dist_info = package_dir / f"{dist_name.replace('-', '_')}-{version}.dist-info"
    dist_info.mkdir(parents=True, exist_ok=True)
    (dist_info / "METADATA").write_text(
        f"Metadata-Version: 2.1\nName: {dist_name}\nVersion: {version}\n"
    )
    if top_level is not None:
        (dist_info / "top_level.txt").write_text("\n".join(top_level) + "\n")

    record = [f"{path},," for path in files]
    record.append(f"{dist_info.name}/METADATA,,")
    (dist_info / "RECORD").write_text("\n".join(record) + "\n")

    for relative, source in files.items():
        path = package_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source)

    return dist_info


class FakeRunner:
    """CommandRunner double that records every command."""

    def __init__(self, root: Path, install: Callable[[Path, str], int] | None = None):
        self.root = root
        self.install = install or (lambda target, requirement: 0)
        self.calls: list[list[str]] = []
        self.installs: list[list[str]] = []

    async def run(self, args: Sequence[str]) -> CommandResult:
        args = list(args)
        self.calls.append(args)

        if args[0] == "root":
            return CommandResult(stdout=f"  {self.root}\n", stderr="", exit_code=0)

        self.installs.append(args)
        target = Path(args[args.index("--target") + 1])
        exit_code = self.install(target, args[-1])
        stderr = "" if exit_code == 0 else "ERROR: No matching distribution found"
        return CommandResult(stdout="", stderr=stderr, exit_code=exit_code)


@pytest.fixture
def settings() -> UseSettings:
    """Settings whose commands FakeRunner understands."""
    return UseSettings(
        python="python",
        install_command="pip install --target {target} {requirement}",
        root_command="root",
    )


@pytest.fixture
def global_root(tmp_path) -> Path:
    root = tmp_path / "global root"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def isolated_imports(monkeypatch, tmp_path):
    """Undo sys.path and sys.modules changes made by loaded packages."""
    monkeypatch.setattr(sys, "path", list(sys.path))
    monkeypatch.setattr(loader, "_alias_roots", set())
    before = set(sys.modules)
    yield
    for name in set(sys.modules) - before:
        origin = getattr(sys.modules[name], "__file__", None) or ""
        if name.startswith("pyuse_") or origin.startswith(str(tmp_path)):
            del sys.modules[name]
