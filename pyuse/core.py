"""
use() - install a package on demand and import it.

Pipeline: parse the identifier, build the alias, probe the aliased
directory, install when the policy asks for it, probe again, then load.
Nothing is kept in memory between calls: settings and the global root are
read fresh every time.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any

from pyuse.alias import build_alias, module_name_for
from pyuse.commands import CommandRunner, SubprocessRunner
from pyuse.config import UseSettings, load_settings
from pyuse.errors import ResolutionError
from pyuse.installer import Installer, needs_install
from pyuse.loader import ModuleLoader, import_path, load
from pyuse.probe import probe
from pyuse.specifier import parse

logger = logging.getLogger(__name__)


class Use:
    """
    The use() operation with its collaborators injected.

    Example:
        use = Use(runner=SubprocessRunner())
        six = await use("six@1.16.0")
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        loader: ModuleLoader | None = None,
        settings: UseSettings | None = None,
    ):
        """
        Initialize Use.

        Args:
            runner: Runs the installer and root query; defaults to subprocesses
            loader: Import primitive; defaults to import_path
            settings: Command settings; loaded from the config file when None
        """
        self.runner = runner or SubprocessRunner()
        self.loader = loader or import_path
        self.settings = settings

    async def __call__(self, identifier: str) -> Any:
        """
        Ensure a package is installed, then import it.

        Args:
            identifier: ``name[@version][/sub/path]``

        Returns:
            The package's exported interface

        Raises:
            ParseError: If the identifier is malformed
            InstallError: If the installer fails
            ResolutionError: If no entry point exists after installing
            LoadError: If importing the entry point fails
        """
        specifier = parse(identifier)
        alias = build_alias(specifier.name, specifier.version)

        installer = Installer(self.runner, self.settings or load_settings())
        root = await installer.global_root()
        package_dir = (root / alias).absolute()
        logical_path = Path(f"{package_dir}{specifier.sub_path}")

        resolved = probe(package_dir, specifier.name, specifier.sub_path)

        if needs_install(specifier, resolved):
            await installer.ensure_installed(
                specifier.name, specifier.version, alias, package_dir
            )
            resolved = probe(package_dir, specifier.name, specifier.sub_path)
            if resolved is None:
                raise ResolutionError(
                    f"Installed {specifier.name}@{specifier.version} but found no "
                    f"loadable entry point at '{logical_path}'.",
                    path=str(logical_path),
                )
        else:
            logger.debug("%s already resolves to %s, skipping install", specifier, resolved)

        return load(
            resolved,
            logical_path,
            package_dir,
            module_name_for(alias),
            loader=self.loader,
            package=f"{specifier.name}@{specifier.version}",
        )


async def use(
    identifier: str,
    *,
    runner: CommandRunner | None = None,
    loader: ModuleLoader | None = None,
    settings: UseSettings | None = None,
) -> Any:
    """
    Install a package on demand and return its exported interface.

    Example:
        six = await use("six@1.16.0")
    """
    return await Use(runner=runner, loader=loader, settings=settings)(identifier)


def use_sync(identifier: str, **kwargs: Any) -> Any:
    """Run use() to completion from synchronous code."""
    return asyncio.run(use(identifier, **kwargs))
