"""
Install Policy.

Decides whether the external installer has to run and runs it.

Key features:
- Pinned versions that already resolve are never reinstalled
- ``latest`` is always re-installed, since a cached copy may be stale
- Installer and global-root commands come from configurable argv templates
"""

import logging
from pathlib import Path

from pyuse.commands import CommandRunner, format_command
from pyuse.config import UseSettings
from pyuse.errors import CommandError, InstallError
from pyuse.specifier import LATEST, ParsedSpecifier

logger = logging.getLogger(__name__)

_OPERATOR_PREFIXES = ("=", "<", ">", "!", "~")


def needs_install(specifier: ParsedSpecifier, resolved: Path | None) -> bool:
    """
    Decide whether the installer must run.

    Args:
        specifier: Parsed package identifier
        resolved: Result of probing the aliased directory

    Returns:
        True if the version is unpinned or nothing resolved locally
    """
    return not specifier.pinned or resolved is None


def build_requirement(name: str, version: str) -> str:
    """
    Build the requirement string handed to the installer.

    Args:
        name: Package name
        version: Requested version

    Returns:
        ``name`` for latest, ``name<spec>`` for operator versions,
        ``name==version`` otherwise
    """
    if version == LATEST:
        return name
    if version.startswith(_OPERATOR_PREFIXES):
        return f"{name}{version}"
    return f"{name}=={version}"


class Installer:
    """
    Runs the external installer and global-root query.

    Example:
        installer = Installer(SubprocessRunner(), load_settings())
        root = await installer.global_root()
        await installer.ensure_installed("six", "1.16.0", "six-v1.16.0", root / "six-v1.16.0")
    """

    def __init__(self, runner: CommandRunner, settings: UseSettings):
        """
        Initialize Installer.

        Args:
            runner: Command runner used for every external command
            settings: Command templates and interpreter
        """
        self.runner = runner
        self.settings = settings

    async def global_root(self) -> Path:
        """
        Query the shared global install root.

        Returns:
            Root directory reported by the root command

        Raises:
            InstallError: If the command cannot run, fails, or prints nothing
        """
        args = format_command(self.settings.root_command, python=self.settings.python)

        try:
            result = await self.runner.run(args)
        except OSError as e:
            raise InstallError(f"Failed to query the global install root: {e}") from e

        if result.exit_code != 0:
            raise InstallError(
                "Failed to query the global install root."
            ) from CommandError(args, result.exit_code, result.stderr)

        root = result.stdout.strip()
        if not root:
            raise InstallError(f"Global install root command {args!r} printed nothing.")

        return Path(root)

    async def ensure_installed(
        self, name: str, version: str, alias: str, target: Path
    ) -> None:
        """
        Install a package version into its aliased directory.

        Args:
            name: Package name
            version: Requested version
            alias: Alias the version is installed under
            target: Aliased install directory

        Raises:
            InstallError: If the installer cannot start or exits nonzero
        """
        args = format_command(
            self.settings.install_command,
            python=self.settings.python,
            target=str(target),
            requirement=build_requirement(name, version),
            alias=alias,
            name=name,
            version=version,
        )
        logger.debug("Installing %s@%s as %s", name, version, alias)

        try:
            result = await self.runner.run(args)
        except OSError as e:
            raise InstallError(f"Failed to install {name}@{version} globally.") from e

        if result.exit_code != 0:
            raise InstallError(
                f"Failed to install {name}@{version} globally."
            ) from CommandError(args, result.exit_code, result.stderr)
