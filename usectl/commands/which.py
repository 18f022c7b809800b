"""
usectl which (-W) and alias (-A) commands.

Inspect identifiers and aliased installs without installing anything.
"""

import asyncio
import sys
from typing import Any

from pyuse.alias import build_alias
from pyuse.commands import CommandRunner, SubprocessRunner
from pyuse.config import load_settings
from pyuse.installer import Installer
from pyuse.probe import probe
from pyuse.specifier import parse


def alias_command(args: Any) -> int:
    """
    Print the parsed identifier and alias of each target.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)

    Raises:
        ParseError: If a target is malformed
    """
    if not args.targets:
        print("Error: No targets specified", file=sys.stderr)
        return 1

    for target in args.targets:
        specifier = parse(target)
        alias = build_alias(specifier.name, specifier.version)
        print(
            f"{target}: name={specifier.name} version={specifier.version} "
            f"sub_path={specifier.sub_path or '-'} alias={alias}"
        )

    return 0


def which_command(args: Any) -> int:
    """
    Print where each target resolves under the global install root.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 when every target resolves, 1 otherwise)
    """
    if not args.targets:
        print("Error: No targets specified", file=sys.stderr)
        return 1

    return asyncio.run(which_async(args))


async def which_async(args: Any, runner: CommandRunner | None = None) -> int:
    installer = Installer(runner or SubprocessRunner(), load_settings())
    root = await installer.global_root()
    missing = 0

    for target in args.targets:
        specifier = parse(target)
        package_dir = root / build_alias(specifier.name, specifier.version)
        resolved = probe(package_dir, specifier.name, specifier.sub_path)

        if resolved is None:
            missing += 1
            print(f"{target}: {package_dir} (not installed)")
        else:
            print(f"{target}: {resolved}")

    return 0 if missing == 0 else 1
