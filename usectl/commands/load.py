"""
usectl load command (-L).

Install packages when needed and load them, printing what they export.
"""

import asyncio
import sys
from collections.abc import Mapping
from types import ModuleType
from typing import Any

from pyuse.core import Use
from pyuse.errors import UseError
from pyuse.loader import exported_names


def load_command(args: Any) -> int:
    """
    Execute load command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if not args.targets:
        print("Error: No targets specified", file=sys.stderr)
        print("Usage: usectl -L <package>[@version]", file=sys.stderr)
        return 1

    return asyncio.run(load_async(args))


async def load_async(args: Any, use: Use | None = None) -> int:
    """Load every target in turn, continuing past failures."""
    use = use or Use()
    fail_count = 0

    for target in args.targets:
        try:
            module = await use(target)
        except UseError as e:
            print(f"Failed to load {target}: {e}", file=sys.stderr)
            if args.verbose and e.__cause__ is not None:
                print(f"  caused by: {e.__cause__}", file=sys.stderr)
            fail_count += 1
            continue

        print(f"{target}: {describe(module)}")

    if args.verbose:
        print(f"\nLoaded: {len(args.targets) - fail_count}, Failed: {fail_count}")

    return 0 if fail_count == 0 else 1


def describe(module: Any) -> str:
    """One-line summary of a loaded module or unwrapped value."""
    names = exported_names(module)
    if isinstance(module, (ModuleType, Mapping)):
        return ", ".join(sorted(names)) if names else "(no exports)"
    return repr(module)
