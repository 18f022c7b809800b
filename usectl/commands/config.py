"""
usectl config command (-C).

Write a commented configuration file holding the defaults.
"""

import sys
from pathlib import Path
from typing import Any

from pyuse.config import write_default_config


def init_config_command(args: Any) -> int:
    """
    Execute config command.

    Args:
        args: Parsed command-line arguments; the first target, if any, is
            the file to write

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if len(args.targets) > 1:
        print("Error: Expected at most one config path", file=sys.stderr)
        return 1

    path = Path(args.targets[0]).expanduser() if args.targets else None
    written = write_default_config(path)
    print(f"Wrote {written}")

    return 0
