"""
usectl CLI - install-on-demand package loader.

Pacman-style interface over pyuse.

Usage:
    usectl -L <package>[@version][/sub/path]...   Install if needed and load
    usectl -W <package>[@version][/sub/path]...   Show where a package resolves
    usectl -A <package>[@version][/sub/path]...   Show parsed identifier and alias
    usectl -C [path]                              Write default config file
"""

import argparse
import logging
import sys

from pyuse.config import ConfigError
from pyuse.errors import UseError


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with pacman-style flags."""
    parser = argparse.ArgumentParser(
        prog="usectl",
        description="usectl - install packages on demand and load them",
        add_help=False,
    )

    ops = parser.add_mutually_exclusive_group()
    ops.add_argument("-L", "--load", action="store_true", help="Install if needed and load")
    ops.add_argument("-W", "--which", action="store_true", help="Show resolved entry point")
    ops.add_argument("-A", "--alias", action="store_true", help="Show parsed identifier")
    ops.add_argument("-C", "--init-config", action="store_true", help="Write config file")
    ops.add_argument("-h", "--help", action="store_true", help="Show help")

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("targets", nargs="*", help="Package identifiers or config path")

    return parser


def print_help():
    """Print help message."""
    help_text = """
usectl - install packages on demand and load them

Usage:
    usectl -L <package>[@version][/sub/path]...   Install if needed and load
    usectl -W <package>[@version][/sub/path]...   Show where a package resolves
    usectl -A <package>[@version][/sub/path]...   Show parsed identifier and alias
    usectl -C [path]                              Write default config file

Options:
    -v, --verbose                Verbose output
    -h, --help                   Show this help
"""
    print(help_text.strip())


def main(argv: list[str] | None = None) -> int:
    """Main entry point for usectl CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        if args.help or not (args.load or args.which or args.alias or args.init_config):
            print_help()
            return 0

        if args.load:
            from usectl.commands.load import load_command

            return load_command(args)

        elif args.which:
            from usectl.commands.which import which_command

            return which_command(args)

        elif args.alias:
            from usectl.commands.which import alias_command

            return alias_command(args)

        elif args.init_config:
            from usectl.commands.config import init_config_command

            return init_config_command(args)

    except (UseError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
