"""
External Command Execution.

This module runs the installer and the global-root query as child processes.

Key features:
- CommandRunner protocol so tests can substitute a stub runner
- asyncio subprocess implementation with captured output
- argv templates formatted token by token, so paths with spaces survive
"""

import asyncio
import logging
import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of an external command.

    Attributes:
        stdout: Decoded standard output
        stderr: Decoded standard error
        exit_code: Process exit status
    """

    stdout: str
    stderr: str
    exit_code: int


class CommandRunner(Protocol):
    """Runs an external command and waits for it to finish."""

    async def run(self, args: Sequence[str]) -> CommandResult: ...


class SubprocessRunner:
    """
    CommandRunner backed by asyncio child processes.

    Output is captured rather than shown. No timeout is applied: the caller
    waits until the process exits. Spawn failures surface as OSError.
    """

    async def run(self, args: Sequence[str]) -> CommandResult:
        logger.debug("Running %s", shlex.join(args))

        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await process.communicate()

        return CommandResult(
            stdout=stdout.decode(errors="replace"),
            stderr=stderr.decode(errors="replace"),
            exit_code=process.returncode if process.returncode is not None else -1,
        )


def format_command(template: str, **values: str) -> list[str]:
    """
    Expand an argv template.

    Args:
        template: Shell-style command line with ``{placeholder}`` fields
        **values: Placeholder values

    Returns:
        Argument list ready for execution

    Raises:
        KeyError: If the template names an unknown placeholder
    """
    return [token.format(**values) for token in shlex.split(template)]
