"""
Error taxonomy for pyuse.

Every failure in the use() pipeline is raised as one of these, with the
original cause chained via ``raise ... from ...``.
"""


class UseError(Exception):
    """Base exception for pyuse errors."""

    pass


class ParseError(UseError, ValueError):
    """Raised when a package identifier is empty or malformed."""

    pass


class InstallError(UseError):
    """Raised when the external installer fails or cannot be started."""

    pass


class ResolutionError(UseError):
    """Raised when no loadable entry point exists after installation."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class LoadError(UseError):
    """Raised when importing a resolved entry point fails."""

    def __init__(self, message: str, logical_path: str, resolved_path: str):
        super().__init__(message)
        self.logical_path = logical_path
        self.resolved_path = resolved_path


class CommandError(Exception):
    """Raised for an external command that exited with a nonzero status."""

    def __init__(self, args: list[str], exit_code: int, stderr: str = ""):
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"Command {' '.join(args)!r} exited with {exit_code}{detail}")
        self.command = args
        self.exit_code = exit_code
        self.stderr = stderr
