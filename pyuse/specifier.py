"""
Package Identifier Parser.

This module turns a raw identifier such as ``"lodash@4.17.21"`` or
``"@scope/pkg@1.0.0/lib/index"`` into its name, version and sub-path.

Grammar:
- optional scope segment: ``@scope/``
- name segment: no ``@``, ``/`` or whitespace
- optional version: ``@`` followed by a token without ``/`` or ``@``
- optional sub-path: ``/`` followed by anything, ``@`` included

The version divider is the last ``@`` after the scope prefix and before the
first following ``/``. Without one the version is ``"latest"``.
"""

import re
from dataclasses import dataclass
from typing import Any

from pyuse.errors import ParseError

LATEST = "latest"

EXAMPLES = "'lodash@4.17.21' or '@konard/use@1.0.0'"

_IDENTIFIER_RE = re.compile(
    r"""
    ^
    (?P<name>(?:@[^@/\s]+/)?[^@/\s]+)
    (?:@(?P<version>[^@/\s]+))?
    (?P<sub_path>/\S*)?
    $
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class ParsedSpecifier:
    """
    A parsed package identifier.

    Attributes:
        name: Package name, possibly with a leading ``@scope/``
        version: Requested version, ``"latest"`` when omitted
        sub_path: Module path inside the package, ``""`` or starting with ``/``
    """

    name: str
    version: str = LATEST
    sub_path: str = ""

    @property
    def pinned(self) -> bool:
        """True for any version other than the ``latest`` marker."""
        return self.version != LATEST

    def __str__(self) -> str:
        return f"{self.name}@{self.version}{self.sub_path}"


def parse(identifier: Any) -> ParsedSpecifier:
    """
    Parse a package identifier.

    Args:
        identifier: Raw identifier, e.g. ``"@scope/pkg@1.0.0/lib/index"``

    Returns:
        ParsedSpecifier with name, version and sub-path

    Raises:
        ParseError: If the identifier is not a string, is empty, or has no
            extractable name
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise ParseError(
            "Name for a package to be installed and imported is not provided. "
            f"Please specify package name and a version (e.g., {EXAMPLES})."
        )

    match = _IDENTIFIER_RE.match(identifier)
    if match is None:
        raise ParseError(
            f"Failed to parse package identifier {identifier!r}. "
            f"Please specify package name and a version (e.g., {EXAMPLES})."
        )

    sub_path = (match.group("sub_path") or "").rstrip("/")

    return ParsedSpecifier(
        name=match.group("name"),
        version=match.group("version") or LATEST,
        sub_path=sub_path,
    )
