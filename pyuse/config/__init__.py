"""
pyuse Configuration - TOML-based settings for the installer commands.

This module provides:
- Schema of the ``[use]`` table
- Loading settings, with defaults for anything not configured
- Generation of a commented default config file

Example config file:
    [use]
    python = ""
    install_command = "{python} -m pip install --quiet --upgrade --target {target} {requirement}"
    root_command = "{python} -c \"import os, site; print(os.path.join(site.getuserbase(), 'pyuse'))\""

The file is read from ``$PYUSE_CONFIG`` when set, otherwise from
``~/.config/pyuse/config.toml``.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from pyuse.config.schema import (
    ConfigField,
    ValidationError,
    generate_default_config,
    validate_config,
)
from pyuse.config.toml_handler import TOMLError, generate_toml_from_schema, read_toml, write_toml

SECTION = "use"

CONFIG_ENV_VAR = "PYUSE_CONFIG"

DEFAULT_CONFIG_FILE = Path("~/.config/pyuse/config.toml")

USE_SCHEMA: dict[str, ConfigField] = {
    "python": ConfigField(
        str, "", "Interpreter used by the commands below; empty means the running one"
    ),
    "install_command": ConfigField(
        str,
        "{python} -m pip install --quiet --upgrade --target {target} {requirement}",
        "Command that installs one package version into its aliased directory",
        min_length=1,
        placeholders=("python", "target", "requirement", "alias", "name", "version"),
    ),
    "root_command": ConfigField(
        str,
        "{python} -c \"import os, site; print(os.path.join(site.getuserbase(), 'pyuse'))\"",
        "Command that prints the shared global install root",
        min_length=1,
        placeholders=("python",),
    ),
}


class ConfigError(Exception):
    """Raised when the config file cannot be read or is invalid."""

    pass


@dataclass(frozen=True)
class UseSettings:
    """
    Settings for one use() call.

    Attributes:
        python: Interpreter substituted for ``{python}``
        install_command: Installer argv template
        root_command: Global-root query argv template
    """

    python: str
    install_command: str
    root_command: str


def config_path() -> Path:
    """Location of the config file."""
    configured = os.environ.get(CONFIG_ENV_VAR)
    return Path(configured).expanduser() if configured else DEFAULT_CONFIG_FILE.expanduser()


def load_settings(path: Path | None = None) -> UseSettings:
    """
    Load settings from the config file.

    Args:
        path: Config file; defaults to config_path()

    Returns:
        UseSettings with defaults for fields not configured

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    path = path or config_path()
    values = generate_default_config(USE_SCHEMA)

    if path.exists():
        try:
            data = read_toml(path)
        except TOMLError as e:
            raise ConfigError(str(e)) from e

        section = data.get(SECTION, {})
        if not isinstance(section, dict):
            raise ConfigError(f"'{SECTION}' in {path} must be a table")

        try:
            validate_config(section, USE_SCHEMA)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e

        values.update(section)

    return UseSettings(
        python=values["python"] or sys.executable,
        install_command=values["install_command"],
        root_command=values["root_command"],
    )


def write_default_config(path: Path | None = None) -> Path:
    """
    Write a commented config file holding the defaults.

    Returns:
        Path written

    Raises:
        ConfigError: If the file cannot be written
    """
    path = path or config_path()
    content = generate_toml_from_schema(
        SECTION, USE_SCHEMA, generate_default_config(USE_SCHEMA)
    )

    try:
        write_toml(path, content)
    except TOMLError as e:
        raise ConfigError(str(e)) from e

    return path


__all__ = [
    "ConfigError",
    "USE_SCHEMA",
    "UseSettings",
    "config_path",
    "load_settings",
    "write_default_config",
]
