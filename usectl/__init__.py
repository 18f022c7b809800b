"""
usectl - command-line front end for pyuse.

Loads packages on demand, inspects aliased installs and writes the default
configuration file.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
