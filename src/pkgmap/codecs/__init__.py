"""Codecs for reading/writing package-location files.

- `.packages` (`name:location` lines) lives in `packages_file`.
"""

from __future__ import annotations

from .packages_file import format_packages, parse_packages, write_packages

__all__ = [
    "format_packages",
    "parse_packages",
    "write_packages",
]
