"""pkgmap: `.packages` package-location files.

Parses and writes the legacy line-oriented `name:location` format and
computes short relative locations for compact output.
"""

from __future__ import annotations

from pkgmap.codecs.packages_file import format_packages, parse_packages, write_packages
from pkgmap.core import ParseError, Uri, ValidationError, is_valid_package_name, relativize

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ParseError",
    "Uri",
    "ValidationError",
    "format_packages",
    "is_valid_package_name",
    "parse_packages",
    "relativize",
    "write_packages",
]
