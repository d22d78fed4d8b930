"""pkgmap core: URI type, name validation, relativization and errors.

This package is intentionally standalone and must not import CLI/codecs
to avoid circular dependencies.
"""

from __future__ import annotations

from .errors import PackagesFileError, ParseError, ParseErrorKind, ValidationError, ValidationErrorKind
from .names import NameValidator, find_invalid_character, is_valid_package_name
from .relative import relativize
from .tables import PACKAGES_COLUMN_ORDER, frame_to_packages, packages_to_frame
from .uri import Uri, coerce_uri, remove_dot_segments

__all__ = [
    "PackagesFileError",
    "ParseError",
    "ParseErrorKind",
    "ValidationError",
    "ValidationErrorKind",
    "NameValidator",
    "find_invalid_character",
    "is_valid_package_name",
    "relativize",
    "PACKAGES_COLUMN_ORDER",
    "frame_to_packages",
    "packages_to_frame",
    "Uri",
    "coerce_uri",
    "remove_dot_segments",
]
