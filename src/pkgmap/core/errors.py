"""Error types for packages-file parsing and serialization.

Every failure carries a machine-readable `kind` plus the offending byte
offset (parsing) or value (serialization), so callers and tests can inspect
the failure without matching on message text. Messages are still stable and
suitable for test assertions.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ParseErrorKind(str, Enum):
    MISSING_PACKAGE_NAME = "missing package name"
    MISSING_SEPARATOR = "no ':' on line"
    INVALID_PACKAGE_NAME = "not a valid package name"
    DUPLICATE_PACKAGE_NAME = "same package name occurred twice"
    INVALID_LOCATION = "not a valid package location"


class ValidationErrorKind(str, Enum):
    INVALID_BASE_URI = "base URI must be absolute"
    INVALID_PACKAGE_NAME = "not a valid package name"
    FORBIDDEN_SCHEME = "package location must not be a package: URI"
    DUPLICATE_PACKAGE_NAME = "same package name occurred twice"


class PackagesFileError(ValueError):
    """Base class for all packages-file errors."""


class ParseError(PackagesFileError):
    """Malformed packages-file content.

    `offset` is the byte offset into `source` where the problem was detected.
    """

    def __init__(self, kind: ParseErrorKind, *, offset: int, source: bytes = b"", detail: str | None = None):
        self.kind = kind
        self.offset = offset
        self.source = source
        msg = f"{kind.value} at offset {offset}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class ValidationError(PackagesFileError):
    """A mapping (or base URI) that cannot be written as a packages file."""

    def __init__(self, kind: ValidationErrorKind, *, value: Any):
        self.kind = kind
        self.value = value
        super().__init__(f"{kind.value}: {str(value)!r}")


__all__ = [
    "PackagesFileError",
    "ParseError",
    "ParseErrorKind",
    "ValidationError",
    "ValidationErrorKind",
]
