"""Internal writer helpers for the `.packages` codec.

This module contains the export/formatting logic for `.packages` files:
- header comment lines
- per-entry validation
- entry line formatting (with optional relativization)

This is a private module; public API is in `packages_file.py`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pkgmap.core.errors import ValidationError, ValidationErrorKind
from pkgmap.core.names import NameValidator
from pkgmap.core.relative import relativize
from pkgmap.core.uri import Uri, coerce_uri

_GENERATOR = "pkgmap"


def _format_header(comment: str | None) -> list[str]:
    """Header comment lines (without line terminators)."""
    if comment is None:
        return [f"# generated by {_GENERATOR} at {datetime.now()}"]
    lines = comment.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [f"# {line}" for line in lines]


def _require_location(name: str, value: Any) -> Uri:
    location = coerce_uri(value, where=f"location of {name!r}")
    if location.scheme == "package":
        raise ValidationError(ValidationErrorKind.FORBIDDEN_SCHEME, value=location)
    return location


def _format_entry(name: str, value: Any, *, base_uri: Uri | None, name_validator: NameValidator) -> str:
    """Format one `name:location/` line (without terminator)."""
    if not isinstance(name, str) or not name_validator(name):
        raise ValidationError(ValidationErrorKind.INVALID_PACKAGE_NAME, value=name)
    location = _require_location(name, value)
    if base_uri is not None:
        location = relativize(location, base_uri)
    text = str(location)
    if not location.path.endswith("/"):
        text += "/"
    return f"{name}:{text}"
