"""Package name validation.

A package name is a non-empty string of ASCII characters drawn from a fixed
set (letters, digits and the URI-safe punctuation listed below). A name made
up entirely of `.` characters is rejected so that `.` and `..` can never be
used as package names.
"""

from __future__ import annotations

from typing import Callable

# Keep these as plain assignments for Python 3.9 compatibility (no typing.TypeAlias).
NameValidator = Callable[[str], bool]

_VALID_PUNCTUATION = "!$&'()*+,-.;=@_~"

VALID_PACKAGE_NAME_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789" + _VALID_PUNCTUATION
)


def find_invalid_character(name: str) -> int:
    """Return the index of the first character that makes `name` invalid.

    Returns -1 for a valid name, and `len(name)` when every character is
    allowed but the name is empty or consists of dots only.
    """
    if not isinstance(name, str):
        raise TypeError(f"find_invalid_character: expected str, got {type(name).__name__}")
    only_dots = True
    for i, ch in enumerate(name):
        if ch not in VALID_PACKAGE_NAME_CHARS:
            return i
        if ch != ".":
            only_dots = False
    if only_dots:
        return len(name)
    return -1


def is_valid_package_name(name: str) -> bool:
    """Tests whether `name` is a valid package name."""
    if not isinstance(name, str):
        return False
    return find_invalid_character(name) < 0


__all__ = [
    "NameValidator",
    "VALID_PACKAGE_NAME_CHARS",
    "find_invalid_character",
    "is_valid_package_name",
]
