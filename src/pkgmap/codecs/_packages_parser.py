"""Internal parsing helpers for the `.packages` codec.

Private module for parsing logic; public API is in `packages_file.py`.
"""

from __future__ import annotations

from typing import Iterator

from pkgmap.core.errors import ParseError, ParseErrorKind
from pkgmap.core.names import NameValidator
from pkgmap.core.uri import Uri

_CR = 0x0D
_LF = 0x0A
_HASH = 0x23
_COLON = 0x3A


def _scan_lines(source: bytes) -> Iterator[tuple[int, int, int, int]]:
    """Yield `(start, separator, end, last)` for every non-blank, non-comment line.

    - `start`: offset of the first byte of the line
    - `separator`: offset of the first `:` on the line, or -1
    - `end`: offset one past the last content byte (terminator or end of input)
    - `last`: offset of the last byte examined (used for error reporting)

    CR and LF are separate terminators, so CRLF produces an empty line in
    between, which is skipped like any other blank line.

    Raises:
        ParseError: MISSING_PACKAGE_NAME for a line starting with `:`.
    """
    n = len(source)
    index = 0
    while index < n:
        start = index
        char = source[index]
        index += 1
        if char == _CR or char == _LF:
            continue
        if char == _COLON:
            raise ParseError(ParseErrorKind.MISSING_PACKAGE_NAME, offset=start, source=source)
        is_comment = char == _HASH
        separator = -1
        end = n
        while index < n:
            char = source[index]
            index += 1
            if char == _COLON and separator < 0:
                separator = index - 1
            elif char == _CR or char == _LF:
                end = index - 1
                break
        if is_comment:
            continue
        yield start, separator, end, index - 1


def _parse_name(source: bytes, start: int, end: int, name_validator: NameValidator) -> str:
    try:
        name = source[start:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(
            ParseErrorKind.INVALID_PACKAGE_NAME, offset=start, source=source, detail="name is not valid UTF-8"
        ) from e
    if not name_validator(name):
        raise ParseError(ParseErrorKind.INVALID_PACKAGE_NAME, offset=start, source=source, detail=repr(name))
    return name


def _parse_location(source: bytes, start: int, end: int, base_location: Uri) -> Uri:
    try:
        text = source[start:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(
            ParseErrorKind.INVALID_LOCATION, offset=start + e.start, source=source, detail="location is not valid UTF-8"
        ) from e
    try:
        location = Uri.parse(text)
    except ValueError as e:
        raise ParseError(ParseErrorKind.INVALID_LOCATION, offset=start, source=source, detail=str(e)) from e
    return base_location.resolve(location.as_directory())


def _parse_entries(source: bytes, base_location: Uri, name_validator: NameValidator) -> dict[str, Uri]:
    result: dict[str, Uri] = {}
    for start, separator, end, last in _scan_lines(source):
        if separator < 0:
            raise ParseError(ParseErrorKind.MISSING_SEPARATOR, offset=last, source=source)

        name = _parse_name(source, start, separator, name_validator)
        location = _parse_location(source, separator + 1, end, base_location)

        if name in result:
            raise ParseError(ParseErrorKind.DUPLICATE_PACKAGE_NAME, offset=start, source=source, detail=repr(name))
        result[name] = location
    return result
