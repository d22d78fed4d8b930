"""`.packages` file codec (parse + write).

File format (byte oriented, ASCII-significant, UTF-8 compatible):

    # comment line
    name:location

- CR and LF are each a line terminator on their own; blank lines are skipped.
- A line starting with `#` is a comment, whatever else it contains.
- The first `:` on a line separates the package name from its location.
- Locations are URI references, read as directories (a trailing `/` is
  added when missing) and resolved against the location of the file.

Parsing returns an insertion-ordered `dict[str, Uri]`; writing emits entries
in the mapping's iteration order, so parse -> write is deterministic.

Neither function touches the filesystem: callers supply the bytes and the
output sink.
"""

from __future__ import annotations

import io
import logging
from typing import Mapping, Protocol

from pkgmap.codecs._packages_parser import _parse_entries
from pkgmap.codecs._packages_writer import _format_entry, _format_header
from pkgmap.core.errors import ValidationError, ValidationErrorKind
from pkgmap.core.names import NameValidator, is_valid_package_name
from pkgmap.core.uri import Uri, coerce_uri

logger = logging.getLogger(__name__)


class TextSink(Protocol):
    def write(self, s: str, /) -> object: ...


# ----------------------------
# Public API
# ----------------------------


def parse_packages(
    source: bytes,
    base_location: Uri | str,
    *,
    name_validator: NameValidator = is_valid_package_name,
) -> dict[str, Uri]:
    """Parse `.packages` content into a mapping from package name to location.

    Args:
        source: The raw file content. If the content is only available as a
            string, pass `text.encode("utf-8")`.
        base_location: Absolute URI that relative locations are resolved
            against; normally the URI of the file itself.
        name_validator: Predicate deciding which package names are accepted.

    Returns:
        Package name -> absolute, directory-style location, in file order.

    Raises:
        ParseError: on the first malformed line (see `ParseErrorKind`).
    """
    if not isinstance(source, (bytes, bytearray, memoryview)):
        raise TypeError(f"parse_packages: expected bytes, got {type(source).__name__}")
    base = coerce_uri(base_location, where="parse_packages: base_location")
    if not base.is_absolute:
        raise ValueError(f"parse_packages: base_location must be absolute, got {str(base)!r}")

    result = _parse_entries(bytes(source), base, name_validator)
    logger.debug("parsed %d package entries (base=%s)", len(result), base)
    return result


def write_packages(
    output: TextSink,
    mapping: Mapping[str, Uri | str],
    *,
    base_uri: Uri | str | None = None,
    comment: str | None = None,
    name_validator: NameValidator = is_valid_package_name,
) -> None:
    """Write `mapping` to `output` in `.packages` format.

    - If `comment` is given, each of its lines is written prefixed with `# `;
      otherwise a single generated-at timestamp comment is written.
    - If `base_uri` is given, locations are made relative to it where
      possible.

    Entries are validated as they are written; on failure, lines already
    written to `output` stay there.

    Raises:
        ValidationError: for a non-absolute `base_uri`, an invalid package
            name, or a `package:` location.
    """
    base: Uri | None = None
    if base_uri is not None:
        base = coerce_uri(base_uri, where="write_packages: base_uri")
        if not base.is_absolute:
            raise ValidationError(ValidationErrorKind.INVALID_BASE_URI, value=base)

    for line in _format_header(comment):
        output.write(line + "\n")

    for name, location in mapping.items():
        output.write(_format_entry(name, location, base_uri=base, name_validator=name_validator) + "\n")
    logger.debug("wrote %d package entries (base=%s)", len(mapping), base)


def format_packages(
    mapping: Mapping[str, Uri | str],
    *,
    base_uri: Uri | str | None = None,
    comment: str | None = None,
    name_validator: NameValidator = is_valid_package_name,
) -> str:
    """Return `mapping` rendered in `.packages` format (see `write_packages()`)."""
    buf = io.StringIO()
    write_packages(buf, mapping, base_uri=base_uri, comment=comment, name_validator=name_validator)
    return buf.getvalue()


__all__ = [
    "TextSink",
    "format_packages",
    "parse_packages",
    "write_packages",
]
