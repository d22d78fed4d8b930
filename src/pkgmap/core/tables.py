"""Tabular (pandas) view of package mappings.

Canonical table layout:

    package   location                 scheme   [relative]
    foo       file:///proj/lib/        file     [lib/]

- Rows keep the mapping's iteration order (no sorting): order is significant
  for `.packages` output.
- `relative` is present only when a base URI is supplied.
- `frame_to_packages()` is the inverse for the `package`/`location` columns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from pkgmap.core.errors import ValidationError, ValidationErrorKind
from pkgmap.core.names import NameValidator, is_valid_package_name
from pkgmap.core.relative import relativize
from pkgmap.core.uri import Uri, coerce_uri

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd


PACKAGES_COLUMN_ORDER: tuple[str, ...] = ("package", "location", "scheme")
REQUIRED_COLUMNS: tuple[str, ...] = ("package", "location")


def packages_to_frame(mapping: Mapping[str, Uri | str], *, base_uri: Uri | str | None = None) -> "pd.DataFrame":
    """Return one row per mapping entry, in mapping order."""
    import pandas as pd

    base = coerce_uri(base_uri, where="packages_to_frame: base_uri") if base_uri is not None else None
    if base is not None and not base.is_absolute:
        raise ValidationError(ValidationErrorKind.INVALID_BASE_URI, value=base)

    rows = []
    for name, value in mapping.items():
        location = coerce_uri(value, where=f"location of {name!r}")
        row = {"package": name, "location": str(location), "scheme": location.scheme}
        if base is not None:
            row["relative"] = str(relativize(location, base))
        rows.append(row)

    columns = list(PACKAGES_COLUMN_ORDER) + (["relative"] if base is not None else [])
    df = pd.DataFrame(rows, columns=columns)
    return df.astype("string")


def frame_to_packages(
    df: "pd.DataFrame",
    *,
    name_validator: NameValidator = is_valid_package_name,
) -> dict[str, Uri]:
    """Build a mapping from the `package`/`location` columns of `df`.

    Names and locations are stripped; locations are coerced to directory
    form. Extra columns are ignored.

    Raises:
        TypeError: if `df` is not a DataFrame.
        ValueError: if required columns are missing or a location is empty.
        ValidationError: for invalid or duplicate package names.
    """
    import pandas as pd

    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"frame_to_packages: expected pandas.DataFrame, got {type(df).__name__}")
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"packages table: missing required columns: {missing}")

    result: dict[str, Uri] = {}
    for i, (name_raw, location_raw) in enumerate(zip(df["package"], df["location"])):
        name = "" if pd.isna(name_raw) else str(name_raw).strip()
        if not name_validator(name):
            raise ValidationError(ValidationErrorKind.INVALID_PACKAGE_NAME, value=name)
        if name in result:
            raise ValidationError(ValidationErrorKind.DUPLICATE_PACKAGE_NAME, value=name)
        location_text = "" if pd.isna(location_raw) else str(location_raw).strip()
        if not location_text:
            raise ValueError(f"packages table: row {i}: location must be a non-empty string")
        result[name] = Uri.parse(location_text).as_directory()
    return result


__all__ = [
    "PACKAGES_COLUMN_ORDER",
    "REQUIRED_COLUMNS",
    "frame_to_packages",
    "packages_to_frame",
]
