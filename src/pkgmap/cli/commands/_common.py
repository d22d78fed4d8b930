"""Helpers shared by CLI commands (file <-> URI plumbing)."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from pkgmap.codecs.packages_file import parse_packages
from pkgmap.core.errors import ParseError
from pkgmap.core.uri import Uri


def file_uri(path: Path) -> Uri:
    """Absolute `file:` URI of `path`."""
    return Uri.parse(Path(path).resolve().as_uri())


def parse_uri_option(value: str, *, option: str) -> Uri:
    try:
        uri = Uri.parse(value)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint=option) from e
    if not uri.is_absolute:
        raise typer.BadParameter(f"must be an absolute URI, got {value!r}", param_hint=option)
    return uri


def read_packages_or_exit(path: str, *, base: Optional[str]) -> dict[str, Uri]:
    """Parse the packages file at `path`; report parse errors and exit 1."""
    p = Path(path)
    base_uri = parse_uri_option(base, option="--base") if base else file_uri(p)
    try:
        return parse_packages(p.read_bytes(), base_uri)
    except ParseError as e:
        typer.echo(f"{p}: {e}", err=True)
        raise typer.Exit(code=1) from e


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)
