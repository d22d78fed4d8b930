"""`pkgmap check` command.

Parses a packages file and reports the first malformed line, if any.
"""

from __future__ import annotations

from typing import Optional

import typer

from pkgmap.cli.commands._common import read_packages_or_exit


def register(app: typer.Typer) -> None:
    @app.command("check")
    def check(
        packages_path: str = typer.Argument(..., help="Path to a .packages file."),
        base: Optional[str] = typer.Option(
            None, "--base", help="Base URI for relative locations (default: the file's own URI)."
        ),
    ) -> None:
        """Validate a .packages file."""
        mapping = read_packages_or_exit(packages_path, base=base)
        typer.echo(f"OK ({len(mapping)} packages)")
