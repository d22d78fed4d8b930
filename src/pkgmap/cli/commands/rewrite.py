"""`pkgmap rewrite` command.

Re-serializes a packages file:
- `--relative` (default) writes locations relative to the output file
- `--absolute` writes every location in full
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from pkgmap.cli.commands._common import file_uri, read_packages_or_exit, write_text
from pkgmap.codecs.packages_file import format_packages
from pkgmap.core.errors import ValidationError


def register(app: typer.Typer) -> None:
    @app.command("rewrite")
    def rewrite(
        packages_path: str = typer.Argument(..., help="Path to a .packages file."),
        out: str = typer.Option(..., "--out", help="Output path for the rewritten file."),
        base: Optional[str] = typer.Option(
            None, "--base", help="Base URI for relative locations in the input (default: the file's own URI)."
        ),
        relative: bool = typer.Option(
            True, "--relative/--absolute", help="Write locations relative to the output file where possible."
        ),
        comment: Optional[str] = typer.Option(None, "--comment", help="Header comment (default: generated-at line)."),
    ) -> None:
        """Parse a .packages file and write it back out."""
        mapping = read_packages_or_exit(packages_path, base=base)
        out_path = Path(out)
        base_uri = file_uri(out_path) if relative else None
        try:
            text = format_packages(mapping, base_uri=base_uri, comment=comment)
        except ValidationError as e:
            typer.echo(str(e), err=True)
            raise typer.Exit(code=1) from e
        write_text(out_path, text)
        typer.echo(str(out_path))
