"""`pkgmap show` command.

Prints the parsed mapping as a table (or CSV), in file order.
"""

from __future__ import annotations

from typing import Optional

import typer

from pkgmap.cli.commands._common import parse_uri_option, read_packages_or_exit
from pkgmap.core.tables import packages_to_frame


def register(app: typer.Typer) -> None:
    @app.command("show")
    def show(
        packages_path: str = typer.Argument(..., help="Path to a .packages file."),
        base: Optional[str] = typer.Option(
            None, "--base", help="Base URI for relative locations (default: the file's own URI)."
        ),
        relative_to: Optional[str] = typer.Option(
            None, "--relative-to", help="Add a 'relative' column with locations relative to this URI."
        ),
        csv: bool = typer.Option(False, "--csv", help="Emit CSV instead of an aligned table."),
    ) -> None:
        """Show the package mapping of a .packages file."""
        mapping = read_packages_or_exit(packages_path, base=base)
        rel = parse_uri_option(relative_to, option="--relative-to") if relative_to else None
        df = packages_to_frame(mapping, base_uri=rel)
        if csv:
            typer.echo(df.to_csv(index=False), nl=False)
        elif df.empty:
            typer.echo("(no packages)")
        else:
            typer.echo(df.to_string(index=False))
