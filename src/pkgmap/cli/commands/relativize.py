"""`pkgmap relativize` command."""

from __future__ import annotations

import typer

from pkgmap.cli.commands._common import parse_uri_option
from pkgmap.core.relative import relativize as relativize_uri
from pkgmap.core.uri import Uri


def register(app: typer.Typer) -> None:
    @app.command("relativize")
    def relativize(
        uri: str = typer.Argument(..., help="URI to shorten."),
        base: str = typer.Argument(..., help="Absolute base URI."),
    ) -> None:
        """Print URI relative to BASE (or unchanged when it cannot be shortened)."""
        base_uri = parse_uri_option(base, option="BASE")
        try:
            target = Uri.parse(uri)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="URI") from e
        typer.echo(str(relativize_uri(target, base_uri)))
