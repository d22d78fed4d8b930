"""pkgmap CLI entrypoint.

Typer application; each subcommand lives in `pkgmap.cli.commands.<name>` and
registers itself on `app`.
"""

from __future__ import annotations

import logging

import typer

app = typer.Typer(
    name="pkgmap",
    add_completion=False,
    no_args_is_help=True,
    help="Read, check and rewrite .packages package-location files.",
)

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """pkgmap CLI."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=_LOG_FORMAT)


@app.command("version")
def version() -> None:
    """Print the installed pkgmap version."""
    from pkgmap import __version__

    typer.echo(__version__)


def _register_commands() -> None:
    """Register CLI subcommands.

    Importing these modules must remain lightweight so `pkgmap --help` is fast.
    """
    from pkgmap.cli.commands import check as check_cmd
    from pkgmap.cli.commands import from_csv as from_csv_cmd
    from pkgmap.cli.commands import relativize as relativize_cmd
    from pkgmap.cli.commands import rewrite as rewrite_cmd
    from pkgmap.cli.commands import show as show_cmd

    check_cmd.register(app)
    show_cmd.register(app)
    rewrite_cmd.register(app)
    from_csv_cmd.register(app)
    relativize_cmd.register(app)


_register_commands()
