"""`pkgmap from-csv` command.

Builds a packages file from a CSV table with `package` and `location` columns
(extra columns are ignored). Locations are written as given, made
directory-style; relative locations are kept relative.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd
import typer

from pkgmap.cli.commands._common import write_text
from pkgmap.codecs.packages_file import format_packages
from pkgmap.core.tables import frame_to_packages


def register(app: typer.Typer) -> None:
    @app.command("from-csv")
    def from_csv(
        csv_path: str = typer.Argument(..., help="CSV with 'package' and 'location' columns."),
        out: str = typer.Option(..., "--out", help="Output .packages path."),
        comment: Optional[str] = typer.Option(None, "--comment", help="Header comment (default: generated-at line)."),
    ) -> None:
        """Write a .packages file from a CSV table."""
        df = pd.read_csv(csv_path, dtype="string", keep_default_na=False)
        try:
            mapping = frame_to_packages(df)
            text = format_packages(mapping, comment=comment)
        except ValueError as e:
            typer.echo(f"{csv_path}: {e}", err=True)
            raise typer.Exit(code=1) from e
        out_path = Path(out)
        write_text(out_path, text)
        typer.echo(str(out_path))
