"""
Command-line entry point for rendering LTI configuration documents.

Copyright (c) 2025 Mohammad Atashi <mohammadaliatashi@icloud.com>
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from lticonfig.exceptions import ConfigurationError
from lticonfig.generator import ConfigurationBuilder
from lticonfig.settings import load_settings


app = typer.Typer(name="lticonfig", help="Generate LTI Tool Provider configuration XML.")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")):
    """
    Generate LTI Tool Provider configuration XML.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


@app.command()
def render(settings_path: Path = typer.Argument(..., help="JSON, YAML or TOML settings file."),
           output: Optional[Path] = typer.Option(None, "--output", "-o",
                                                 help="Write the document here instead of stdout.")):
    """
    Render a settings file as an LTI configuration document.
    """
    try:
        builder = ConfigurationBuilder.from_settings(load_settings(settings_path))
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(builder.render(), nl=False)
    else:
        builder.save(output)


if __name__ == "__main__":
    app()
