"""Tileset Tools CLI - Main entry point.

Provides the ``tileset-tools`` command-line interface.

Usage:
    tileset-tools combine ./TilesetOfTilesets --verbose
    tileset-tools combine ./TilesetOfTilesets ./out --root-json tileset3/tileset3.json
    tileset-tools gzip ./TilesetOfTilesets --tiles-only
    tileset-tools ungzip ./TilesetOfTilesets-gzipped
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from tileset_common import configure_logging
from tileset_combine import combine_tileset, gzip_tileset

app = typer.Typer(
    name="tileset-tools",
    help="Combine and gzip 3D Tiles tilesets.",
    add_completion=False,
)


@app.callback()
def _setup(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (default: TILESET_LOG_LEVEL or INFO)"
    ),
    log_format: Optional[str] = typer.Option(
        None, "--log-format", help="console or json (default: TILESET_LOG_FORMAT)"
    ),
):
    """Configure logging before any command runs."""
    configure_logging(level=log_level, fmt=log_format)


@app.command()
def combine(
    input_directory: Path = typer.Argument(..., help="Tileset directory"),
    output_directory: Optional[Path] = typer.Argument(
        None, help="Output directory (default: <input>-combined)"
    ),
    root_json: Optional[str] = typer.Option(
        None, "--root-json", "-r", help="Root manifest, relative to the input directory"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Report combined tilesets"),
):
    """Combine external tilesets into a single tileset.

    Examples:

        tileset-tools combine ./TilesetOfTilesets

        tileset-tools combine ./in ./out --root-json tileset3/tileset3.json
    """
    try:
        result = asyncio.run(
            combine_tileset(
                input_directory,
                output_directory,
                root_json=root_json,
                verbose=verbose,
            )
        )
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if verbose:
        typer.echo(f"Combined {result.external_tilesets} external tilesets.")
    typer.echo(f"Wrote {result.output_path}")


def _run_gzip(
    input_directory: Path,
    output_directory: Optional[Path],
    gzip: bool,
    tiles_only: bool,
    verbose: bool,
) -> None:
    try:
        result = asyncio.run(
            gzip_tileset(
                input_directory,
                output_directory,
                gzip=gzip,
                tiles_only=tiles_only,
                verbose=verbose,
            )
        )
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    action = "Gzipped" if gzip else "Ungzipped"
    typer.echo(f"{action} {result.processed} files into {result.output_directory}")
    if verbose:
        typer.echo(f"Copied {result.copied} files unchanged.")


@app.command()
def gzip(
    input_directory: Path = typer.Argument(..., help="Tileset directory"),
    output_directory: Optional[Path] = typer.Argument(
        None, help="Output directory (default: <input>-gzipped)"
    ),
    tiles_only: bool = typer.Option(
        False, "--tiles-only", help="Only gzip tile content, leave manifests plain"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Gzip every file of a tileset directory."""
    _run_gzip(input_directory, output_directory, True, tiles_only, verbose)


@app.command()
def ungzip(
    input_directory: Path = typer.Argument(..., help="Tileset directory"),
    output_directory: Optional[Path] = typer.Argument(
        None, help="Output directory (default: <input>-ungzipped)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Ungzip every gzipped file of a tileset directory."""
    _run_gzip(input_directory, output_directory, False, False, verbose)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
