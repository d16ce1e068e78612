"""CLI for styledoc (build docs JSON, inspect annotations)."""

import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from styledoc.config import (
    DEFAULT_OUTPUT_FILENAME,
    DEFAULT_PROP_LIBRARY,
    DEFAULT_SOURCE_GLOBS,
    resolve_navigation_file,
)
from styledoc.core.extract.tags import parse_source
from styledoc.core.importer.json_reader import read_navigation_file
from styledoc.core.importer.loader import expand_patterns
from styledoc.logging_config import configure_logging
from styledoc.pipeline import run_build
from styledoc.writer import FileWriter

app = typer.Typer(help="styledoc: build style-guide documentation from source comments.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


@app.command()
def build(
    patterns: Annotated[
        list[str] | None,
        typer.Argument(help="Glob patterns of annotated source files"),
    ] = None,
    nav: Annotated[
        Path | None,
        typer.Option("--nav", "-n", help="Navigation template (JSON)"),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for the docs JSON"),
    ] = Path("dist"),
    filename: str = typer.Option(
        DEFAULT_OUTPUT_FILENAME, "--filename", "-f", help="Output file name"
    ),
    no_filter: bool = typer.Option(
        False, "--no-filter", help="Keep navigation entries without examples"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not write anything"),
    workers: int = typer.Option(1, "--workers", "-w", help="Files extracted in parallel"),
    library: str = typer.Option(
        DEFAULT_PROP_LIBRARY, "--library", "-l", help="UI library @prop entries belong to"
    ),
) -> None:
    """Extract documentation from source comments and write it as JSON."""
    nav_path = nav or resolve_navigation_file()
    navigation = None
    if nav_path is not None:
        try:
            navigation = read_navigation_file(nav_path)
        except (FileNotFoundError, ValueError) as e:
            logger.error("{}", e)
            raise typer.Exit(1) from e
        logger.debug("Using navigation template {}", nav_path)

    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)
    writer = FileWriter(output_dir, dry_run=dry_run)

    docs = run_build(
        writer,
        patterns or list(DEFAULT_SOURCE_GLOBS),
        navigation=navigation,
        filename=filename,
        apply_filter=not no_filter,
        workers=workers,
        prop_library=library,
    )
    typer.echo(f"Wrote {len(docs)} categories to {output_dir / filename}")


@app.command()
def blocks(
    patterns: Annotated[list[str], typer.Argument(help="Glob patterns of source files")],
    library: str = typer.Option(
        DEFAULT_PROP_LIBRARY, "--library", "-l", help="UI library @prop entries belong to"
    ),
) -> None:
    """Print the parsed annotation blocks of files as JSON."""
    paths = expand_patterns(patterns)
    if not paths:
        logger.error("No files match {}", " ".join(patterns))
        raise typer.Exit(1)

    output = []
    for path in paths:
        text = path.read_text(encoding="utf-8", errors="replace")
        for fragment in parse_source(text, file=str(path), options={"prop_library": library}):
            output.append(
                {
                    "file": fragment.file,
                    "from": fragment.start_line,
                    "to": fragment.end_line,
                    "tags": fragment.as_dict(),
                }
            )
    typer.echo(json.dumps(output, indent=2, ensure_ascii=False))
