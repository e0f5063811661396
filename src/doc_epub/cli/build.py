"""
CLI: ``doc-epub build``: assemble an EPUB from an entities file.

Usage::

    doc-epub build entities.json --config epub.yaml
    doc-epub build entities.yaml --project demo --version 1.0.0 -e README.md
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
import yaml
from rich.markup import escape

from doc_epub.cli.utils import console, err_console, members_table, setup_logging
from doc_epub.config import EpubConfig
from doc_epub.errors import EpubError
from doc_epub.models import load_entities
from doc_epub.orchestrator import EpubOrchestrator
from doc_epub.packager import EpubPackager


def _invalid_input(path: Path | None, error: Exception) -> NoReturn:
    err_console.print(f"[red]Invalid input:[/red] {escape(str(path))}: {escape(repr(error))}")
    raise typer.Exit(1) from error


def build(
    entities_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON or YAML file of entities."),
    config_file: Path | None = typer.Option(None, "--config", "-c", exists=True, dir_okay=False, help="YAML run config."),
    project: str | None = typer.Option(None, "--project", "-p", help="Project name (overrides config)."),
    version: str | None = typer.Option(None, "--version", "-v", help="Project version (overrides config)."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory. Wiped before the build."),
    extra: list[Path] = typer.Option([], "--extra", "-e", help="Markdown extra. Repeatable."),
    logo: Path | None = typer.Option(None, "--logo", help="png/jpg logo."),
    verbose: bool = typer.Option(False, "--verbose", help="Debug logging."),
) -> None:
    """Build an EPUB from extracted documentation entities."""
    setup_logging(verbose)

    try:
        data = EpubConfig.read_yaml(config_file) if config_file else {}
    except yaml.YAMLError as e:
        _invalid_input(config_file, e)

    overrides = {"project": project, "version": version, "output": output, "logo": logo}
    data.update({k: v for k, v in overrides.items() if v is not None})
    if extra:
        data["extras"] = [*(data.get("extras") or []), *extra]

    missing = [key for key in ("project", "version") if not data.get(key)]
    if missing:
        err_console.print(f"[red]Missing required setting(s): {', '.join(missing)}[/red]")
        raise typer.Exit(2)

    try:
        config = EpubConfig.from_dict(data)
        entities = load_entities(entities_file)
    except (KeyError, TypeError, ValueError, yaml.YAMLError) as e:
        _invalid_input(entities_file, e)

    try:
        archive = EpubOrchestrator(config).run(entities)
    except EpubError as e:
        err_console.print(f"[red]{e.__class__.__name__}:[/red] {e.message}")
        raise typer.Exit(1) from e

    console.print(f"[green]Built[/green] {archive}")
    console.print(members_table(EpubPackager().inspect(archive)))
