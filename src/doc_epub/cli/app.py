"""
Root Typer application for the doc-epub CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from doc_epub.cli.build import build
from doc_epub.cli.inspect import inspect

app = Typer(
    name="doc-epub",
    help="doc-epub: package extracted documentation as EPUB.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from doc_epub import __version__

        typer.echo(f"doc-epub {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    show_version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """doc-epub CLI: build and inspect EPUB documentation."""


app.command("build")(build)
app.command("inspect")(inspect)


if __name__ == "__main__":
    app()
