"""CLI — click-based inspection commands for the render pipeline."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from loguru import logger
from rich.console import Console

from mdlive.config import load_config
from mdlive.models import TextFieldValue, TextRange
from mdlive.report import render_ranges_json, render_spans_json, to_rich_text
from mdlive.session import EditorSession


def _configure_logging(verbose: bool) -> None:
    logger.enable("mdlive")
    logger.remove()
    logger.add(
        lambda message: click.echo(message, err=True, nl=False),
        level="DEBUG" if verbose else "WARNING",
    )


def _read(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        click.echo(f"Error: cannot read {path}: {exc}", err=True)
        sys.exit(1)


def _session(path: str, config_path: str | None) -> EditorSession:
    target = Path(path).resolve()
    cfg = load_config(search_path=str(target.parent), config_path=config_path)
    return EditorSession(
        _read(path),
        theme=cfg.theme.to_theme(),
        list_continuation=cfg.editor.list_continuation,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Log parse and cache activity to stderr.")
def main(verbose: bool) -> None:
    """mdlive — live markdown styling and list continuation."""
    _configure_logging(verbose)


# ───────────────────────────────────────────────────────────────────
# render
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", default="text",
              type=click.Choice(["text", "json"], case_sensitive=False),
              help="Output format.")
@click.option("--no-color", "no_color", is_flag=True, default=False,
              help="Print plain text in text mode.")
@click.option("--config", "config_path", default=None, type=click.Path(),
              help="Explicit config file (skips .mdlive.yml search).")
def render(path: str, fmt: str, no_color: bool, config_path: str | None) -> None:
    """Show a markdown file the way the editor styles it."""
    session = _session(path, config_path)
    shown = session.display()

    if fmt == "json":
        click.echo(render_spans_json(shown.styled))
        return

    console = Console(no_color=no_color, highlight=False, soft_wrap=True)
    console.print(to_rich_text(shown.styled))


# ───────────────────────────────────────────────────────────────────
# ranges
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def ranges(path: str) -> None:
    """Dump the parsed tag ranges of a markdown file as JSON."""
    session = _session(path, None)
    session.display()
    click.echo(render_ranges_json(session.text, session.cache.parsed))


# ───────────────────────────────────────────────────────────────────
# enter
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--at", "offset", required=True, type=int,
              help="Cursor offset where Enter is pressed.")
@click.option("--config", "config_path", default=None, type=click.Path(),
              help="Explicit config file (skips .mdlive.yml search).")
def enter(path: str, offset: int, config_path: str | None) -> None:
    """Press Enter at OFFSET and print the resulting text."""
    session = _session(path, config_path)
    if not 0 <= offset <= len(session.text):
        click.echo(f"Error: offset {offset} outside 0..{len(session.text)}", err=True)
        sys.exit(1)

    session.on_value_change(TextFieldValue(session.text, TextRange.cursor(offset)))
    value = session.press_enter()
    click.echo(value.text, nl=False)
    click.echo(f"\n-- cursor {value.selection.start}", err=True)
