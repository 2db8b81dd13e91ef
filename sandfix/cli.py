"""CLI entry point for sandfix."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from sandfix_core.config import SandfixConfig, load_config
from sandfix_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from sandfix_core.errors import SandfixError, UnresolvedDependencyError
from sandfix_core.pipeline import RECACHE_HINT, RelocationReport, relocate

app = typer.Typer(
    name="sandfix",
    help="Repair the package databases of a sandbox that was moved or copied.",
)

config_app = typer.Typer(help="Manage sandfix configuration.")
app.add_typer(config_app, name="config")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps({
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        })


def _configure_logging(cfg: SandfixConfig) -> None:
    """Route core logging to the terminal at the configured level."""
    level = logging.DEBUG if cfg.verbose else _LOG_LEVELS[cfg.log_level]
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(show_path=False, show_time=False)
    logger = logging.getLogger("sandfix_core")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to sandfix.yaml")
    ] = None,
) -> None:
    """Global options."""
    try:
        ctx.obj = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _get_config(ctx: typer.Context) -> SandfixConfig:
    if isinstance(ctx.obj, SandfixConfig):
        return ctx.obj
    return load_config()


def _display_report(report: RelocationReport) -> None:
    table = Table(title=f"Repaired package DB(s) ({len(report.stores)})")
    table.add_column("Location", style="cyan")
    table.add_column("Records", justify="right")
    table.add_column("Written", justify="right", style="green")
    for s in report.stores:
        table.add_row(s.location, str(s.records), str(len(s.written)))
    rprint(table)


@app.command()
def repair(
    ctx: typer.Context,
    sandbox: str = typer.Argument(..., help="Path of the relocated sandbox"),
    pkg_dir: str | None = typer.Argument(
        None, help="Package DB directory inside the sandbox (default: every *.conf.d)"
    ),
    package_db: Annotated[
        list[str] | None,
        typer.Option(
            "--package-db",
            help="Trusted package DB: 'global', 'user' or a path. Repeatable.",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log each step")
    ] = False,
    dry_run: bool = typer.Option(False, "--dry-run", help="Repair in memory, write nothing"),
) -> None:
    """Rewrite stale dependency ids and paths of a sandbox package DB."""
    cfg = _get_config(ctx)
    if verbose:
        cfg = cfg.model_copy(update={"verbose": True})
    _configure_logging(cfg)

    rprint(f"[bold]Fixing[/bold] sandbox package DB(s) in {sandbox}...")
    try:
        report = relocate(
            sandbox, cfg, pkg_dir, package_db or [], dry_run=dry_run
        )
    except UnresolvedDependencyError as e:
        rprint(Panel(str(e), title="Missing packages", border_style="red"))
        raise typer.Exit(1)
    except SandfixError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _display_report(report)
    if dry_run:
        rprint("[yellow](dry run, no files written)[/yellow]")
        return
    rprint("[green]done[/green]")
    rprint(f"[dim]{RECACHE_HINT}[/dim]")


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Write a default sandfix.yaml in the current directory."""
    dest = Path("sandfix.yaml")
    if dest.exists() and not force:
        rprint(f"[yellow]{dest} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    dest.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {dest}")


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Print the effective configuration."""
    cfg = _get_config(ctx)
    rprint(yaml.safe_dump(cfg.model_dump(), default_flow_style=False, sort_keys=False))
