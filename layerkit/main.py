"""
layerkit — CLI entrypoint.

Usage:
    layerkit --help
    layerkit make-repository Blog/PostRepository --service --interface
    layerkit make-service Billing/InvoiceService
    layerkit publish-stubs
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from layerkit import __version__
from layerkit.core.observability.logging_config import (
    ENV_FILE,
    ENV_FILE_LEVEL,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="layerkit")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to layerkit.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """layerkit — scaffold repositories, services, interfaces and traits."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )


# ── Register commands from layerkit/ui/cli/ ───────────────────────

from layerkit.ui.cli.make import (
    make_interface,
    make_repository,
    make_service,
    make_trait,
    publish_stubs,
)

cli.add_command(make_trait)
cli.add_command(make_interface)
cli.add_command(make_repository)
cli.add_command(make_service)
cli.add_command(publish_stubs)


if __name__ == "__main__":
    cli()
