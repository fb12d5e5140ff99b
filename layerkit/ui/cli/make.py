"""
CLI commands for the generators — make-* and publish-stubs.

Thin wrappers over ``layerkit.core.use_cases.make`` and
``layerkit.core.use_cases.publish_stubs``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from layerkit.core.errors import LayerkitError

_STATUS_STYLE = {
    "created": ("✓", "green", "created"),
    "exists": ("⊘", "yellow", "already exists"),
    "failed": ("✗", "red", "failed"),
}


def _load_config(ctx: click.Context):
    from layerkit.core.config.loader import load_config

    return load_config(ctx.obj.get("config_path"))


def _fail(message: str, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps({"ok": False, "error": message}, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def _display_path(path: Path | None, root: Path) -> str:
    if path is None:
        return "-"
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def _print_outcomes(outcomes, root: Path) -> None:
    for outcome in outcomes:
        icon, color, label = _STATUS_STYLE[outcome.status]
        click.secho(f"   {icon} {outcome.kind.capitalize()} {outcome.name} ", fg=color, nl=False)
        click.echo(f"{label}  → {_display_path(outcome.path, root)}")
        if outcome.error:
            click.echo(f"     │ {outcome.error}")


def _run_make(
    ctx: click.Context,
    kind: str,
    name: str,
    as_json: bool,
    **flags: bool,
) -> None:
    from layerkit.core.use_cases.make import make_artifact

    try:
        config = _load_config(ctx)
        result = make_artifact(kind, name, config=config, **flags)  # type: ignore[arg-type]
    except LayerkitError as e:
        _fail(str(e), as_json)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)
        return

    if result.error:
        _fail(result.error, as_json)
        return

    _print_outcomes(result.outcomes, config.project_root)

    if not result.ok:
        click.echo()
        click.secho("   Nothing was created.", fg="yellow")
        sys.exit(1)


# ── make-* ──────────────────────────────────────────────────────


@click.command("make-trait")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def make_trait(ctx: click.Context, name: str, as_json: bool) -> None:
    """Create a new trait (mixin) class."""
    _run_make(ctx, "trait", name, as_json)


@click.command("make-interface")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def make_interface(ctx: click.Context, name: str, as_json: bool) -> None:
    """Create a new repository interface."""
    _run_make(ctx, "interface", name, as_json)


@click.command("make-repository")
@click.argument("name")
@click.option("--service", "with_service", is_flag=True, help="Also create a service for it.")
@click.option("--interface", "with_interface", is_flag=True, help="Also create an interface for it.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def make_repository(
    ctx: click.Context,
    name: str,
    with_service: bool,
    with_interface: bool,
    as_json: bool,
) -> None:
    """Create a new repository class.

    Examples:

        layerkit make-repository PostRepository

        layerkit make-repository Blog/PostRepository --service --interface
    """
    _run_make(
        ctx, "repository", name, as_json,
        with_service=with_service,
        with_interface=with_interface,
    )


@click.command("make-service")
@click.argument("name")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def make_service(ctx: click.Context, name: str, as_json: bool) -> None:
    """Create a new service class."""
    _run_make(ctx, "service", name, as_json)


# ── Stubs ───────────────────────────────────────────────────────


@click.command("publish-stubs")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def publish_stubs(ctx: click.Context, as_json: bool) -> None:
    """Copy the built-in stubs into the project for customisation."""
    from layerkit.core.use_cases.publish_stubs import publish_stubs as _publish

    try:
        config = _load_config(ctx)
        result = _publish(config)
    except LayerkitError as e:
        _fail(str(e), as_json)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)
        return

    click.secho(
        f"📄 Stubs → {_display_path(result.target_dir, config.project_root)}",
        fg="cyan",
        bold=True,
    )
    _print_outcomes(result.outcomes, config.project_root)

    if not result.ok:
        click.echo()
        click.secho("   Nothing was published.", fg="yellow")
        sys.exit(1)
