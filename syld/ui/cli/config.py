"""
CLI commands for the configuration file.

Thin wrappers over ``syld.core.config.loader``.
"""

from __future__ import annotations

import json
import sys

import click


@click.group()
def config() -> None:
    """Config — show, path, check."""


@config.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Print the effective configuration as YAML."""
    from syld.core.config.loader import ConfigError, dump_settings, load_settings

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    click.echo(dump_settings(settings), nl=False)


@config.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def path(ctx: click.Context, as_json: bool) -> None:
    """Show where configuration and data are stored."""
    from syld.core.config.loader import config_path, data_dir

    cfg = config_path(ctx.obj.get("config_path"))
    data = data_dir()

    if as_json:
        click.echo(json.dumps({
            "config": str(cfg),
            "config_exists": cfg.is_file(),
            "data_dir": str(data),
        }, indent=2))
        return

    marker = "" if cfg.is_file() else "  (not created yet)"
    click.echo(f"Config: {cfg}{marker}")
    click.echo(f"Data:   {data}")


@config.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Validate the configuration file and resolution table."""
    from syld.core.config.loader import ConfigError, config_path, load_settings
    from syld.core.use_cases.scan import build_resolver

    cfg = config_path(ctx.obj.get("config_path"))
    try:
        settings = load_settings(cfg)
        resolver = build_resolver(settings)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if not cfg.is_file():
        click.secho(f"✅ No config at {cfg}, defaults are valid", fg="green")
    else:
        click.secho(f"✅ {cfg} is valid", fg="green")

    if settings.budget.amount is None:
        click.secho("   ⚠️  No budget set", fg="yellow")
    click.echo(f"   Resolution table: {resolver.table.project_count} project(s)")
