"""
syld — CLI entrypoint.

Usage:
    syld --help
    syld scan
    syld report --limit 10
    syld budget plan
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from syld import __version__
from syld.core.observability.logging_config import resolve_level, setup_logging


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="syld")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to config.yml (default: $SYLD_CONFIG or XDG config dir).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """syld — find the open-source projects you rely on and plan support for them."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(level=resolve_level(debug=debug, verbose=verbose, quiet=quiet))

    if ctx.invoked_subcommand is None:
        ctx.invoke(scan)


@cli.command()
@click.option(
    "--backend",
    "-b",
    "backends",
    multiple=True,
    help="Backend to scan (repeatable, default: all).",
)
@click.option("--no-save", is_flag=True, help="Do not store the scan snapshot.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def scan(
    ctx: click.Context,
    backends: tuple[str, ...] = (),
    no_save: bool = False,
    as_json: bool = False,
) -> None:
    """Scan installed packages and resolve them into projects."""
    from syld.core.use_cases.scan import run_scan

    result = run_scan(
        config_path=ctx.obj.get("config_path"),
        backends=list(backends) or None,
        save=not no_save,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    outcome = result.outcome
    for name, reason in outcome.failures.items():
        click.secho(f"⚠️  {name}: {reason}", fg="yellow")

    if not outcome.scanned and not outcome.failures:
        click.secho("⚠️  No package managers found on this system", fg="yellow")
        return

    quiet = ctx.obj.get("quiet", False)
    if not quiet:
        click.echo()
        for name, count in outcome.scanned.items():
            click.echo(f"   📦 {name}: {count} package(s)")
        click.echo()

    click.secho(
        f"✅ {outcome.total} package(s) → {len(result.projects)} project(s)",
        fg="green",
        bold=True,
    )
    if result.saved and not quiet:
        click.echo(f"   Saved to {result.snapshot_path}")
        click.echo("   Run 'syld report' to list them.")


@cli.command()
@click.option("--limit", "-n", type=int, default=None, help="Projects per page (0 = all).")
@click.option("--offset", type=int, default=0, help="Projects to skip.")
@click.option(
    "--enrich/--no-enrich",
    default=None,
    help="Request online metadata enrichment (not performed; default: from config).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def report(
    ctx: click.Context,
    limit: int | None,
    offset: int,
    enrich: bool | None,
    as_json: bool,
) -> None:
    """List projects from the last scan."""
    from syld.core.use_cases.report import build_report

    result = build_report(
        config_path=ctx.obj.get("config_path"),
        limit=limit,
        offset=offset,
        enrich=enrich,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    for name, reason in result.failures.items():
        click.secho(f"⚠️  {name}: {reason}", fg="yellow")
    if result.enrich:
        click.secho("⚠️  Enrichment is not available; showing scanned metadata.", fg="yellow")

    click.secho(
        f"\n📋 {result.total_projects} project(s) from {result.total_packages} package(s)",
        fg="cyan",
        bold=True,
    )
    click.echo(f"   Scanned at {result.scanned_at}")
    click.echo()

    verbose = ctx.obj.get("verbose", False)
    for project in result.projects:
        managers = ", ".join(project.managers)
        click.echo(f"   • {project.display_name}  ({project.package_count} pkg, {managers})")
        if verbose:
            if project.homepage:
                click.echo(f"       🔗 {project.homepage}")
            for member in project.members:
                click.echo(f"       {member.manager.value}/{member.name} {member.version}")

    if result.remaining:
        click.echo(f"   ... and {result.remaining} more")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def backends(as_json: bool) -> None:
    """Show package-manager backends and their availability."""
    from syld.adapters.registry import default_registry

    status = default_registry().backend_status()

    if as_json:
        click.echo(json.dumps(status, indent=2))
        return

    click.secho("📦 Backends:", fg="cyan", bold=True)
    for name, info in status.items():
        icon = "✅" if info["available"] else "❌"
        click.echo(f"   {icon} {name}")
    click.echo()


# ── Register sub-command groups from syld/ui/cli/ ────────────────

from syld.ui.cli.budget import budget
from syld.ui.cli.config import config

cli.add_command(budget)
cli.add_command(config)


if __name__ == "__main__":
    cli()
