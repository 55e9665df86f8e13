"""
CLI commands for the giving budget.

Thin wrappers over ``syld.core.use_cases.budget``.
"""

from __future__ import annotations

import json
import sys

import click

from syld.core.models.budget import AllocationStrategy, Cadence

_STRATEGIES = click.Choice([s.value for s in AllocationStrategy])
_CADENCES = click.Choice([c.value for c in Cadence])


@click.group()
def budget() -> None:
    """Budget — set, show, plan, history."""


# ── Configure ───────────────────────────────────────────────────


@budget.command("set")
@click.argument("amount")
@click.option("--currency", default=None, help="ISO 4217 currency code (e.g. EUR).")
@click.option("--cadence", type=_CADENCES, default=None, help="How often you give.")
@click.option("--strategy", type=_STRATEGIES, default=None, help="How to split the budget.")
@click.option("--min-amount", default=None, help="Smallest share worth giving.")
@click.pass_context
def set_cmd(
    ctx: click.Context,
    amount: str,
    currency: str | None,
    cadence: str | None,
    strategy: str | None,
    min_amount: str | None,
) -> None:
    """Set the budget AMOUNT (major units, e.g. 25 or 12.50)."""
    from syld.core.use_cases.budget import set_budget

    result = set_budget(
        amount,
        config_path=ctx.obj.get("config_path"),
        currency=currency,
        cadence=Cadence(cadence) if cadence else None,
        strategy=AllocationStrategy(strategy) if strategy else None,
        min_amount=min_amount,
    )

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    settings = result.settings
    assert settings is not None
    click.secho(
        f"✅ Budget: {settings.amount} {settings.currency} {settings.cadence.value}",
        fg="green",
    )
    click.echo(f"   Saved to {result.config_path}")


@budget.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show the configured budget."""
    from syld.core.use_cases.budget import show_budget

    result = show_budget(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    settings = result.settings
    assert settings is not None
    if settings.amount is None:
        click.secho("⚠️  No budget set", fg="yellow")
        click.echo("   Run 'syld budget set AMOUNT' to set one.")
        return

    click.secho("💰 Budget:", fg="cyan", bold=True)
    click.echo(f"   Amount:     {settings.amount} {settings.currency}")
    click.echo(f"   Cadence:    {settings.cadence.value}")
    click.echo(f"   Strategy:   {settings.strategy.value}")
    click.echo(f"   Min amount: {settings.min_amount} {settings.currency}")


# ── Plan ────────────────────────────────────────────────────────


@budget.command()
@click.option("--strategy", type=_STRATEGIES, default=None, help="Override the strategy.")
@click.option("--min-amount", default=None, help="Override the minimum share.")
@click.option("--no-record", is_flag=True, help="Do not append the plan to history.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def plan(
    ctx: click.Context,
    strategy: str | None,
    min_amount: str | None,
    no_record: bool,
    as_json: bool,
) -> None:
    """Split the budget across the projects from the last scan."""
    from syld.core.services.money import format_amount
    from syld.core.use_cases.budget import run_plan

    result = run_plan(
        config_path=ctx.obj.get("config_path"),
        strategy=AllocationStrategy(strategy) if strategy else None,
        min_amount=min_amount,
        record=not no_record,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        if result.hint:
            click.echo(f"   {result.hint}")
        sys.exit(1)

    for warning in result.warnings:
        click.secho(f"⚠️  {warning}", fg="yellow")

    allocation = result.plan
    assert allocation is not None
    currency = allocation.budget.currency

    if allocation.is_empty:
        click.secho("⚠️  Budget is zero — nothing to allocate", fg="yellow")
        return

    click.secho(
        f"\n💰 {format_amount(allocation.budget.amount, currency)} "
        f"{allocation.budget.cadence.value} ({allocation.strategy.value})",
        fg="cyan",
        bold=True,
    )
    click.echo()
    width = max(len(e.display_name) for e in allocation.entries)
    for entry in allocation.entries:
        amount = format_amount(entry.amount, currency)
        click.echo(f"   {entry.display_name:<{width}}  {amount:>14}")

    if allocation.excluded:
        click.echo()
        minimum = format_amount(allocation.min_amount, currency)
        click.secho(
            f"   {len(allocation.excluded)} project(s) below {minimum} left out",
            fg="yellow",
        )
        if ctx.obj.get("verbose"):
            for key in allocation.excluded:
                click.echo(f"     • {key}")

    if result.recorded and not ctx.obj.get("quiet"):
        click.echo()
        click.echo(f"   Recorded in {result.history_path}")
    click.echo()


@budget.command()
@click.option("-n", "count", type=int, default=10, help="Number of plans to show.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def history(count: int, as_json: bool) -> None:
    """Show recently recorded plans."""
    from syld.core.services.money import format_amount
    from syld.core.use_cases.budget import plan_history

    plans = plan_history(n=count)

    if as_json:
        click.echo(json.dumps([p.model_dump(mode="json") for p in plans], indent=2))
        return

    if not plans:
        click.echo("No plans recorded yet.")
        return

    click.secho(f"📜 Last {len(plans)} plan(s):", fg="cyan", bold=True)
    for recorded in plans:
        currency = recorded.budget.currency
        click.echo(
            f"   {recorded.created_at[:19]}  "
            f"{format_amount(recorded.total, currency):>14}  "
            f"{len(recorded.entries)} project(s)  {recorded.strategy.value}"
        )
    click.echo()
