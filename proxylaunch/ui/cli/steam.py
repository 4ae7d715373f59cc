"""
CLI commands for talking to Steam directly.

Useful to repair the placeholder by hand: install, validate, uninstall
or run it without going through the launch flow.
"""

from __future__ import annotations

import json
import sys

import click

from proxylaunch.adapters.steam.launcher import OPERATIONS


@click.command()
@click.argument("operation", type=click.Choice(OPERATIONS))
@click.option("--app-id", type=int, default=None, help="App ID (default: the placeholder's).")
@click.option("--dry-run", is_flag=True, help="Validate only, do not contact Steam.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def steam(
    ctx: click.Context,
    operation: str,
    app_id: int | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Ask Steam to OPERATION the placeholder game."""
    from proxylaunch.adapters.registry import default_registry
    from proxylaunch.core.models.settings import Settings
    from proxylaunch.core.use_cases.placeholder import trigger_steam

    settings: Settings = ctx.obj.get("settings") or Settings()
    target = app_id if app_id is not None else settings.placeholder.app_id

    receipt = trigger_steam(default_registry(), operation, target, dry_run=dry_run)

    if as_json:
        click.echo(json.dumps(receipt.model_dump(), indent=2))
        sys.exit(1 if receipt.failed else 0)
        return

    if receipt.failed:
        click.secho(f"❌ {receipt.error}", fg="red")
        sys.exit(1)

    if receipt.status == "skipped":
        click.secho(f"⏭️  {receipt.output}", fg="yellow")
    else:
        click.secho(f"✅ Sent {receipt.output}", fg="green")
