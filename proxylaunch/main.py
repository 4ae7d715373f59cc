"""
proxylaunch — CLI entrypoint.

Usage:
    python -m proxylaunch.main --help
    python -m proxylaunch.main launch
    python -m proxylaunch.main bins ~/.steam/steam/steamapps/common/SomeGame
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from proxylaunch.core.observability.logging_config import setup_logging

from proxylaunch import __version__


def _console_level(verbose: bool, quiet: bool, debug: bool) -> str:
    """Flags win over PXL_LOG_LEVEL; --debug wins over the rest."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get("PXL_LOG_LEVEL", "WARNING")


@click.group()
@click.version_option(version=__version__, prog_name="proxylaunch")
@click.option("--verbose", "-v", is_flag=True, help="Log progress (INFO).")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Debug logging with source locations.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to config.yml (default: $PXL_CONFIG or ~/.config/proxylaunch).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """proxylaunch — start any installed game through Steam's placeholder."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=_console_level(verbose, quiet, debug),
        log_file=os.environ.get("PXL_LOG_FILE"),
        log_file_level=os.environ.get("PXL_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )

    from proxylaunch.core.config.loader import ConfigError, load_settings

    try:
        ctx.obj["settings"] = load_settings(ctx.obj["config_path"])
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@cli.command()
@click.argument("game", required=False, type=click.Path(path_type=Path))
@click.option("--dry-run", is_flag=True, help="Discover and select, but change nothing.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def launch(ctx: click.Context, game: Path | None, dry_run: bool, as_json: bool) -> None:
    """Swap a game into the placeholder and start it through Steam.

    GAME is the game's binary; without it, the game and binary are
    picked interactively.
    """
    from proxylaunch.adapters.registry import default_registry
    from proxylaunch.core.config.platform import select_profile
    from proxylaunch.core.use_cases.launch import launch_game
    from proxylaunch.ui.cli.select import select

    result = launch_game(
        settings=ctx.obj["settings"],
        profile=select_profile(),
        registry=default_registry(),
        selector=select,
        game_bin=game,
        dry_run=dry_run,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.game is not None and result.placeholder is not None
    quiet = ctx.obj.get("quiet", False)

    if dry_run:
        click.secho("🔍 Dry run — nothing changed", fg="yellow", bold=True)
        click.echo(f"   Would link {result.placeholder.bin}")
        click.echo(f"          → {result.game.bin}")
        return

    click.secho(f"🚀 Starting {result.game.name}", fg="green", bold=True)
    if not quiet:
        click.echo(f"   {result.link} → {result.game.bin}")


@cli.group()
def config() -> None:
    """Settings file commands."""


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Show the effective settings."""
    from proxylaunch.core.config.loader import default_settings_path

    settings = ctx.obj["settings"]
    source = ctx.obj.get("config_path") or default_settings_path()

    if as_json:
        data = settings.model_dump()
        data["source"] = str(source) if source else None
        click.echo(json.dumps(data, indent=2))
        return

    ph = settings.placeholder
    click.secho("⚙️  Settings", fg="cyan", bold=True)
    if source and source.is_file():
        click.echo(f"   File: {source}")
    else:
        click.echo("   File: (defaults)")
    click.echo(f"   Placeholder: {ph.name} ({ph.app_id}) in '{ph.dir_name}'")
    if ph.binary:
        click.echo(f"   Placeholder binary: {ph.binary}")
    click.echo(f"   Max depth: {settings.max_depth}")
    if settings.extra_roots:
        click.echo("   Extra roots:")
        for root in settings.extra_roots:
            click.echo(f"     • {root}")


# ── Register sub-commands from proxylaunch/ui/cli/ ────────────────

from proxylaunch.ui.cli.library import bins, check, games, roots
from proxylaunch.ui.cli.steam import steam

cli.add_command(roots)
cli.add_command(games)
cli.add_command(bins)
cli.add_command(check)
cli.add_command(steam)


if __name__ == "__main__":
    cli()
