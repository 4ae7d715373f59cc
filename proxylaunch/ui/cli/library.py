"""
CLI commands for inspecting Steam libraries.

Thin wrappers over ``proxylaunch.core.services``: where the libraries
are, which installations qualify, which files count as binaries.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from proxylaunch.core.models.platform import PlatformProfile
from proxylaunch.core.models.settings import Settings


def _settings(ctx: click.Context) -> Settings:
    """Settings loaded by the root group, or defaults."""
    return ctx.obj.get("settings") or Settings()


def _profile() -> PlatformProfile:
    from proxylaunch.core.config.platform import select_profile

    return select_profile()


def _roots(ctx: click.Context, profile: PlatformProfile) -> list[Path]:
    from proxylaunch.core.errors import HomeDirectoryUnknown
    from proxylaunch.core.services.library_locator import find_library_roots

    try:
        return find_library_roots(profile, _settings(ctx).extra_roots)
    except HomeDirectoryUnknown as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


# ── Roots / games ───────────────────────────────────────────────


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def roots(ctx: click.Context, as_json: bool) -> None:
    """List the Steam library roots that were found."""
    found = _roots(ctx, _profile())

    if as_json:
        click.echo(json.dumps({"roots": [str(r) for r in found]}, indent=2))
        return

    if not found:
        click.secho("⚠️  No library roots found", fg="yellow")
        return

    click.secho(f"📚 Library roots: {len(found)}", fg="cyan", bold=True)
    for root in found:
        click.echo(f"   • {root}")


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def games(ctx: click.Context, as_json: bool) -> None:
    """List installations that contain at least one binary."""
    from proxylaunch.core.services.installation_scanner import list_installations

    profile = _profile()
    settings = _settings(ctx)
    found = list_installations(_roots(ctx, profile), profile, settings.max_depth)

    if as_json:
        click.echo(json.dumps({"games": [str(d) for d in found]}, indent=2))
        return

    if not found:
        click.secho("⚠️  No installed games found", fg="yellow")
        return

    click.secho(f"🎮 Installed games: {len(found)}", fg="cyan", bold=True)
    for directory in sorted(found, key=lambda d: d.name.lower()):
        click.echo(f"   • {directory.name}  → {directory}")


# ── Binaries ────────────────────────────────────────────────────


@click.command()
@click.argument("directory", type=click.Path(path_type=Path))
@click.option("--limit", "-n", type=int, default=None, help="Stop after this many binaries.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def bins(ctx: click.Context, directory: Path, limit: int | None, as_json: bool) -> None:
    """List binaries found under DIRECTORY."""
    from proxylaunch.core.errors import ListingFailed
    from proxylaunch.core.services.installation_scanner import UNBOUNDED, find_binaries

    try:
        found = find_binaries(
            directory,
            UNBOUNDED if limit is None else limit,
            _profile(),
            _settings(ctx).max_depth,
        )
    except ListingFailed as e:
        if as_json:
            click.echo(json.dumps({"error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"binaries": [str(b.path) for b in found]}, indent=2))
        return

    if not found:
        click.secho(f"⚠️  No binaries under {directory}", fg="yellow")
        return

    click.secho(f"⚙️  Binaries: {len(found)}", fg="cyan", bold=True)
    for binary in found:
        click.echo(f"   • {binary.path}")


@click.command()
@click.argument("path", type=click.Path(path_type=Path))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def check(path: Path, as_json: bool) -> None:
    """Show whether PATH counts as a binary, and which signal decided."""
    from proxylaunch.core.services.binary_classifier import classify

    result = classify(path, _profile())

    if as_json:
        click.echo(json.dumps(
            {"path": str(path), "is_binary": result.is_binary, "signal": result.signal},
            indent=2,
        ))
        return

    if result.is_binary:
        click.secho(f"✅ {path} is a binary", fg="green")
    else:
        click.secho(f"❌ {path} is not a binary", fg="red")
    click.echo(f"   Decided by: {result.signal}")
