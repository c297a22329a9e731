"""
CLI output for package listing and per-package file listing.

Thin wrappers over ``nixlist.core.services``.
"""

from __future__ import annotations

import json

import click

from nixlist.core.models.config import ListerConfig


# ── List ────────────────────────────────────────────────────────


def show_packages(config: ListerConfig, config_name: str, as_json: bool) -> None:
    """Print declared nix packages followed by Homebrew's own listing."""
    from nixlist.core.services.homebrew import list_homebrew_packages
    from nixlist.core.services.resolver import resolve_packages

    listing = resolve_packages(config, config_name)
    brew = list_homebrew_packages(config)

    if as_json:
        click.echo(json.dumps({
            "config": config_name,
            "attribute": listing.attribute,
            "packages": listing.names,
            "records": [p.to_dict() for p in listing.packages],
            "homebrew": brew,
        }, indent=2))
        return

    click.secho("--- Nix Packages (from current flake definition) ---", fg="cyan", bold=True)
    names = listing.names
    if names:
        for name in names:
            click.echo(name)
    else:
        click.echo(f"(No Nix packages found in {listing.attribute})")

    click.echo()
    click.secho("--- Homebrew Packages ---", fg="cyan", bold=True)
    if not brew["available"]:
        click.echo("(Homebrew not installed)")
    elif not brew["ok"]:
        click.echo("(No Homebrew packages installed or error listing them)")
    else:
        click.echo("Installed Homebrew Packages (Formulae and Casks):")
        if brew["output"]:
            click.echo(brew["output"], nl=not brew["output"].endswith("\n"))


# ── Files ───────────────────────────────────────────────────────


def show_package_files(
    config: ListerConfig,
    config_name: str,
    identifier: str,
    as_json: bool,
) -> None:
    """Print every path under the one package matching ``identifier``."""
    from nixlist.core.services.files import find_package_files

    record, paths = find_package_files(config, config_name, identifier)

    if as_json:
        click.echo(json.dumps({
            "package": record.derived_name,
            "store_path": record.store_path,
            "files": [str(p) for p in paths],
        }, indent=2))
        return

    click.secho(f"--- Files in {record.derived_name} ({record.store_path}) ---", fg="cyan", bold=True)
    # Streamed: a traversal error surfaces after the paths already printed
    for path in paths:
        click.echo(str(path))
