"""
CLI output for the generation diff (``--updated``).
"""

from __future__ import annotations

import json

import click

from nixlist.core.models.config import ListerConfig
from nixlist.core.models.generation import GenerationSnapshot

_MARKER_COLORS = {
    "added": "green",
    "removed": "red",
    "upgraded": "cyan",
    "downgraded": "yellow",
    "changed": "white",
}


def _label(snapshot: GenerationSnapshot) -> str:
    return f"{snapshot.number} ({snapshot.timestamp:%Y-%m-%d %H:%M})"


def show_updated(config: ListerConfig, as_json: bool) -> None:
    """Print what changed between the previous and the active generation."""
    from nixlist.core.services.generations import generation_diff

    diff = generation_diff(config)

    if as_json:
        click.echo(json.dumps(diff.to_dict(), indent=2))
        return

    if diff.previous is None:
        click.secho(f"Current generation: {_label(diff.current)}", bold=True)
        click.echo("No previous generation to compare against.")
        return

    click.secho(
        f"--- Changes between generation {_label(diff.previous)} "
        f"and {_label(diff.current)} ---",
        fg="cyan",
        bold=True,
    )

    if diff.version_changed:
        click.secho(f"Version: {diff.previous.version} → {diff.current.version}", bold=True)

    if diff.changes:
        for entry in diff.changes:
            click.secho(f"{entry.marker} ", fg=_MARKER_COLORS[entry.kind], nl=False)
            click.echo(entry.description)
    elif diff.filtered_to_empty:
        click.echo("No package changes detected.")
    else:
        click.echo("No differences between generations.")
