"""
nix-list — CLI entrypoint.

Usage:
    nix-list <config-name>                 list nix and Homebrew packages
    nix-list <config-name> <package>       list the files of one package
    nix-list <config-name> --updated       diff the last two generations
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from nixlist import __version__
from nixlist.core.errors import NixListError
from nixlist.core.observability.logging_config import setup_logging

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="nix-list")
@click.argument("config_name")
@click.argument("package", required=False)
@click.option("--updated", is_flag=True, help="Show changes between the last two system generations.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to nix-list.yml (default: $NIX_LIST_CONFIG or ~/.config/nix-list.yml).",
)
def cli(
    config_name: str,
    package: str | None,
    updated: bool,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """List packages of a nix-darwin configuration.

    CONFIG_NAME is the darwinConfigurations output in your flake
    (e.g. your hostname). The flake directory defaults to ~/.config/nix
    and can be changed with the FLAKE_DIR environment variable.

    Examples:

        nix-list hostname

        nix-list hostname jq

        sudo nix-list hostname --updated
    """
    if updated and package:
        raise click.UsageError("--updated cannot be combined with a package argument.")

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("NIX_LIST_LOG_LEVEL", "WARNING")

    from nixlist.core.config.loader import load_config
    from nixlist.ui.cli.generations import show_updated
    from nixlist.ui.cli.packages import show_package_files, show_packages

    try:
        setup_logging(
            level=level,
            log_file=os.environ.get("NIX_LIST_LOG_FILE"),
            log_file_level=os.environ.get("NIX_LIST_LOG_FILE_LEVEL"),
        )
        config = load_config(Path(config_path) if config_path else None)
        if updated:
            logger.debug("Generation diff requested for %s", config_name)
            show_updated(config, as_json)
        elif package:
            show_package_files(config, config_name, package, as_json)
        else:
            show_packages(config, config_name, as_json)
    except NixListError as e:
        click.secho(f"❌ {e.message}", fg="red", err=True)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    cli()
