"""
Configuration resolver — declared system packages of a flake configuration.

Two external calls, both read-only:

1. ``nix eval --json`` of ``environment.systemPackages`` gives the
   store path of every declared package.
2. One batched ``nix derivation show`` over those paths gives each
   derivation's ``name`` and optional ``pname``.

Neither call is retried; both are deterministic for a given flake.
"""

from __future__ import annotations

import json
import logging
import re

from nixlist.adapters.shell.command import run_command
from nixlist.core.errors import ConfigNotFound, EvaluationError, MetadataQueryError
from nixlist.core.models.config import ListerConfig
from nixlist.core.models.package import PackageListing, PackageMetadata, PackageRecord
from nixlist.core.models.result import CommandResult
from nixlist.core.services.naming import basename, derive_name, derive_short_name

logger = logging.getLogger(__name__)

# nix's wording when the configuration name is not in the flake
_MISSING_ATTRIBUTE = re.compile(
    r"does not provide attribute|attribute '[^']*' missing",
)


def _run(*args: str, timeout: int = 300) -> CommandResult:
    """Run a nix command and return the result."""
    return run_command(["nix", *args], timeout=timeout)


# ═══════════════════════════════════════════════════════════════════
#  Evaluate
# ═══════════════════════════════════════════════════════════════════


def evaluate_store_paths(config: ListerConfig, config_name: str) -> list[str]:
    """Store paths of every package in the configuration's systemPackages.

    Duplicates are dropped; first occurrence wins.

    Raises:
        ConfigNotFound: Empty name, or the flake has no such configuration.
        EvaluationError: ``nix eval`` failed or returned unusable output.
    """
    if not config_name:
        raise ConfigNotFound("Configuration name must not be empty")

    flake_ref = config.flake_ref(config_name)
    result = _run(
        "eval", "--json", "--no-allow-import-from-derivation", "--impure", flake_ref,
        timeout=config.command_timeout,
    )

    if result.failed:
        if _MISSING_ATTRIBUTE.search(result.stderr):
            raise ConfigNotFound(
                f"Configuration '{config_name}' not found in {config.flake_dir} "
                f"({config.configuration_kind})"
            )
        raise EvaluationError(f"Error evaluating flake attribute {flake_ref}: {result.message}")

    if result.empty:
        raise EvaluationError(f"nix eval returned no output for {flake_ref}")

    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise EvaluationError(f"nix eval returned invalid JSON for {flake_ref}: {e}") from e

    if not isinstance(data, list):
        raise EvaluationError(
            f"Expected a JSON list from {flake_ref}, got {type(data).__name__}"
        )

    paths: list[str] = []
    for item in data:
        if not isinstance(item, str) or not item:
            logger.warning("Skipping non-path entry in systemPackages: %r", item)
            continue
        if item not in paths:
            paths.append(item)

    logger.info("Evaluated %d store path(s) for %s", len(paths), config_name)
    return paths


# ═══════════════════════════════════════════════════════════════════
#  Metadata
# ═══════════════════════════════════════════════════════════════════


def parse_derivations(raw: str) -> dict[str, PackageMetadata]:
    """Parse ``nix derivation show`` JSON into metadata keyed by basename.

    Accepts the classic shape (``{drvPath: drv}``) and the newer one
    (``{"derivations": {...}}``, output paths without the store prefix).
    Malformed derivations are skipped.

    Raises:
        MetadataQueryError: The document itself is not usable.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MetadataQueryError(f"nix derivation show returned invalid JSON: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("derivations"), dict):
        data = data["derivations"]
    if not isinstance(data, dict):
        raise MetadataQueryError(
            f"Expected a JSON object from nix derivation show, got {type(data).__name__}"
        )

    metadata: dict[str, PackageMetadata] = {}
    for drv_path, drv in data.items():
        if not isinstance(drv, dict) or not isinstance(drv.get("outputs"), dict):
            logger.warning("Skipping malformed derivation entry: %s", drv_path)
            continue

        env = drv.get("env") if isinstance(drv.get("env"), dict) else {}
        name = drv.get("name") or env.get("name") or ""
        pname = env.get("pname") or None

        for output in drv["outputs"].values():
            path = output.get("path") if isinstance(output, dict) else None
            if not isinstance(path, str) or not path:
                continue
            metadata[basename(path)] = PackageMetadata(
                store_path=path, name=str(name), pname=str(pname) if pname else None,
            )

    return metadata


def query_metadata(config: ListerConfig, store_paths: list[str]) -> dict[str, PackageMetadata]:
    """Batched derivation metadata for ``store_paths``, keyed by basename.

    Raises:
        MetadataQueryError: The query failed or returned unusable output.
    """
    if not store_paths:
        return {}

    result = _run("derivation", "show", *store_paths, timeout=config.command_timeout)
    if result.failed:
        raise MetadataQueryError(f"Error querying package metadata: {result.message}")
    if result.empty:
        raise MetadataQueryError("nix derivation show returned no output")

    return parse_derivations(result.stdout)


# ═══════════════════════════════════════════════════════════════════
#  Resolve
# ═══════════════════════════════════════════════════════════════════


def build_record(store_path: str, meta: PackageMetadata | None = None) -> PackageRecord:
    """Build a PackageRecord, preferring nix's ``pname`` for the short name."""
    raw_name = basename(store_path)
    derived = derive_name(raw_name)
    short = meta.pname if meta and meta.pname else derive_short_name(derived)
    return PackageRecord(
        store_path=store_path,
        raw_name=raw_name,
        derived_name=derived,
        short_name=short,
        nix_name=meta.name if meta else "",
    )


def resolve_packages(config: ListerConfig, config_name: str) -> PackageListing:
    """Resolve every declared system package of ``config_name``."""
    store_paths = evaluate_store_paths(config, config_name)
    metadata = query_metadata(config, store_paths)

    packages = [build_record(p, metadata.get(basename(p))) for p in store_paths]
    unnamed = sum(1 for p in packages if not p.derived_name)
    if unnamed:
        logger.warning("%d package(s) have no recognizable name", unnamed)

    return PackageListing(
        config_name=config_name,
        attribute=config.attribute(config_name),
        packages=packages,
    )
