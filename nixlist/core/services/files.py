"""
File enumeration — every path inside one package's store path.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from nixlist.adapters.shell.filesystem import walk_tree
from nixlist.core.models.config import ListerConfig
from nixlist.core.models.package import PackageRecord
from nixlist.core.services.lookup import find_package
from nixlist.core.services.resolver import resolve_packages


def package_files(record: PackageRecord) -> Iterator[Path]:
    """Lazy walk of ``record.store_path``; see ``walk_tree`` for errors."""
    return walk_tree(Path(record.store_path))


def find_package_files(
    config: ListerConfig,
    config_name: str,
    identifier: str,
) -> tuple[PackageRecord, Iterator[Path]]:
    """Resolve ``identifier`` in ``config_name`` and start walking its files."""
    listing = resolve_packages(config, config_name)
    record = find_package(listing, identifier)
    return record, package_files(record)
