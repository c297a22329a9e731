"""
Domain models — Pydantic types for nix-list.

All models are re-exported here for convenient access:

    from nixlist.core.models import PackageRecord, GenerationDiff, CommandResult
"""

from nixlist.core.models.generation import (
    ChangeEntry,
    GenerationDiff,
    GenerationSnapshot,
)
from nixlist.core.models.package import PackageListing, PackageMetadata, PackageRecord
from nixlist.core.models.result import CommandResult

__all__ = [
    # generation.py
    "ChangeEntry",
    # result.py
    "CommandResult",
    "GenerationDiff",
    "GenerationSnapshot",
    # package.py
    "PackageListing",
    "PackageMetadata",
    "PackageRecord",
]
