"""
Package lookup — resolve a user-supplied identifier to one package.
"""

from __future__ import annotations

import logging

from nixlist.core.errors import AmbiguousPackage, PackageNotFound
from nixlist.core.models.package import PackageListing, PackageRecord

logger = logging.getLogger(__name__)


def find_package(listing: PackageListing, identifier: str) -> PackageRecord:
    """Return the single package whose derived or short name equals ``identifier``.

    Matching is exact and case-sensitive.  Packages with empty names
    never match.

    Raises:
        PackageNotFound: No package matched.
        AmbiguousPackage: Several packages matched; ``matches`` lists them.
    """
    matches = [p for p in listing.packages if identifier and identifier in p.identifiers]
    logger.debug("Lookup %r: %d match(es)", identifier, len(matches))

    if not matches:
        raise PackageNotFound(
            f"Package '{identifier}' not found in configuration '{listing.config_name}'"
        )

    if len(matches) > 1:
        described = [f"{p.derived_name} ({p.store_path})" for p in matches]
        raise AmbiguousPackage(
            f"Package '{identifier}' is ambiguous in configuration "
            f"'{listing.config_name}'; matches:\n  " + "\n  ".join(described),
            matches=[p.derived_name for p in matches],
        )

    return matches[0]
