"""
Package models — one resolved entry of ``environment.systemPackages``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PackageMetadata(BaseModel):
    """Derivation metadata for one store path, as reported by nix."""

    store_path: str
    name: str = ""
    pname: str | None = None


class PackageRecord(BaseModel):
    """A declared system package.

    ``derived_name`` and ``short_name`` may be empty when the naming
    heuristics consume the whole basename; an empty name means
    "unknown" and never matches a lookup.  ``nix_name`` is the derivation
    name nix reported, when it reported one.
    """

    model_config = {"frozen": True}

    store_path: str
    raw_name: str
    derived_name: str = ""
    short_name: str = ""
    nix_name: str = ""

    @property
    def identifiers(self) -> set[str]:
        """Non-empty names this package can be looked up by."""
        return {n for n in (self.derived_name, self.short_name) if n}

    def to_dict(self) -> dict:
        return {
            "store_path": self.store_path,
            "raw_name": self.raw_name,
            "derived_name": self.derived_name,
            "short_name": self.short_name,
            "nix_name": self.nix_name,
        }


class PackageListing(BaseModel):
    """All packages resolved for one system configuration."""

    config_name: str
    attribute: str
    packages: list[PackageRecord] = Field(default_factory=list)

    @property
    def names(self) -> list[str]:
        """Sorted, de-duplicated, non-empty derived names."""
        return sorted({p.derived_name for p in self.packages if p.derived_name})
