"""
Error taxonomy — every failure the tool reports to the user.

Services raise these; the CLI catches ``NixListError`` once, prints the
message on stderr and exits with ``exit_code``.  None of them is ever
retried: each source is a deterministic external query or a filesystem
check.
"""

from __future__ import annotations


class NixListError(Exception):
    """Base class for all user-facing failures."""

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigError(NixListError):
    """Raised when the tool's own configuration file is invalid."""


class ConfigNotFound(NixListError):
    """The named system configuration does not exist in the flake."""


class EvaluationError(NixListError):
    """``nix eval`` failed or produced nothing usable."""


class MetadataQueryError(NixListError):
    """The batched derivation metadata query failed."""


class PackageNotFound(NixListError):
    """No package matched the requested identifier."""


class AmbiguousPackage(NixListError):
    """More than one package matched the requested identifier."""

    def __init__(self, message: str, matches: list[str]) -> None:
        super().__init__(message)
        self.matches = matches


class ArtifactMissing(NixListError):
    """A package's store path is gone from disk."""


class TraversalError(NixListError):
    """Walking a store path failed partway through."""


class GenerationResolutionError(NixListError):
    """The active system generation could not be resolved."""


class DiffError(NixListError):
    """``nix store diff-closures`` failed."""


class PermissionDenied(NixListError):
    """Reading generation metadata needs elevated privilege."""
