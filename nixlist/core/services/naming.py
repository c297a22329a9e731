"""
Name derivation — turn store path basenames into package names.

    /nix/store/<32-char hash>-jq-1.7.1   →   jq

Both rules are best-effort heuristics.  A name the rules consume
entirely comes back as ``""``, which callers treat as "unknown".
"""

from __future__ import annotations

import re

# Content hash prefix of a store path basename
_HASH_PREFIX = re.compile(r"^[a-z0-9]{32}-")

# Version suffix: first "-<digit>" and everything after it
_VERSION_SUFFIX = re.compile(r"-[0-9].*$")

# Version or revision suffix for short names: -1.2.3, -git20240101
_SHORT_SUFFIX = re.compile(r"-(?:[0-9]|git).*$")


def basename(store_path: str) -> str:
    """Last path segment of a store path."""
    return store_path.rstrip("/").split("/")[-1]


def strip_hash(name: str) -> str:
    """Remove the 32-character hash prefix, if present."""
    return _HASH_PREFIX.sub("", name, count=1)


def derive_name(raw_name: str) -> str:
    """Package name from a store path or its basename.

    >>> derive_name("a1b2c3d4e5f6a1b2c3d4e5f6a1b2c3d4-jq-1.7.1")
    'jq'
    """
    return _VERSION_SUFFIX.sub("", strip_hash(basename(raw_name)))


def derive_short_name(derived_name: str) -> str:
    """Short name used when nix reports no ``pname``.

    Strips a trailing ``-<digits...>`` or ``-git<anything>`` suffix.
    """
    return _SHORT_SUFFIX.sub("", derived_name)
