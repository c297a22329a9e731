"""
Generation diff — what changed between the last two system generations.

The active profile link (``/nix/var/nix/profiles/system``) points at
``system-<N>-link``, which points at the system artifact in the store.
Generation ``N`` is compared against ``N - 1`` with
``nix store diff-closures``; nothing older is consulted.

Typical diff-closures lines::

    jq: 1.7 → 1.7.1, +12.3 KiB
    ripgrep: ∅ → 14.1.0, +4812.0 KiB
    darwin-system: 25.05.abc → 25.11.def
"""

from __future__ import annotations

import errno
import logging
import os
import re
from datetime import datetime
from pathlib import Path

from nixlist.adapters.shell.command import run_command
from nixlist.core.errors import DiffError, GenerationResolutionError, PermissionDenied
from nixlist.core.models.config import ListerConfig
from nixlist.core.models.generation import ChangeEntry, GenerationDiff, GenerationSnapshot
from nixlist.core.models.result import CommandResult
from nixlist.core.services.naming import basename, strip_hash

logger = logging.getLogger(__name__)

ABSENT = "∅"

_ANSI = re.compile(r"\x1b\[[0-9;]*m")
_DIFF_LINE = re.compile(r"^(?P<name>[^:]+):\s*(?P<rest>.*)$")
_SIZE_SUFFIX = re.compile(r",?\s*[+-]\d[\d.]*\s*[KMGT]?i?B$")

SUDO_HINT = "Re-run with elevated privilege, e.g. `sudo nix-list <config-name> --updated`."


def _run(*args: str, timeout: int = 300) -> CommandResult:
    """Run a nix command and return the result."""
    return run_command(["nix", *args], timeout=timeout)


def _permission_denied(path: Path | str, err: OSError | None = None) -> PermissionDenied:
    detail = f": {err.strerror}" if err and err.strerror else ""
    return PermissionDenied(f"Permission denied reading {path}{detail}. {SUDO_HINT}")


# ═══════════════════════════════════════════════════════════════════
#  Snapshots
# ═══════════════════════════════════════════════════════════════════


def artifact_version(artifact_path: str, system_artifact_name: str) -> str:
    """Overall version identifier of a system artifact.

    ``<hash>-darwin-system-25.11.abc123`` → ``25.11.abc123``
    """
    name = strip_hash(basename(artifact_path))
    prefix = f"{system_artifact_name}-"
    return name[len(prefix):] if name.startswith(prefix) else name


def current_generation_number(config: ListerConfig) -> int:
    """Number of the active generation, read from the profile link.

    Raises:
        GenerationResolutionError: The profile link is missing or malformed.
        PermissionDenied: The link cannot be read.
    """
    link = config.profile_link
    try:
        target = os.readlink(link)
    except PermissionError as e:
        raise _permission_denied(link, e) from e
    except OSError as e:
        raise GenerationResolutionError(f"Cannot resolve active profile {link}: {e.strerror}") from e

    pattern = re.compile(rf"^{re.escape(config.profile_name)}-(\d+)-link$")
    match = pattern.match(basename(target))
    if not match:
        raise GenerationResolutionError(
            f"Active profile {link} points at {target}, not a numbered generation"
        )
    return int(match.group(1))


def load_snapshot(config: ListerConfig, number: int) -> GenerationSnapshot | None:
    """Snapshot of generation ``number``, or None if it no longer exists.

    A generation exists when its link is present and the artifact it
    points at is still on disk.

    Raises:
        PermissionDenied: The link or artifact cannot be read.
    """
    link = config.generation_link(number)
    try:
        stat = os.lstat(link)
        artifact = os.path.realpath(link)
        present = os.path.exists(artifact)
    except PermissionError as e:
        raise _permission_denied(link, e) from e
    except FileNotFoundError:
        return None
    except OSError as e:
        if e.errno == errno.EACCES:
            raise _permission_denied(link, e) from e
        raise GenerationResolutionError(f"Cannot read generation {number}: {e.strerror}") from e

    if not present:
        logger.info("Generation %d artifact missing: %s", number, artifact)
        return None

    return GenerationSnapshot(
        number=number,
        timestamp=datetime.fromtimestamp(stat.st_mtime).astimezone(),
        artifact_path=artifact,
        version=artifact_version(artifact, config.system_artifact_name),
    )


# ═══════════════════════════════════════════════════════════════════
#  Diff parsing
# ═══════════════════════════════════════════════════════════════════


def _version_key(version: str) -> tuple:
    parts = [p for p in re.split(r"[.\-+_]", version) if p]
    return tuple((0, int(p), "") if p.isdigit() else (1, 0, p) for p in parts)


def _last_version(versions: str) -> str:
    return versions.split(",")[-1].strip()


def classify_versions(old: str, new: str) -> str:
    """Change kind for an ``old → new`` version transition."""
    if old == ABSENT:
        return "added"
    if new == ABSENT:
        return "removed"
    old_key, new_key = _version_key(_last_version(old)), _version_key(_last_version(new))
    if not old_key or not new_key or old_key == new_key:
        return "changed"
    return "upgraded" if new_key > old_key else "downgraded"


def parse_diff_line(line: str) -> ChangeEntry | None:
    """Parse one ``nix store diff-closures`` line; None for blank lines."""
    line = _ANSI.sub("", line).strip()
    if not line:
        return None

    match = _DIFF_LINE.match(line)
    if not match or "→" not in match.group("rest"):
        return ChangeEntry(kind="changed", description=line)

    old, _, new = match.group("rest").partition("→")
    new = _SIZE_SUFFIX.sub("", new.strip())
    return ChangeEntry(kind=classify_versions(old.strip(), new.strip()), description=line)


def parse_diff(output: str) -> list[ChangeEntry]:
    """Parse the full diff-closures output, keeping line order."""
    entries = []
    for line in output.splitlines():
        entry = parse_diff_line(line)
        if entry is not None:
            entries.append(entry)
    return entries


def filter_system_entries(entries: list[ChangeEntry], system_artifact_name: str) -> list[ChangeEntry]:
    """Drop entries about the system artifact itself; it changes on every rebuild."""
    return [e for e in entries if system_artifact_name not in e.description]


# ═══════════════════════════════════════════════════════════════════
#  Diff
# ═══════════════════════════════════════════════════════════════════


def diff_closures(config: ListerConfig, previous: str, current: str) -> list[ChangeEntry]:
    """Closure diff between two system artifacts.

    Raises:
        DiffError: ``nix store diff-closures`` failed.
        PermissionDenied: nix reported a permission error.
    """
    result = _run("store", "diff-closures", previous, current, timeout=config.command_timeout)
    if result.failed:
        if "permission denied" in result.stderr.lower():
            raise PermissionDenied(f"Permission denied comparing generations. {SUDO_HINT}")
        raise DiffError(f"Error comparing {previous} and {current}: {result.message}")
    return parse_diff(result.stdout)


def generation_diff(config: ListerConfig) -> GenerationDiff:
    """Compare the active generation against the one before it.

    A missing previous generation is not an error: the returned diff
    has ``previous=None`` and no changes.

    Raises:
        GenerationResolutionError: The active generation cannot be resolved.
        PermissionDenied: Generation metadata is not readable.
        DiffError: The closure comparison failed.
    """
    number = current_generation_number(config)
    current = load_snapshot(config, number)
    if current is None:
        raise GenerationResolutionError(
            f"Active generation {number} has no artifact ({config.generation_link(number)})"
        )

    previous = load_snapshot(config, number - 1) if number > 1 else None
    if previous is None:
        logger.info("No previous generation before %d", number)
        return GenerationDiff(current=current)

    entries = diff_closures(config, previous.artifact_path, current.artifact_path)
    changes = filter_system_entries(entries, config.system_artifact_name)
    logger.info(
        "Generation %d → %d: %d change(s), %d after filtering",
        previous.number, current.number, len(entries), len(changes),
    )

    return GenerationDiff(
        current=current,
        previous=previous,
        changes=changes,
        raw_change_count=len(entries),
    )
