"""
Shared test fixtures and configuration.
"""

import logging
import os
from pathlib import Path

import pytest

from nixlist.core.models.config import ListerConfig
from nixlist.core.models.result import CommandResult

HASH = "0c4b8f3d9a2e7f1b6c5d4e3f2a1b0c9d"
OTHER_HASH = "9z8y7x6w5v4u3t2s1r0q9p8o7n6m5l4k"


def ok_result(stdout: str, args: list[str] | None = None) -> CommandResult:
    """A successful CommandResult (status ``empty`` when stdout is blank)."""
    return CommandResult.success(args or ["nix"], stdout, return_code=0)


def failed_result(stderr: str, return_code: int = 1) -> CommandResult:
    """A failed CommandResult as produced by a nonzero exit."""
    return CommandResult(args=["nix"], status="failed", return_code=return_code, stderr=stderr)


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch):
    """Keep the user's environment and config file out of every test."""
    for var in ("FLAKE_DIR", "NIX_LIST_CONFIG", "NIX_LIST_LOG_LEVEL",
                "NIX_LIST_LOG_FILE", "NIX_LIST_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(
        "nixlist.core.config.loader.DEFAULT_CONFIG_FILE",
        tmp_path / "absent-nix-list.yml",
    )


@pytest.fixture(autouse=True)
def _reset_nixlist_logger():
    """Drop handlers the CLI attached so they never outlive CliRunner's streams."""
    yield
    logger = logging.getLogger("nixlist")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def profiles_dir(tmp_path: Path) -> Path:
    """Directory holding fake system generation links."""
    path = tmp_path / "profiles"
    path.mkdir()
    return path


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """Directory standing in for /nix/store."""
    path = tmp_path / "store"
    path.mkdir()
    return path


@pytest.fixture
def lister_config(tmp_path: Path, profiles_dir: Path) -> ListerConfig:
    """Config pointing at temporary flake and profile directories."""
    return ListerConfig(flake_dir=tmp_path / "flake", profiles_dir=profiles_dir)


@pytest.fixture
def make_generation(profiles_dir: Path, store_dir: Path):
    """Factory: create ``system-<n>-link`` pointing at a darwin-system artifact."""

    def _make(number: int, version: str, mtime: float | None = None) -> Path:
        artifact = store_dir / f"{HASH[:-len(str(number))]}{number}-darwin-system-{version}"
        artifact.mkdir()
        link = profiles_dir / f"system-{number}-link"
        link.symlink_to(artifact)
        if mtime is not None:
            os.utime(link, (mtime, mtime), follow_symlinks=False)
        return artifact

    return _make


@pytest.fixture
def activate(profiles_dir: Path):
    """Factory: point the ``system`` profile link at generation ``n``."""

    def _activate(number: int) -> None:
        (profiles_dir / "system").symlink_to(f"system-{number}-link")

    return _activate
