"""
Homebrew listing — the secondary package manager, passed through as-is.

Never fails the invocation: a missing or broken ``brew`` is reported in
the returned dict and printed as a note.
"""

from __future__ import annotations

import logging

from nixlist.adapters.shell.command import is_available, run_command
from nixlist.core.models.config import ListerConfig
from nixlist.core.models.result import CommandResult

logger = logging.getLogger(__name__)


def _run(*args: str, timeout: int = 60) -> CommandResult:
    return run_command(list(args), timeout=timeout)


def list_homebrew_packages(config: ListerConfig) -> dict:
    """Raw ``brew list`` output.

    Returns:
        {
            "available": bool,   # brew is on PATH
            "ok": bool,          # brew list exited 0
            "output": str,       # stdout, unmodified
        }
    """
    manager = config.secondary_manager
    if not is_available(manager):
        logger.info("%s not found on PATH", manager)
        return {"available": False, "ok": False, "output": ""}

    result = _run(manager, "list", timeout=config.command_timeout)
    if result.failed:
        logger.warning("%s list failed: %s", manager, result.message)
        return {"available": True, "ok": False, "output": ""}

    return {"available": True, "ok": True, "output": result.stdout}
