"""
Shell command adapter — run external commands and capture output.

Every call to nix, brew or any other tool goes through ``run_command``.
It never raises for process failures: a nonzero exit, a missing
executable and a timeout all come back as a failed CommandResult.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time

from nixlist.core.models.result import CommandResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300


def is_available(command: str) -> bool:
    """Whether ``command`` resolves to an executable on PATH."""
    return shutil.which(command) is not None


def run_command(
    args: list[str],
    timeout: int = DEFAULT_TIMEOUT,
) -> CommandResult:
    """Run ``args`` without a shell and return what happened."""
    logger.debug("Executing: %s", " ".join(args))
    start = time.monotonic()

    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        return CommandResult.failure(args, f"Command not found: {args[0]}")
    except subprocess.TimeoutExpired:
        return CommandResult.failure(args, f"Command timed out after {timeout}s")
    except OSError as e:
        return CommandResult.failure(args, f"Command execution error: {e}")

    elapsed_ms = int((time.monotonic() - start) * 1000)
    logger.debug("%s exited %d in %dms", args[0], result.returncode, elapsed_ms)

    if result.returncode != 0:
        return CommandResult(
            args=args,
            status="failed",
            return_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            duration_ms=elapsed_ms,
        )

    return CommandResult.success(
        args,
        result.stdout,
        return_code=result.returncode,
        stderr=result.stderr,
        duration_ms=elapsed_ms,
    )
