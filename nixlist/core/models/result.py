"""
CommandResult — the outcome of one external process invocation.

The shell adapter NEVER raises for process failures; everything it
learns about a run lands here.  Services decide which error from the
taxonomy a failed or empty result becomes.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Result of running an external command.

    ``status`` distinguishes three outcomes:

    - ``ok``: exit 0 with output on stdout
    - ``empty``: exit 0 but stdout is blank
    - ``failed``: nonzero exit, missing executable or timeout
    """

    args: list[str] = Field(default_factory=list)
    status: Literal["ok", "empty", "failed"] = "ok"
    return_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the command succeeded with output."""
        return self.status == "ok"

    @property
    def empty(self) -> bool:
        """Whether the command succeeded without output."""
        return self.status == "empty"

    @property
    def failed(self) -> bool:
        """Whether the command failed."""
        return self.status == "failed"

    @property
    def message(self) -> str:
        """Best available description of what went wrong."""
        return self.error or self.stderr.strip() or f"exited with code {self.return_code}"

    @classmethod
    def success(cls, args: list[str], stdout: str, **kwargs: Any) -> CommandResult:
        """Create an ``ok`` or ``empty`` result depending on stdout."""
        status = "ok" if stdout.strip() else "empty"
        return cls(args=args, status=status, stdout=stdout, **kwargs)

    @classmethod
    def failure(cls, args: list[str], error: str, **kwargs: Any) -> CommandResult:
        """Create a failure result."""
        return cls(args=args, status="failed", error=error, **kwargs)
