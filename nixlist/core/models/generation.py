"""
Generation models — system profile snapshots and their closure diff.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ChangeKind = Literal["added", "removed", "upgraded", "downgraded", "changed"]

MARKERS: dict[str, str] = {
    "added": "+",
    "removed": "-",
    "upgraded": "↑",
    "downgraded": "↓",
    "changed": "~",
}


class GenerationSnapshot(BaseModel):
    """A numbered system generation and the artifact it points at."""

    number: int
    timestamp: datetime
    artifact_path: str
    version: str = ""

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "timestamp": self.timestamp.isoformat(),
            "artifact_path": self.artifact_path,
            "version": self.version,
        }


class ChangeEntry(BaseModel):
    """One line of a closure diff."""

    kind: ChangeKind
    description: str

    @property
    def marker(self) -> str:
        return MARKERS[self.kind]

    def to_dict(self) -> dict:
        return {"kind": self.kind, "marker": self.marker, "description": self.description}


class GenerationDiff(BaseModel):
    """Comparison of the active generation against the one before it.

    ``previous`` is None when there is nothing to compare against;
    that is a normal outcome, not an error.
    """

    current: GenerationSnapshot
    previous: GenerationSnapshot | None = None
    changes: list[ChangeEntry] = Field(default_factory=list)
    raw_change_count: int = 0

    @property
    def has_previous(self) -> bool:
        return self.previous is not None

    @property
    def version_changed(self) -> bool:
        return self.previous is not None and self.previous.version != self.current.version

    @property
    def filtered_to_empty(self) -> bool:
        """Comparison produced entries, but all of them were noise."""
        return not self.changes and self.raw_change_count > 0

    def to_dict(self) -> dict:
        return {
            "current": self.current.to_dict(),
            "previous": self.previous.to_dict() if self.previous else None,
            "version_changed": self.version_changed,
            "changes": [c.to_dict() for c in self.changes],
            "raw_change_count": self.raw_change_count,
        }
