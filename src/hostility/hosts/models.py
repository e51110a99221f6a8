"""Typed models for parsed host-table lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class LineKind(Enum):
    """Classification of one physical line."""

    BLANK = "blank"
    COMMENT = "comment"
    ENTRY = "entry"


@dataclass(slots=True)
class Line:
    """One physical line of a host table, in original order."""

    kind: LineKind
    comment: str | None = None
    ip_address: str | None = None
    hosts: list[str] = field(default_factory=list)
    dirty: bool = False
    suppressed: bool = False

    @property
    def is_active_entry(self) -> bool:
        """Return True for entry lines still contributing to output."""
        return self.kind is LineKind.ENTRY and not self.suppressed

    def remove_host(self, host: str) -> None:
        """Drop a host, suppressing the line once no host is left."""
        self.hosts = [item for item in self.hosts if item != host]
        self.dirty = True
        if not self.hosts:
            self.suppressed = True
