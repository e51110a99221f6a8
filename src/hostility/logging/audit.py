"""Structured JSONL audit log utilities."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path


@dataclass(slots=True, frozen=True)
class AuditEvent:
    """One applied rule, or the summary of a whole run."""

    timestamp: str
    event: str
    option: str | None
    value: str | None
    action: str | None
    changed: bool
    metadata: dict[str, object] = field(default_factory=dict)


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def rule_event(option: str, value: str, action: str, changed: bool) -> AuditEvent:
    """Build the event recorded after a rule has been applied."""
    return AuditEvent(
        timestamp=utc_timestamp(),
        event="rule",
        option=option,
        value=value,
        action=action,
        changed=changed,
    )


def summary_event(
    input_path: str,
    output_path: str,
    changed: bool,
    dry_run: bool,
    rule_count: int,
    duplicates_removed: int,
) -> AuditEvent:
    """Build the event recorded once per run."""
    return AuditEvent(
        timestamp=utc_timestamp(),
        event="summary",
        option=None,
        value=None,
        action=None,
        changed=changed,
        metadata={
            "input": input_path,
            "output": output_path,
            "dry_run": dry_run,
            "rule_count": rule_count,
            "duplicates_removed": duplicates_removed,
        },
    )


class JsonlAuditLogger:
    """Append-only JSONL audit logger."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, event: AuditEvent) -> None:
        """Append an event as one JSON object per line."""
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(event), sort_keys=True))
            handle.write("\n")

