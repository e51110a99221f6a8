"""Verbose reporting and structured audit logging."""

from .audit import AuditEvent, JsonlAuditLogger, rule_event, summary_event, utc_timestamp
from .verbose import VerboseReporter

__all__ = [
    "AuditEvent",
    "JsonlAuditLogger",
    "VerboseReporter",
    "rule_event",
    "summary_event",
    "utc_timestamp",
]
