"""Typed models for command-line rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

ACTION_SET: Final = "set"
ACTION_UNSET: Final = "unset"
ACTION_UNSET_IP_IF_EQUALS: Final = "unset_ip_if_equals"
ACTION_UNSET_IP_IF_MATCHES: Final = "unset_ip_if_matches"
ACTION_UNSET_HOST_IF_EQUALS: Final = "unset_host_if_equals"
ACTION_UNSET_HOST_IF_MATCHES: Final = "unset_host_if_matches"


@dataclass(slots=True, frozen=True)
class HostEntry:
    """One `{ip}:{host}` pair."""

    ip_address: str
    host: str


@dataclass(slots=True, frozen=True)
class Rule:
    """One validated rule, in the order it was given on the command line."""

    index: int
    option: str
    value: str
    action: str
    entries: tuple[HostEntry, ...] = ()
    pattern: str = ""
    regex: re.Pattern[str] | None = None
    first: bool = False


@dataclass(slots=True, frozen=True)
class RuleOutcome:
    """Result of applying one host entry or pattern of a rule."""

    rule: Rule
    changed: bool
    entry: HostEntry | None = None


@dataclass(slots=True, frozen=True)
class RuleError(Exception):
    """Raised when a rule operand is invalid."""

    reason: str
    hint: str

    def __str__(self) -> str:
        return f"{self.reason} ({self.hint})"
