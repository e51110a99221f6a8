"""Parse and validate rule operands given on the command line."""

from __future__ import annotations

import ipaddress
import re
from pathlib import Path

from hostility.rules.models import (
    ACTION_SET,
    ACTION_UNSET,
    ACTION_UNSET_HOST_IF_EQUALS,
    ACTION_UNSET_HOST_IF_MATCHES,
    ACTION_UNSET_IP_IF_EQUALS,
    ACTION_UNSET_IP_IF_MATCHES,
    HostEntry,
    Rule,
    RuleError,
)

ENTRY_HINT = "should match {ip}:{host}"


def is_valid_ip_address(value: str) -> bool:
    """Return True for IPv4 and IPv6 literals."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def parse_host_entry(value: str) -> HostEntry:
    """Parse `{ip}:{host}`.

    The split happens on the last colon so IPv6 addresses keep their own.
    """
    ip_part, separator, host_part = value.strip().rpartition(":")
    ip_address = ip_part.strip()
    host = host_part.strip()
    if not separator or not is_valid_ip_address(ip_address) or not host:
        raise RuleError(reason=f"Invalid entry '{value.strip()}'", hint=ENTRY_HINT)
    return HostEntry(ip_address=ip_address, host=host)


def parse_host_entries(content: str) -> tuple[HostEntry, ...]:
    """Parse a rule file, one `{ip}:{host}` per line.

    Blank lines and lines starting with `#` are ignored.
    """
    entries: list[HostEntry] = []
    for line_number, raw_line in enumerate(content.split("\n"), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            entries.append(parse_host_entry(line))
        except RuleError as error:
            raise RuleError(
                reason=error.reason,
                hint=f"line {line_number} {ENTRY_HINT}",
            ) from error
    return tuple(entries)


def load_host_entries(path: Path) -> tuple[HostEntry, ...]:
    """Read and parse a rule file."""
    if not path.is_file():
        raise RuleError(reason=f"Invalid file '{path}'", hint="file does not exist")
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise RuleError(reason=f"Invalid file '{path}'", hint="could not read from file") from error
    return parse_host_entries(content)


def parse_pattern(value: str) -> tuple[str, re.Pattern[str] | None]:
    """Split a pattern operand into its text and, for `/.../`, a compiled regex."""
    pattern = value.strip()
    if not (pattern.startswith("/") and pattern.endswith("/")):
        return pattern, None
    expression = pattern[1:-1].strip()
    if not expression:
        raise RuleError(reason=f"Invalid pattern '{pattern}'", hint="regexp is empty")
    try:
        return expression, re.compile(expression)
    except re.error as error:
        raise RuleError(reason=f"Invalid pattern '{pattern}'", hint="regexp is invalid") from error


def build_rule(index: int, option: str, value: str) -> Rule:
    """Build a validated rule for one command-line option occurrence."""
    stripped = value.strip()
    if option in {"--set", "--set-first"}:
        return Rule(
            index=index,
            option=option,
            value=stripped,
            action=ACTION_SET,
            entries=(parse_host_entry(stripped),),
            first=option == "--set-first",
        )
    if option == "--unset":
        return Rule(
            index=index,
            option=option,
            value=stripped,
            action=ACTION_UNSET,
            entries=(parse_host_entry(stripped),),
        )
    if option in {"--set-from-file", "--unset-from-file"}:
        return Rule(
            index=index,
            option=option,
            value=stripped,
            action=ACTION_SET if option == "--set-from-file" else ACTION_UNSET,
            entries=load_host_entries(Path(stripped)),
        )
    if option == "--unset-ip":
        pattern, regex = parse_pattern(stripped)
        return Rule(
            index=index,
            option=option,
            value=stripped,
            action=ACTION_UNSET_IP_IF_EQUALS if regex is None else ACTION_UNSET_IP_IF_MATCHES,
            pattern=pattern,
            regex=regex,
        )
    if option == "--unset-host":
        pattern, regex = parse_pattern(stripped)
        return Rule(
            index=index,
            option=option,
            value=stripped,
            action=ACTION_UNSET_HOST_IF_EQUALS if regex is None else ACTION_UNSET_HOST_IF_MATCHES,
            pattern=pattern,
            regex=regex,
        )
    raise RuleError(reason=f"Unknown option '{option}'", hint="not a rule option")
