"""In-memory host table: parser, mutator and serializer."""

from __future__ import annotations

import re
from typing import Final

from hostility.hosts.models import Line, LineKind
from hostility.logging import VerboseReporter

WHITESPACE_RUN_PATTERN: Final[re.Pattern[str]] = re.compile(r"[ \t]+")


class HostsFile:
    """Parsed host table with IP and hostname indexes kept in sync.

    Lines live in a list and never move. Both indexes refer to lines by their
    position in that list, so a line reached through one index is the same
    record seen through the other.
    """

    def __init__(
        self,
        strip_comments: bool = False,
        strip_blank_lines: bool = False,
        reporter: VerboseReporter | None = None,
    ) -> None:
        self._strip_comments = strip_comments
        self._strip_blank_lines = strip_blank_lines
        self._reporter = reporter
        self._lines: list[Line] = []
        self._by_ip_address: dict[str, int] = {}
        self._by_host: dict[str, list[int]] = {}

    @property
    def lines(self) -> tuple[Line, ...]:
        """Return the current lines in original order."""
        return tuple(self._lines)

    def parse(self, content: str) -> None:
        """Replace current state with the parsed content."""
        self._reset()
        normalized = content.replace("\r\n", "\n").replace("\r", "\n").rstrip()
        if not normalized:
            return
        for raw_line in normalized.split("\n"):
            self._lines.append(self._parse_line(raw_line))
        self._build_indexes()

    def set_entry(self, ip_address: str, host: str, *, first: bool = False) -> bool:
        """Add a host to an IP address.

        Returns True when content changed: a new line, a new host, or an
        existing host moved to the first position.
        """
        position = self._by_ip_address.get(ip_address)
        placement = "first" if first else "last"
        if position is None:
            self._note(f"  + Ip address '{ip_address}' has been added")
            self._lines.append(
                Line(kind=LineKind.ENTRY, ip_address=ip_address, hosts=[host], dirty=True)
            )
            position = len(self._lines) - 1
            self._by_ip_address[ip_address] = position
            self._index_host(host, position)
            self._note(f"  + Host '{host}' has been added ({placement})")
            return True

        line = self._lines[position]
        state = "disabled" if line.suppressed else "enabled"
        self._note(f"  + Ip address '{ip_address}' exists ({state})")
        if host in line.hosts:
            if not first or line.hosts.index(host) == 0:
                self._note("  + host already exists")
                return False
            self._note("  + host already exists but is not the first (it will be removed)")
            line.hosts.remove(host)
        if line.suppressed:
            line.suppressed = False
            self._note(f"  + Ip address '{ip_address}' has been enabled")
        if first:
            line.hosts.insert(0, host)
        else:
            line.hosts.append(host)
        line.dirty = True
        self._index_host(host, position)
        self._note(f"  + Host '{host}' has been added ({placement})")
        return True

    def unset_entry(self, ip_address: str, host: str) -> bool:
        """Remove one host from one IP address."""
        position = self._by_ip_address.get(ip_address)
        if position is None:
            self._note(f"  + Ip address '{ip_address}' does not exist")
            return False
        line = self._lines[position]
        if line.suppressed:
            self._note(f"  + Ip address '{ip_address}' exists (disabled)")
            return False
        if host not in line.hosts:
            self._note("  + Host does not exist")
            return False
        self._remove_host_from_line(position, host)
        self._unindex_host(host, position)
        self._note(f"  + Host '{host}' has been removed")
        return True

    def unset_ipaddr_if_equals(self, ip_address: str) -> bool:
        """Disable the line holding exactly this IP address."""
        position = self._by_ip_address.get(ip_address)
        if position is None:
            self._note("  + Ip address does not exist")
            return False
        if self._lines[position].suppressed:
            self._note(f"  + Ip address '{ip_address}' is disabled")
            return False
        self._disable_line(position)
        return True

    def unset_ipaddr_if_matches(self, pattern: re.Pattern[str]) -> bool:
        """Disable every active line whose IP address matches the pattern."""
        changes = 0
        for position, line in enumerate(self._lines):
            if line.ip_address is None or pattern.search(line.ip_address) is None:
                continue
            self._note(f"  + Found matching ip address '{line.ip_address}'")
            if line.suppressed:
                self._note(f"  + Ip address '{line.ip_address}' is disabled")
                continue
            self._disable_line(position)
            changes += 1
        return changes != 0

    def unset_host_if_equals(self, host: str) -> bool:
        """Remove a host from every line listing it."""
        if host not in self._by_host:
            self._note("  + Host does not exist")
            return False
        self._drop_host(host)
        return True

    def unset_host_if_matches(self, pattern: re.Pattern[str]) -> bool:
        """Remove every host matching the pattern from every line."""
        matching = [host for host in self._by_host if pattern.search(host) is not None]
        for host in matching:
            self._note(f"  + Found matching host '{host}'")
            self._drop_host(host)
        return bool(matching)

    def remove_duplicate_hosts(self) -> int:
        """Keep only the first declaration of each host.

        Returns the number of host removals.
        """
        count = 0
        for host in list(self._by_host):
            positions = self._by_host[host]
            self._note(f"Checking duplicates for host '{host}' ...")
            if len(positions) == 1:
                self._note("  + Found no duplicate")
                continue
            kept, duplicates = positions[0], positions[1:]
            duplicate_ips = ",".join(str(self._lines[p].ip_address) for p in duplicates)
            self._note(
                f"  + Found {len(duplicates)} duplicate(s) "
                f"({self._lines[kept].ip_address}|{duplicate_ips})"
            )
            count += len(duplicates)
            for position in duplicates:
                self._remove_host_from_line(position, host)
            survivors = [
                p
                for p in positions
                if not self._lines[p].suppressed and host in self._lines[p].hosts
            ]
            if survivors:
                self._by_host[host] = survivors
            else:
                del self._by_host[host]
        return count

    def has_changed(self) -> bool:
        """Return True when rendered content differs from the parsed input."""
        return any(line.dirty or line.suppressed for line in self._lines)

    def get(self) -> str:
        """Render current content, without a trailing newline."""
        rendered: list[str] = []
        for line in self._lines:
            if line.suppressed:
                continue
            text = ""
            if line.kind is LineKind.ENTRY:
                text = " ".join([str(line.ip_address), *line.hosts])
            if line.comment is not None:
                if not self._strip_comments:
                    text = f"{text} #{line.comment}" if text else f"#{line.comment}"
                elif not text:
                    continue
            rendered.append(text)
        return "\n".join(rendered)

    def hosts_for_ip(self, ip_address: str) -> tuple[str, ...]:
        """Return hosts currently listed for an IP address."""
        position = self._by_ip_address.get(ip_address)
        if position is None or self._lines[position].suppressed:
            return ()
        return tuple(self._lines[position].hosts)

    def ip_addresses_for_host(self, host: str) -> tuple[str, ...]:
        """Return IP addresses currently listing a host, in index order."""
        positions = self._by_host.get(host, [])
        return tuple(str(self._lines[p].ip_address) for p in positions)

    def _reset(self) -> None:
        self._lines = []
        self._by_ip_address = {}
        self._by_host = {}

    def _parse_line(self, raw_line: str) -> Line:
        text = WHITESPACE_RUN_PATTERN.sub(" ", raw_line.strip())
        comment: str | None = None
        comment_pos = text.find("#")
        if comment_pos != -1:
            comment = text[comment_pos + 1 :].rstrip()
            text = text[:comment_pos].strip()

        if not text:
            if comment is None:
                return Line(kind=LineKind.BLANK, suppressed=self._strip_blank_lines)
            return Line(
                kind=LineKind.COMMENT,
                comment=comment,
                dirty=self._strip_comments,
                # once stripped, a comment line counts as blank
                suppressed=self._strip_comments and self._strip_blank_lines,
            )

        ip_address, *tokens = text.split(" ")
        line = Line(
            kind=LineKind.ENTRY,
            comment=comment,
            dirty=self._strip_comments and comment is not None,
        )
        if not tokens:
            line.suppressed = True
            return line
        line.ip_address = ip_address
        for token in tokens:
            if token in line.hosts:
                line.dirty = True
                continue
            line.hosts.append(token)
        return line

    def _build_indexes(self) -> None:
        for position, line in enumerate(self._lines):
            if not line.is_active_entry or line.ip_address is None:
                continue
            first_position = self._by_ip_address.get(line.ip_address)
            if first_position is None:
                self._by_ip_address[line.ip_address] = position
                for host in line.hosts:
                    self._index_host(host, position)
                continue
            # same IP on a later line: merge into the first one
            first_line = self._lines[first_position]
            line.suppressed = True
            for host in line.hosts:
                if host in first_line.hosts:
                    continue
                first_line.hosts.append(host)
                first_line.dirty = True
                self._index_host(host, first_position)
            line.hosts = []

    def _index_host(self, host: str, position: int) -> None:
        positions = self._by_host.setdefault(host, [])
        if position not in positions:
            positions.append(position)

    def _unindex_host(self, host: str, position: int) -> None:
        positions = self._by_host.get(host)
        if positions is None:
            return
        if position in positions:
            positions.remove(position)
        if not positions:
            del self._by_host[host]
            self._note(f"  + Host '{host}' is no longer declared")

    def _remove_host_from_line(self, position: int, host: str) -> None:
        line = self._lines[position]
        line.remove_host(host)
        if line.suppressed:
            self._note(f"  + Ip address '{line.ip_address}' has been disabled")

    def _disable_line(self, position: int) -> None:
        line = self._lines[position]
        hosts = line.hosts
        line.hosts = []
        line.dirty = True
        line.suppressed = True
        self._note(f"  + Ip address '{line.ip_address}' has been disabled")
        for host in hosts:
            self._unindex_host(host, position)

    def _drop_host(self, host: str) -> None:
        for position in self._by_host[host]:
            line = self._lines[position]
            if line.suppressed:
                self._note(f"  + Ip address '{line.ip_address}' is disabled")
                continue
            self._remove_host_from_line(position, host)
        del self._by_host[host]
        self._note(f"  + Host '{host}' has been removed")

    def _note(self, message: str) -> None:
        if self._reporter is not None:
            self._reporter.note(message)
