from __future__ import annotations

import io

from hostility.hosts import HostsFile
from hostility.logging import VerboseReporter


def test_model_reports_progress_when_enabled() -> None:
    stream = io.StringIO()
    hosts_file = HostsFile(reporter=VerboseReporter(stream=stream))
    hosts_file.parse("10.0.0.1 a")

    hosts_file.set_entry("10.0.0.2", "b")
    hosts_file.set_entry("10.0.0.1", "a")

    lines = stream.getvalue().splitlines()
    assert "  + Ip address '10.0.0.2' has been added" in lines
    assert "  + Host 'b' has been added (last)" in lines
    assert "  + Ip address '10.0.0.1' exists (enabled)" in lines
    assert "  + host already exists" in lines


def test_disabled_reporter_writes_nothing() -> None:
    stream = io.StringIO()
    reporter = VerboseReporter(stream=stream, enabled=False)

    reporter.note("hidden")

    assert reporter.enabled is False
    assert stream.getvalue() == ""
