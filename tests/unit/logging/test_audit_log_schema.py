from __future__ import annotations

import json
from pathlib import Path

from hostility.hosts import HostsFile
from hostility.logging import JsonlAuditLogger, summary_event
from hostility.rules import apply_rules, build_rule


def test_audit_log_writes_one_event_per_rule(tmp_path: Path) -> None:
    audit_path = tmp_path / "logs" / "audit.jsonl"
    logger = JsonlAuditLogger(path=audit_path)
    hosts_file = HostsFile()
    hosts_file.parse("10.0.0.1 a")

    apply_rules(
        hosts_file,
        [
            build_rule(0, "--set", "10.0.0.1:a"),
            build_rule(1, "--set", "10.0.0.1:b"),
        ],
        audit_logger=logger,
    )

    lines = audit_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first, second = (json.loads(line) for line in lines)
    assert set(first.keys()) == {
        "action",
        "changed",
        "event",
        "metadata",
        "option",
        "timestamp",
        "value",
    }
    assert first["event"] == "rule"
    assert first["option"] == "--set"
    assert first["value"] == "10.0.0.1:a"
    assert first["changed"] is False
    assert second["changed"] is True
    assert isinstance(first["timestamp"], str)



def test_summary_event_is_appended_as_one_json_line(tmp_path: Path) -> None:
    audit_path = tmp_path / "audit.jsonl"
    logger = JsonlAuditLogger(path=audit_path)

    logger.append(
        summary_event(
            input_path="-",
            output_path="-",
            changed=False,
            dry_run=True,
            rule_count=3,
            duplicates_removed=1,
        )
    )

    (record,) = (json.loads(line) for line in audit_path.read_text(encoding="utf-8").splitlines())
    assert record["event"] == "summary"
    assert record["option"] is None
    assert record["metadata"] == {
        "dry_run": True,
        "duplicates_removed": 1,
        "input": "-",
        "output": "-",
        "rule_count": 3,
    }
