from __future__ import annotations

from pathlib import Path

import pytest

from hostility.rules import (
    ACTION_SET,
    ACTION_UNSET,
    ACTION_UNSET_HOST_IF_EQUALS,
    ACTION_UNSET_HOST_IF_MATCHES,
    ACTION_UNSET_IP_IF_EQUALS,
    ACTION_UNSET_IP_IF_MATCHES,
    HostEntry,
    RuleError,
    build_rule,
    is_valid_ip_address,
    load_host_entries,
    parse_host_entries,
    parse_host_entry,
    parse_pattern,
)


def test_ip_address_validation_accepts_ipv4_and_ipv6() -> None:
    assert is_valid_ip_address("192.168.64.1") is True
    assert is_valid_ip_address("::1") is True
    assert is_valid_ip_address("fe80::1") is True
    assert is_valid_ip_address("256.0.0.1") is False
    assert is_valid_ip_address("host1") is False


def test_parse_host_entry_splits_on_last_colon() -> None:
    assert parse_host_entry(" 192.168.64.1 : host1 ") == HostEntry("192.168.64.1", "host1")
    assert parse_host_entry("::1:localhost") == HostEntry("::1", "localhost")


@pytest.mark.parametrize("value", ["host1", "192.168.64.1:", "not-an-ip:host1", ":host1"])
def test_parse_host_entry_rejects_invalid_values(value: str) -> None:
    with pytest.raises(RuleError) as error:
        parse_host_entry(value)

    assert error.value.hint == "should match {ip}:{host}"


def test_parse_host_entries_ignores_comments_and_blank_lines() -> None:
    content = "# hosts to add\n\n192.168.64.1:host1\n  10.0.0.1:db  \n"

    assert parse_host_entries(content) == (
        HostEntry("192.168.64.1", "host1"),
        HostEntry("10.0.0.1", "db"),
    )


def test_parse_host_entries_reports_line_number() -> None:
    with pytest.raises(RuleError, match="line 3"):
        parse_host_entries("192.168.64.1:host1\n\ninvalid\n")


def test_parse_host_entries_counts_only_newlines_as_line_breaks() -> None:
    with pytest.raises(RuleError, match="line 3"):
        parse_host_entries("# notes\x0cmore notes\n10.0.0.1:a\ninvalid\r\n")


def test_load_host_entries_requires_existing_file(tmp_path: Path) -> None:
    with pytest.raises(RuleError, match="file does not exist"):
        load_host_entries(tmp_path / "missing.txt")

    rule_file = tmp_path / "rules.txt"
    rule_file.write_text("192.168.64.1:host1\n", encoding="utf-8")
    assert load_host_entries(rule_file) == (HostEntry("192.168.64.1", "host1"),)


def test_parse_pattern_distinguishes_literal_and_regexp() -> None:
    literal, literal_regex = parse_pattern("192.168.64.1")
    assert literal == "192.168.64.1"
    assert literal_regex is None

    expression, regex = parse_pattern(r"/^192\.168\./")
    assert expression == r"^192\.168\."
    assert regex is not None
    assert regex.search("192.168.0.1") is not None


@pytest.mark.parametrize(
    ("value", "hint"),
    [("//", "regexp is empty"), ("/", "regexp is empty"), ("/[/", "regexp is invalid")],
)
def test_parse_pattern_rejects_bad_regexp(value: str, hint: str) -> None:
    with pytest.raises(RuleError) as error:
        parse_pattern(value)

    assert error.value.hint == hint


def test_build_rule_maps_options_to_actions(tmp_path: Path) -> None:
    rule_file = tmp_path / "entries.txt"
    rule_file.write_text("10.0.0.1:a\n10.0.0.2:b\n", encoding="utf-8")

    set_first = build_rule(0, "--set-first", "10.0.0.1:a")
    assert set_first.action == ACTION_SET
    assert set_first.first is True
    assert build_rule(1, "--set", "10.0.0.1:a").first is False
    assert build_rule(2, "--unset", "10.0.0.1:a").action == ACTION_UNSET
    assert build_rule(3, "--set-from-file", str(rule_file)).entries == (
        HostEntry("10.0.0.1", "a"),
        HostEntry("10.0.0.2", "b"),
    )
    assert build_rule(4, "--unset-from-file", str(rule_file)).action == ACTION_UNSET
    assert build_rule(5, "--unset-ip", "10.0.0.1").action == ACTION_UNSET_IP_IF_EQUALS
    assert build_rule(6, "--unset-ip", "/^10/").action == ACTION_UNSET_IP_IF_MATCHES
    assert build_rule(7, "--unset-host", "a").action == ACTION_UNSET_HOST_IF_EQUALS
    assert build_rule(8, "--unset-host", "/^a/").action == ACTION_UNSET_HOST_IF_MATCHES


def test_build_rule_rejects_unknown_option() -> None:
    with pytest.raises(RuleError, match="Unknown option"):
        build_rule(0, "--frobnicate", "x")
