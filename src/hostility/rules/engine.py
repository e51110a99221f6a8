"""Built-in rule actions and ordered rule application."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from hostility.hosts import HostsFile
from hostility.logging import JsonlAuditLogger, VerboseReporter, rule_event
from hostility.rules.models import (
    ACTION_SET,
    ACTION_UNSET,
    ACTION_UNSET_HOST_IF_EQUALS,
    ACTION_UNSET_HOST_IF_MATCHES,
    ACTION_UNSET_IP_IF_EQUALS,
    ACTION_UNSET_IP_IF_MATCHES,
    Rule,
    RuleOutcome,
)
from hostility.rules.registry import ActionHandler, ActionRegistry, RuleDispatchError


def register_builtin_actions(registry: ActionRegistry) -> None:
    """Register one handler per rule action."""
    registry.register(ACTION_SET, _set_handler)
    registry.register(ACTION_UNSET, _unset_handler)
    registry.register(
        ACTION_UNSET_IP_IF_EQUALS, _literal_handler(HostsFile.unset_ipaddr_if_equals)
    )
    registry.register(
        ACTION_UNSET_IP_IF_MATCHES, _regex_handler(HostsFile.unset_ipaddr_if_matches)
    )
    registry.register(
        ACTION_UNSET_HOST_IF_EQUALS, _literal_handler(HostsFile.unset_host_if_equals)
    )
    registry.register(
        ACTION_UNSET_HOST_IF_MATCHES, _regex_handler(HostsFile.unset_host_if_matches)
    )


def build_action_registry() -> ActionRegistry:
    """Return a registry holding the built-in actions."""
    registry = ActionRegistry()
    register_builtin_actions(registry)
    return registry


def apply_rules(
    hosts_file: HostsFile,
    rules: Iterable[Rule],
    registry: ActionRegistry | None = None,
    reporter: VerboseReporter | None = None,
    audit_logger: JsonlAuditLogger | None = None,
) -> list[RuleOutcome]:
    """Apply rules in command-line order and collect their outcomes."""
    active_registry = registry or build_action_registry()
    outcomes: list[RuleOutcome] = []
    for rule in sorted(rules, key=lambda item: item.index):
        if reporter is not None:
            reporter.note(f"Processing rule {rule.option} {rule.value} ...")
        rule_outcomes = active_registry.dispatch(hosts_file, rule)
        outcomes.extend(rule_outcomes)
        if audit_logger is not None:
            audit_logger.append(
                rule_event(
                    option=rule.option,
                    value=rule.value,
                    action=rule.action,
                    changed=any(outcome.changed for outcome in rule_outcomes),
                )
            )
    return outcomes


def _set_handler(hosts_file: HostsFile, rule: Rule) -> list[RuleOutcome]:
    return [
        RuleOutcome(
            rule=rule,
            changed=hosts_file.set_entry(entry.ip_address, entry.host, first=rule.first),
            entry=entry,
        )
        for entry in rule.entries
    ]


def _unset_handler(hosts_file: HostsFile, rule: Rule) -> list[RuleOutcome]:
    return [
        RuleOutcome(
            rule=rule,
            changed=hosts_file.unset_entry(entry.ip_address, entry.host),
            entry=entry,
        )
        for entry in rule.entries
    ]


def _literal_handler(operation: Callable[[HostsFile, str], bool]) -> ActionHandler:
    def handler(hosts_file: HostsFile, rule: Rule) -> list[RuleOutcome]:
        return [RuleOutcome(rule=rule, changed=operation(hosts_file, rule.pattern))]

    return handler


def _regex_handler(operation: Callable[[HostsFile, re.Pattern[str]], bool]) -> ActionHandler:
    def handler(hosts_file: HostsFile, rule: Rule) -> list[RuleOutcome]:
        if rule.regex is None:
            raise RuleDispatchError(
                code="MISSING_PATTERN",
                message=f"Rule {rule.option} {rule.value} has no compiled pattern",
            )
        return [RuleOutcome(rule=rule, changed=operation(hosts_file, rule.regex))]

    return handler
