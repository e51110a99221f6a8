"""Rule parsing, dispatch and application."""

from .engine import apply_rules, build_action_registry, register_builtin_actions
from .models import (
    ACTION_SET,
    ACTION_UNSET,
    ACTION_UNSET_HOST_IF_EQUALS,
    ACTION_UNSET_HOST_IF_MATCHES,
    ACTION_UNSET_IP_IF_EQUALS,
    ACTION_UNSET_IP_IF_MATCHES,
    HostEntry,
    Rule,
    RuleError,
    RuleOutcome,
)
from .parsing import (
    build_rule,
    is_valid_ip_address,
    load_host_entries,
    parse_host_entries,
    parse_host_entry,
    parse_pattern,
)
from .registry import ActionHandler, ActionRegistry, RuleDispatchError

__all__ = [
    "ACTION_SET",
    "ACTION_UNSET",
    "ACTION_UNSET_HOST_IF_EQUALS",
    "ACTION_UNSET_HOST_IF_MATCHES",
    "ACTION_UNSET_IP_IF_EQUALS",
    "ACTION_UNSET_IP_IF_MATCHES",
    "ActionHandler",
    "ActionRegistry",
    "HostEntry",
    "Rule",
    "RuleDispatchError",
    "RuleError",
    "RuleOutcome",
    "apply_rules",
    "build_action_registry",
    "build_rule",
    "is_valid_ip_address",
    "load_host_entries",
    "parse_host_entries",
    "parse_host_entry",
    "parse_pattern",
    "register_builtin_actions",
]
