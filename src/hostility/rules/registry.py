"""Action registration and dispatch primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from hostility.hosts import HostsFile
from hostility.rules.models import Rule, RuleOutcome

ActionHandler = Callable[[HostsFile, Rule], list[RuleOutcome]]


@dataclass(slots=True, frozen=True)
class RuleDispatchError(Exception):
    """Represents rule dispatch failures."""

    code: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class ActionRegistry:
    """In-memory action registry preserving insertion order."""

    _handlers: dict[str, ActionHandler] = field(default_factory=dict)

    def register(self, action: str, handler: ActionHandler) -> None:
        """Register a handler for an action name."""
        self._handlers[action] = handler

    def get(self, action: str) -> ActionHandler | None:
        """Return a handler by action name."""
        return self._handlers.get(action)

    def names(self) -> tuple[str, ...]:
        """Return registered action names in registration order."""
        return tuple(self._handlers.keys())

    def dispatch(self, hosts_file: HostsFile, rule: Rule) -> list[RuleOutcome]:
        """Apply a rule through the handler registered for its action."""
        handler = self.get(rule.action)
        if handler is None:
            raise RuleDispatchError(
                code="UNKNOWN_ACTION", message=f"Unknown action '{rule.action}'"
            )
        return handler(hosts_file, rule)
