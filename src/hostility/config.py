"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import os
import platform
import tomllib
from dataclasses import dataclass
from pathlib import Path

CONFIG_ENV_VAR = "HOSTILITY_CONFIG"
STDIO_PATH = "-"

PATHS_FIELDS = ("input", "audit_log")
OPTIONS_FIELDS = ("strip_comments", "strip_blank_lines", "remove_duplicates", "verbose")


@dataclass(slots=True, frozen=True)
class OptionsConfig:
    """Parsing and reporting toggles."""

    strip_comments: bool = False
    strip_blank_lines: bool = False
    remove_duplicates: bool = False
    verbose: bool = False


@dataclass(slots=True, frozen=True)
class HostilityConfig:
    """Fully merged run configuration."""

    input_path: str
    output_path: str
    audit_log: Path | None
    options: OptionsConfig

    def to_public_dict(self) -> dict[str, object]:
        """Return a serializable snapshot, used by verbose output."""
        return {
            "input": self.input_path,
            "output": self.output_path,
            "audit_log": str(self.audit_log) if self.audit_log is not None else None,
            "options": {
                "strip_comments": self.options.strip_comments,
                "strip_blank_lines": self.options.strip_blank_lines,
                "remove_duplicates": self.options.remove_duplicates,
                "verbose": self.options.verbose,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional command-line values applied at highest precedence."""

    input_path: str | None = None
    output_path: str | None = None
    audit_log: Path | None = None
    strip_comments: bool | None = None
    strip_blank_lines: bool | None = None
    remove_duplicates: bool | None = None
    verbose: bool | None = None


def default_hosts_path(system: str | None = None) -> str:
    """Return the platform hosts file location."""
    name = (system if system is not None else platform.system()).lower()
    if name == "darwin":
        return "/private/etc/hosts"
    if name == "windows":
        return r"C:\Windows\System32\drivers\etc\hosts"
    return "/etc/hosts"


def default_config() -> HostilityConfig:
    """Build the built-in defaults."""
    hosts_path = default_hosts_path()
    return HostilityConfig(
        input_path=hosts_path,
        output_path=hosts_path,
        audit_log=None,
        options=OptionsConfig(),
    )


def resolve_config_path(explicit: Path | None) -> Path | None:
    """Pick the config file: explicit path first, then the environment."""
    if explicit is not None:
        return explicit
    from_env = os.getenv(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env)
    return None


def load_config_file(config_path: Path | None) -> dict[str, object]:
    """Load an optional TOML config file."""
    if config_path is None:
        return {}
    if not config_path.is_file():
        raise ValueError(f"Config file '{config_path}' does not exist.")
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError("Config file must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str, allowed: tuple[str, ...]) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    for field_name in value:
        if field_name not in allowed:
            raise ValueError(f"Config field '{key}.{field_name}' is not supported.")
    return value


def _optional_bool(value: object, name: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{name}' must be a boolean.")
    return value


def _optional_str(value: object, name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    return value.strip()


def merge_config(
    base: HostilityConfig, file_payload: dict[str, object], overrides: CliOverrides
) -> HostilityConfig:
    """Merge defaults, config file, then command-line overrides."""
    for section in file_payload:
        if section not in {"paths", "options"}:
            raise ValueError(f"Config section '{section}' is not supported.")
    paths_payload = _get_table(file_payload, "paths", PATHS_FIELDS)
    options_payload = _get_table(file_payload, "options", OPTIONS_FIELDS)

    input_path = _optional_str(paths_payload.get("input"), "paths.input")
    audit_log = _optional_str(paths_payload.get("audit_log"), "paths.audit_log")
    options = OptionsConfig(
        **{
            name: _optional_bool(
                options_payload.get(name), f"options.{name}", getattr(base.options, name)
            )
            for name in OPTIONS_FIELDS
        }
    )
    merged_input = input_path or base.input_path
    merged = HostilityConfig(
        input_path=merged_input,
        output_path=merged_input if input_path else base.output_path,
        audit_log=Path(audit_log) if audit_log else base.audit_log,
        options=options,
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: HostilityConfig, overrides: CliOverrides) -> HostilityConfig:
    """Apply command-line values at highest precedence.

    The output defaults to the input, so overriding only the input moves the
    output along with it.
    """
    input_path = overrides.input_path or config.input_path
    if overrides.output_path is not None:
        output_path = overrides.output_path
    elif overrides.input_path is not None:
        output_path = overrides.input_path
    else:
        output_path = config.output_path
    options = OptionsConfig(
        **{
            name: (
                getattr(overrides, name)
                if getattr(overrides, name) is not None
                else getattr(config.options, name)
            )
            for name in OPTIONS_FIELDS
        }
    )
    return HostilityConfig(
        input_path=input_path,
        output_path=output_path,
        audit_log=overrides.audit_log or config.audit_log,
        options=options,
    )


def load_effective_config(
    config_path: Path | None = None, overrides: CliOverrides | None = None
) -> HostilityConfig:
    """Load effective config using merge order defaults -> file -> overrides."""
    payload = load_config_file(resolve_config_path(config_path))
    return merge_config(default_config(), payload, overrides or CliOverrides())
