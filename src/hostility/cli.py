"""Command-line entrypoint for editing host tables."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

from hostility.config import (
    CliOverrides,
    HostilityConfig,
    default_hosts_path,
    load_effective_config,
)
from hostility.files import (
    FileAccessError,
    check_input_path,
    check_output_path,
    is_stdio,
    read_content,
    write_content,
)
from hostility.hosts import HostsFile
from hostility.logging import JsonlAuditLogger, VerboseReporter, summary_event
from hostility.rules import RuleError, apply_rules, build_rule

RULE_OPTIONS = (
    ("--set", "{ip}:{host}", "add host {host} with ip address {ip}"),
    (
        "--set-first",
        "{ip}:{host}",
        "add host {host} with ip address {ip}, before any existing host",
    ),
    ("--set-from-file", "FILE", "add all hosts listed in FILE (one {ip}:{host} per line)"),
    ("--unset", "{ip}:{host}", "remove host {host} with ip address {ip}"),
    ("--unset-from-file", "FILE", "remove all hosts listed in FILE (one {ip}:{host} per line)"),
    (
        "--unset-host",
        "PATTERN",
        "remove all hosts matching PATTERN (a string, or a regexp written /.../)",
    ),
    (
        "--unset-ip",
        "PATTERN",
        "remove all lines whose ip address matches PATTERN (a string, or /.../)",
    ),
)

EPILOG = """\
Rules are processed in the order they were provided on the command line.

Examples:

    hostility --unset '192.168.64.1:host1' --set '192.168.64.1:host2'
    hostility --unset-ip '192.168.64.1' --set '192.168.64.1:host1' --set '192.168.64.1:host2'
    hostility --unset-host '/^host[0-9]+/'
    hostility --unset-ip '/^192\\.168\\.0\\./'
"""


class _RuleOption(argparse.Action):
    """Collect rule options into one ordered list."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: str | Sequence[Any] | None,
        option_string: str | None = None,
    ) -> None:
        rules = list(getattr(namespace, self.dest, None) or [])
        try:
            rule = build_rule(index=len(rules), option=self.option_strings[0], value=str(values))
        except RuleError as error:
            raise argparse.ArgumentError(self, str(error)) from error
        rules.append(rule)
        setattr(namespace, self.dest, rules)


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    hosts_path = default_hosts_path()
    parser = argparse.ArgumentParser(
        prog="hostility",
        description=f'A command-line utility to manipulate "{hosts_path}"',
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    for option, metavar, help_text in RULE_OPTIONS:
        parser.add_argument(
            option, action=_RuleOption, dest="rules", metavar=metavar, help=help_text
        )
    parser.add_argument(
        "--strip-comments", action="store_true", default=None, help="remove all comments"
    )
    parser.add_argument(
        "--strip-blank-lines", action="store_true", default=None, help="remove all empty lines"
    )
    parser.add_argument(
        "--remove-duplicates",
        action="store_true",
        default=None,
        help="remove duplicate hosts (only keep the first declaration of each host)",
    )
    parser.add_argument(
        "--input", default=None, help=f"input file (default = {hosts_path}, use - for stdin)"
    )
    parser.add_argument(
        "--output", default=None, help="output file (default = same as input, use - for stdout)"
    )
    parser.add_argument(
        "--verbose", action="store_true", default=None, help="display extra information on stderr"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="only indicate if content will change (1) or not (0)",
    )
    parser.add_argument("--config", default=None, help="optional TOML config file")
    parser.add_argument("--audit-log", default=None, help="append a JSONL record of each run")
    parser.set_defaults(rules=None)
    return parser


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Entrypoint for the hostility command."""
    in_stream = stdin if stdin is not None else sys.stdin
    out_stream = stdout if stdout is not None else sys.stdout
    err_stream = stderr if stderr is not None else sys.stderr

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    rules = args.rules or []
    overrides = CliOverrides(
        input_path=args.input.strip() if args.input is not None else None,
        output_path=args.output.strip() if args.output is not None else None,
        audit_log=Path(args.audit_log) if args.audit_log is not None else None,
        strip_comments=args.strip_comments,
        strip_blank_lines=args.strip_blank_lines,
        remove_duplicates=args.remove_duplicates,
        verbose=args.verbose,
    )
    try:
        config = load_effective_config(
            config_path=Path(args.config) if args.config is not None else None,
            overrides=overrides,
        )
    except ValueError as error:
        err_stream.write(f"Invalid configuration: {error}\n")
        return 2

    try:
        check_input_path(config.input_path)
        check_output_path(config.output_path)
    except FileAccessError as error:
        err_stream.write(f"{error.reason} ({error.hint})\n")
        err_stream.write(parser.format_usage())
        return 2

    reporter = VerboseReporter(stream=err_stream, enabled=config.options.verbose)
    reporter.note(f"Configuration: {json.dumps(config.to_public_dict(), sort_keys=True)}")
    audit_logger: JsonlAuditLogger | None = None
    if config.audit_log is not None:
        try:
            audit_logger = JsonlAuditLogger(config.audit_log)
        except OSError as error:
            return _audit_log_failure(config.audit_log, error, err_stream)

    try:
        content = read_content(config.input_path, in_stream)
    except FileAccessError as error:
        err_stream.write(f"{error.reason} ({error.hint})\n")
        return 1

    hosts_file = HostsFile(
        strip_comments=config.options.strip_comments,
        strip_blank_lines=config.options.strip_blank_lines,
        reporter=reporter,
    )
    hosts_file.parse(content)

    duplicates_removed = 0
    if config.options.remove_duplicates:
        duplicates_removed = hosts_file.remove_duplicate_hosts()

    try:
        apply_rules(hosts_file, rules, reporter=reporter, audit_logger=audit_logger)
        has_changed = hosts_file.has_changed()
        if audit_logger is not None:
            audit_logger.append(
                summary_event(
                    input_path=config.input_path,
                    output_path=config.output_path,
                    changed=has_changed,
                    dry_run=args.dry_run,
                    rule_count=len(rules),
                    duplicates_removed=duplicates_removed,
                )
            )
    except OSError as error:
        return _audit_log_failure(config.audit_log, error, err_stream)

    if args.dry_run:
        if has_changed:
            err_stream.write("Content will change\n")
        else:
            err_stream.write("Content will not change\n")
        out_stream.write(_changed_flag(has_changed))
        return 0

    return _write_output(config, hosts_file.get(), has_changed, out_stream, err_stream)


def _write_output(
    config: HostilityConfig,
    output_content: str,
    has_changed: bool,
    out_stream: TextIO,
    err_stream: TextIO,
) -> int:
    if is_stdio(config.output_path):
        out_stream.write(f"{output_content}\n")
        return 0

    if not has_changed and config.output_path == config.input_path:
        err_stream.write("Nothing to do (content did not change)\n")
        out_stream.write(_changed_flag(False))
        return 0

    try:
        write_content(config.output_path, f"{output_content}\n")
    except FileAccessError as error:
        err_stream.write(f"{error.reason} ({error.hint})\n")
        return 1
    err_stream.write(f"Content successfully saved into '{config.output_path}'\n")
    out_stream.write(_changed_flag(has_changed))
    return 0


def _audit_log_failure(path: Path | None, error: OSError, err_stream: TextIO) -> int:
    err_stream.write(f"Could not write audit log '{path}' ({error.strerror or error})\n")
    return 1


def _changed_flag(has_changed: bool) -> str:
    return "1\n" if has_changed else "0\n"


if __name__ == "__main__":
    raise SystemExit(main())
