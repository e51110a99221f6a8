"""Input and output helpers for host-table content."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from hostility.config import STDIO_PATH


class FileAccessError(Exception):
    """Raised when the input cannot be read or the output cannot be written."""

    def __init__(self, reason: str, hint: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.hint = hint


def is_stdio(path: str) -> bool:
    """Return True for the `-` placeholder."""
    return path.strip() == STDIO_PATH


def check_input_path(path: str) -> None:
    """Raise FileAccessError unless the input exists or is stdin."""
    if is_stdio(path):
        return
    if not Path(path).is_file():
        raise FileAccessError(
            reason=f"Invalid input '{path}'",
            hint="file does not exist",
        )


def check_output_path(path: str) -> None:
    """Raise FileAccessError unless the output's parent directory exists."""
    if is_stdio(path):
        return
    parent = Path(path).parent
    if not parent.is_dir():
        raise FileAccessError(
            reason=f"Invalid output '{path}'",
            hint="parent directory does not exist",
        )


def read_content(path: str, stdin: TextIO) -> str:
    """Read the whole input from a file or stdin."""
    if is_stdio(path):
        return stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise FileAccessError(
            reason=f"Could not open file '{path}' for reading",
            hint=str(error),
        ) from error


def write_content(path: str, content: str) -> None:
    """Write content to a file."""
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as error:
        raise FileAccessError(
            reason=f"Could not open file '{path}' for writing",
            hint=str(error),
        ) from error
