"""Human-readable progress reporting on stderr."""

from __future__ import annotations

import sys
from typing import TextIO


class VerboseReporter:
    """Write progress lines to a stream when verbose mode is enabled."""

    def __init__(self, stream: TextIO | None = None, enabled: bool = True) -> None:
        self._stream = stream
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        """Return whether messages are written."""
        return self._enabled

    def note(self, message: str) -> None:
        """Write one message line."""
        if not self._enabled:
            return
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(f"{message}\n")
        stream.flush()
