"""Host-table model package."""

from .model import HostsFile
from .models import Line, LineKind

__all__ = ["HostsFile", "Line", "LineKind"]
