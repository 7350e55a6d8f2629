"""Import-time error taxonomy.

Decode failures are fatal for one import and carry enough context (file path,
offending header field) for a user-facing message.  Per-channel unavailability
is *not* an exception; see :class:`~oven_thermo_analyzer.models.results.ChannelReading`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class GbdError(ValueError):
    """Base class for GBD content errors."""

    def __init__(self, message: str, *, path: Optional[Path] = None, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.field = field

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message} (file: {self.path})"
        return self.message

    def with_path(self, path: Path) -> "GbdError":
        """Return a copy of this error attributed to ``path``."""
        return type(self)(self.message, path=path, field=self.field)


class FormatError(GbdError):
    """A required header field is missing or unparsable, or the input is not a GBD file."""


class TruncatedDataError(GbdError):
    """The binary body does not hold a single complete record."""


class GbdReadError(OSError):
    """The measurement file could not be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"File error: cannot read '{path}': {reason}")
        self.path = path
        self.reason = reason
