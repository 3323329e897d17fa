# srsglass/utils/errors.py
from __future__ import annotations

from typing import Optional


class SrsglassError(RuntimeError):
    """Base class for every error the timesheet pipeline raises on purpose."""


class UserInputError(SrsglassError):
    """
    Raised for invalid user-provided config (nation, lengths, paths).
    Should NOT print traceback.
    """


class AcquisitionError(SrsglassError):
    """
    Raw dump bytes could not be obtained (HTTP / network / local IO).

    The original exception is kept as ``__cause__``.
    """


class _RegionContextError(SrsglassError):
    """
    Error carrying region / position context:
      - region_index : zero-based REGION position in the dump
      - region_name  : NAME if already known
      - line, column : XML position (parse errors only)
      - byte_offset  : compressed bytes consumed when the error surfaced
    """

    def __init__(
        self,
        message: str,
        *,
        region_index: Optional[int] = None,
        region_name: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        byte_offset: Optional[int] = None,
    ):
        self.region_index = region_index
        self.region_name = region_name
        self.line = line
        self.column = column
        self.byte_offset = byte_offset
        super().__init__(self._decorate(message))

    def _decorate(self, message: str) -> str:
        parts = []
        if self.region_index is not None:
            parts.append(f"region #{self.region_index}")
        if self.region_name is not None:
            parts.append(f"name={self.region_name!r}")
        if self.line is not None:
            parts.append(f"line {self.line}, column {self.column}")
        if self.byte_offset is not None:
            parts.append(f"compressed byte {self.byte_offset}")
        if not parts:
            return message
        return f"{message} ({', '.join(parts)})"


class FormatError(_RegionContextError):
    """Malformed gzip container, malformed XML, or a REGION missing NAME / NUMNATIONS."""


class ValidationError(_RegionContextError):
    """A decoded region violates ordering or non-negativity (or a PassConfig is invalid)."""
