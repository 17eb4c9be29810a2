"""Exceptions raised by the ChangeLog pipeline.

Every error names the stage that failed so the CLI can report it without
knowing which component raised it.
"""

from __future__ import annotations

from pathlib import Path


class ChangeLogError(Exception):
    """Base class for fatal ChangeLog generation errors."""

    stage = "changelog"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"{self.stage}: {detail}")


class MalformedInputError(ChangeLogError):
    """Raised when the raw log stream does not follow the sentinel layout."""

    stage = "split"

    def __init__(self, detail: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            detail = f"line {line_number}: {detail}"
        super().__init__(detail)


class ExternalSourceError(ChangeLogError):
    """Raised when the raw log cannot be read or git log exits non-zero."""

    stage = "log source"

    def __init__(self, detail: str, returncode: int | None = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(detail)


class OutputWriteError(ChangeLogError):
    """Raised when the destination file cannot be written."""

    stage = "write"

    def __init__(self, detail: str, path: Path | None = None):
        self.path = path
        super().__init__(detail)
