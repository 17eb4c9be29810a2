"""Entry records passed between the pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntryKind(Enum):
    """Layout of a retained entry's detail lines."""

    STRUCTURED = "structured"
    LEGACY = "legacy"


@dataclass(frozen=True)
class RawLogEntry:
    """One commit's block as found between the sentinel lines.

    ``body`` holds the commit message lines after the subject echo.
    ``has_subject_echo`` is False for truncated blocks that stop before the
    blank separator and tab-indented subject line.
    """

    date: str
    author_line: str
    subject: str
    body: tuple[str, ...] = ()
    has_subject_echo: bool = True


@dataclass(frozen=True)
class ChangeLogEntry:
    """A retained entry ready for rendering."""

    date: str
    author_line: str
    subject: str
    kind: EntryKind
    detail_lines: tuple[str, ...] = ()

    @property
    def header(self) -> str:
        """Return the ``DATE  AUTHOR  <EMAIL>`` header line."""
        return f"{self.date}  {self.author_line}"
