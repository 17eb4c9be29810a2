"""Drop excluded entries and classify the rest as structured or legacy."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from git2cl.models import ChangeLogEntry, EntryKind, RawLogEntry

logger = logging.getLogger(__name__)

# "No functional change" subject suffixes
NFC_MARKERS = ("; nfc", "; nfc.")

FILE_LIST_MARKER = "*"


def is_excluded(subject: str) -> bool:
    """Return True if the subject ends with an nfc marker.

    Case-sensitive and anchored at the end of the subject; nothing may follow
    the marker.
    """
    return subject.endswith(NFC_MARKERS)


def find_file_list(body: tuple[str, ...]) -> int | None:
    """Return the index of the first line starting with ``*``, if any."""
    for index, line in enumerate(body):
        if line.startswith(FILE_LIST_MARKER):
            return index
    return None


def reindent(line: str) -> str:
    """Replace a line's leading whitespace with a single tab."""
    content = line.lstrip()
    return f"\t{content}" if content else ""


def classify(raw: RawLogEntry) -> ChangeLogEntry | None:
    """Turn a raw entry into a ChangeLogEntry, or None if it is excluded.

    Structured entries keep only the file list: everything before the first
    ``*`` line is discarded and the remaining lines are re-indented with one
    tab. Entries without a file list are legacy and keep their body as is.
    """
    if is_excluded(raw.subject):
        return None

    start = find_file_list(raw.body) if raw.has_subject_echo else None
    if start is None:
        detail = raw.body if raw.has_subject_echo else ()
        return ChangeLogEntry(raw.date, raw.author_line, raw.subject, EntryKind.LEGACY, detail)

    detail = tuple(reindent(line) for line in raw.body[start:])
    return ChangeLogEntry(raw.date, raw.author_line, raw.subject, EntryKind.STRUCTURED, detail)


def filter_entries(raw_entries: Iterable[RawLogEntry]) -> Iterator[ChangeLogEntry]:
    """Yield the retained entries of ``raw_entries`` in order."""
    for raw in raw_entries:
        entry = classify(raw)
        if entry is None:
            logger.debug(f"Dropping nfc entry {raw.date} {raw.subject!r}")
            continue
        yield entry
