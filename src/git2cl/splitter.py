"""Split the raw git log stream into per-commit entries.

The stream is a sequence of blocks, each wrapped in a begin and an end
sentinel line (see :data:`git2cl.gitlog.PRETTY_FORMAT`). Splitting is a
two-state automaton: outside an entry every line up to the next begin
sentinel is ignored, inside an entry lines are collected until the end
sentinel closes it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import Enum

from git2cl.errors import MalformedInputError
from git2cl.gitlog import BEGIN_SENTINEL, END_SENTINEL
from git2cl.models import RawLogEntry

logger = logging.getLogger(__name__)


class SplitState(Enum):
    """State of the splitter automaton."""

    OUTSIDE = "outside"
    INSIDE = "inside"


def _iter_lines(raw: str | Iterable[str]) -> Iterator[str]:
    # str.splitlines() would also break on form feeds inside commit bodies
    lines = raw.split("\n") if isinstance(raw, str) else raw
    for line in lines:
        yield line.rstrip("\r\n")


def parse_block(lines: list[str], start_line: int) -> RawLogEntry:
    """Build a RawLogEntry from the lines between two sentinels.

    Args:
        lines: Block lines, sentinels excluded.
        start_line: 1-based line number of the begin sentinel, for errors.

    Raises:
        MalformedInputError: If the date/subject or author line is missing.
    """
    if not lines:
        raise MalformedInputError("entry has no date line", start_line)
    date, _, subject = lines[0].partition(" ")
    if not date:
        raise MalformedInputError("entry has no date", start_line + 1)
    if len(lines) < 2 or not lines[1].strip():
        raise MalformedInputError("entry has no author line", start_line + 1)
    author_line = lines[1].strip()

    if len(lines) < 4:
        # Truncated block: header only, no subject echo or body
        return RawLogEntry(date, author_line, subject, (), has_subject_echo=False)

    if lines[2].strip() or not lines[3].startswith("\t"):
        raise MalformedInputError(
            "expected blank line and tab-indented subject after author line",
            start_line + 3,
        )

    body = lines[4:]
    while body and not body[-1].strip():
        body.pop()
    return RawLogEntry(date, author_line, subject, tuple(body))


def split_entries(raw: str | Iterable[str]) -> Iterator[RawLogEntry]:
    """Yield RawLogEntry records in the order they appear in ``raw``.

    Each call starts a fresh scan. Entries are yielded as soon as their end
    sentinel is seen.

    Raises:
        MalformedInputError: On a begin sentinel inside an open entry, or
            when the input ends before an entry is closed.
    """
    state = SplitState.OUTSIDE
    block: list[str] = []
    start_line = 0
    line_number = 0

    for line_number, line in enumerate(_iter_lines(raw), start=1):
        if state == SplitState.OUTSIDE:
            if line == BEGIN_SENTINEL:
                state = SplitState.INSIDE
                block = []
                start_line = line_number
            elif line == END_SENTINEL:
                raise MalformedInputError("end sentinel without open entry", line_number)
            elif line.strip():
                logger.debug(f"Ignoring text outside entry at line {line_number}")
        else:
            if line == END_SENTINEL:
                yield parse_block(block, start_line)
                state = SplitState.OUTSIDE
            elif line == BEGIN_SENTINEL:
                raise MalformedInputError(
                    f"entry opened at line {start_line} is not terminated", line_number
                )
            else:
                block.append(line)

    if state == SplitState.INSIDE:
        raise MalformedInputError(
            f"entry opened at line {start_line} is not terminated", line_number
        )
