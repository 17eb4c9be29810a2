"""Render a ChangeLogEntry as a block of ChangeLog lines."""

from __future__ import annotations

from git2cl.models import ChangeLogEntry


def render_entry(entry: ChangeLogEntry) -> list[str]:
    """Return the lines of one ChangeLog block.

    The block is the ``DATE  AUTHOR  <EMAIL>`` header, a blank line, the
    tab-indented subject and the detail lines. Structured detail lines
    already carry their tab; legacy ones are emitted as found in the log.
    """
    return [entry.header, "", f"\t{entry.subject}", *entry.detail_lines]
