"""End-to-end ChangeLog generation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from git2cl.classifier import filter_entries
from git2cl.document import append_copyright, assemble
from git2cl.formatter import render_entry
from git2cl.gitlog import read_log
from git2cl.models import EntryKind
from git2cl.splitter import split_entries

logger = logging.getLogger(__name__)


def render_changelog(
    raw: str | Iterable[str],
    copyright_who: str | None = None,
    year: int | None = None,
) -> str:
    """Convert a raw git log stream into ChangeLog text.

    The whole document is built before returning, so a malformed entry
    anywhere in the stream aborts without producing output.

    Args:
        raw: Stream produced with :data:`git2cl.gitlog.PRETTY_FORMAT`.
        copyright_who: Copyright holder; appends the notice when set.
        year: Year for the copyright notice.

    Raises:
        MalformedInputError: If the stream does not follow the sentinel layout.
    """
    blocks = []
    counts = {EntryKind.STRUCTURED: 0, EntryKind.LEGACY: 0}
    for entry in filter_entries(split_entries(raw)):
        counts[entry.kind] += 1
        blocks.append(render_entry(entry))

    logger.info(
        f"Rendered {len(blocks)} entries "
        f"({counts[EntryKind.STRUCTURED]} structured, {counts[EntryKind.LEGACY]} legacy)"
    )
    return append_copyright(assemble(blocks), copyright_who, year)


def generate_changelog(
    since: str | None = None,
    copyright_who: str | None = None,
    year: int | None = None,
    cwd: str | Path | None = None,
) -> str:
    """Read the git history of ``cwd`` and render it as a ChangeLog."""
    return render_changelog(read_log(since, cwd=cwd), copyright_who, year)
