"""Assemble rendered blocks into the final ChangeLog text."""

from __future__ import annotations

from collections.abc import Iterable

from git2cl.gitlog import BEGIN_SENTINEL, END_SENTINEL

SENTINELS = frozenset({BEGIN_SENTINEL, END_SENTINEL})

COPYRIGHT_TEMPLATE = """\f
Copyright (C) {year} {who}

Copying and distribution of this file, with or without modification,
are permitted provided the copyright notice and this notice are preserved.
"""


def strip_trailing_whitespace(lines: Iterable[str]) -> list[str]:
    return [line.rstrip() for line in lines]


def collapse_blank_lines(lines: Iterable[str]) -> list[str]:
    """Collapse every run of blank lines down to a single blank line."""
    result: list[str] = []
    for line in lines:
        if not line.strip() and result and not result[-1].strip():
            continue
        result.append(line)
    return result


def assemble(blocks: Iterable[list[str]]) -> str:
    """Join rendered blocks into a document.

    Blocks are separated by one blank line. Every line loses its trailing
    whitespace, stray sentinel lines are removed and blank line runs are
    collapsed. Returns an empty string when there are no blocks.
    """
    lines: list[str] = []
    for block in blocks:
        if lines:
            lines.append("")
        lines.extend(block)

    lines = [line for line in strip_trailing_whitespace(lines) if line not in SENTINELS]
    lines = collapse_blank_lines(lines)

    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def copyright_footer(who: str, year: int | str) -> str:
    """Return the form-feed separated copyright notice."""
    return COPYRIGHT_TEMPLATE.format(year=year, who=who)


def append_copyright(document: str, who: str | None, year: int | str | None) -> str:
    """Append the copyright notice to ``document`` when ``who`` is set.

    Raises:
        ValueError: If ``who`` is set but no year is given.
    """
    if not who:
        return document
    if year is None:
        raise ValueError("copyright year is required")
    return document + copyright_footer(who, year)
