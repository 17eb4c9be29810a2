"""Pytest configuration for git2cl tests."""

import logging

import pytest

from git2cl.gitlog import BEGIN_SENTINEL, END_SENTINEL

JANE = "Jane Doe  <jane@example.com>"


def build_block(date, subject, body=(), author=JANE):
    """Return one commit block as git log prints it with PRETTY_FORMAT."""
    lines = [BEGIN_SENTINEL, f"{date} {subject}", f"  {author}", "", f"\t{subject}"]
    lines.extend(body)
    lines.extend(["", END_SENTINEL])
    return "\n".join(lines)


@pytest.fixture
def make_raw():
    """Factory building a raw log stream from (date, subject, body) tuples."""

    def _make(*entries):
        return "\n".join(build_block(*entry) for entry in entries)

    return _make


@pytest.fixture(autouse=True)
def reset_git2cl_logger():
    """Undo handler changes made by cli.setup_logging()."""
    yield
    root = logging.getLogger("git2cl")
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    root.propagate = True
