"""Write the finished ChangeLog to a file or standard output."""

from __future__ import annotations

import logging
import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import TextIO

from git2cl.errors import OutputWriteError

logger = logging.getLogger(__name__)

STDOUT_SEPARATOR = "-" * 72


def _target_mode(path: Path) -> int:
    """Return the permission bits the written file should end up with.

    An existing file keeps its mode; a new one gets the usual 0666 & ~umask
    instead of the 0600 of a temporary file.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: str | Path, text: str) -> Path:
    """Replace ``path`` with ``text`` in a single rename.

    The document goes to a temporary file next to the target first, so a
    failed write never leaves a truncated ChangeLog behind.

    Raises:
        OutputWriteError: If the file cannot be created or written.
    """
    path = Path(path)
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}_",
            suffix=".tmp",
            delete=False,
        ) as tmp_file:
            tmp_path = Path(tmp_file.name)
            tmp_file.write(text)

        os.chmod(tmp_path, _target_mode(path))
        tmp_path.replace(path)
    except OSError as e:
        if tmp_path is not None:
            try:
                tmp_path.unlink()
            except OSError:
                pass
        raise OutputWriteError(f"cannot write {path}: {e}", path=path) from e

    logger.info(f"Wrote {len(text)} characters to {path}")
    return path


def write_stdout(text: str, stream: TextIO | None = None) -> None:
    """Write the separator line and the document to standard output."""
    stream = stream or sys.stdout
    stream.write(STDOUT_SEPARATOR + "\n")
    stream.write(text)
    stream.flush()


def emit(text: str, output_path: str | Path | None = None) -> Path | None:
    """Send the document to ``output_path`` or, when unset, to stdout."""
    if output_path:
        return write_atomic(output_path, text)
    write_stdout(text)
    return None
