"""Run ``git log`` and capture the raw, sentinel-delimited stream."""

from __future__ import annotations

import logging
import re
import subprocess
import sys
from pathlib import Path

from git2cl.errors import ExternalSourceError

logger = logging.getLogger(__name__)

BEGIN_SENTINEL = "@@git2cl-begin@@"
END_SENTINEL = "@@git2cl-end@@"

# Per commit: sentinel, "DATE SUBJECT", "  NAME  <EMAIL>", blank line,
# tab + subject, message body, sentinel.
PRETTY_FORMAT = f"{BEGIN_SENTINEL}%n%ad %s%n  %an  <%ae>%n%n%x09%s%n%b%n{END_SENTINEL}"

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def resolve_range(since: str | None) -> list[str]:
    """Translate a ``--since`` value into git log arguments.

    An ISO date becomes a ``--since`` lower bound, anything containing ``..``
    is passed through as a revision range and a bare ref ``REF`` means
    ``REF..``.
    """
    if not since:
        return []
    if ISO_DATE_RE.match(since):
        return [f"--since={since}"]
    if ".." in since:
        return [since]
    return [f"{since}.."]


def build_log_command(since: str | None = None) -> list[str]:
    """Return the git log argv used to produce the raw stream."""
    return [
        "git",
        "log",
        "--no-merges",
        "--date=short",
        f"--pretty=format:{PRETTY_FORMAT}",
        *resolve_range(since),
    ]


def read_log(
    since: str | None = None,
    cwd: str | Path | None = None,
    timeout: float | None = None,
) -> str:
    """Run git log and return its complete output.

    Raises:
        ExternalSourceError: If git is missing, times out or exits non-zero.
    """
    command = build_log_command(since)
    logger.debug(f"Running {' '.join(command[:4])} ... {' '.join(command[5:])}")

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            cwd=cwd,
        )
    except subprocess.TimeoutExpired as e:
        raise ExternalSourceError(f"command timed out after {timeout}s") from e
    except FileNotFoundError as e:
        raise ExternalSourceError("git not installed") from e
    except OSError as e:
        raise ExternalSourceError(f"OS error: {e}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise ExternalSourceError(
            stderr or f"exit code {result.returncode}",
            returncode=result.returncode,
            stderr=stderr,
        )

    logger.debug(f"git log produced {len(result.stdout)} characters")
    return result.stdout


def read_raw_file(path: str | Path) -> str:
    """Read a previously captured raw stream; ``-`` means standard input.

    Raises:
        ExternalSourceError: If the file cannot be read or is not valid UTF-8.
    """
    try:
        if str(path) == "-":
            return sys.stdin.read()
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ExternalSourceError(f"cannot read {path}: {e}") from e
