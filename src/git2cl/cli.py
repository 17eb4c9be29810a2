"""CLI entry point.

Reads the git history (or a captured raw log), renders the ChangeLog and
writes it to a file or standard output. Option defaults come from
~/.config/git2cl/config.toml; see config.py.
"""

import argparse
import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from git2cl.config import load_config, save_config
from git2cl.errors import ChangeLogError
from git2cl.gitlog import read_log, read_raw_file
from git2cl.output import emit
from git2cl.pipeline import render_changelog

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    root = logging.getLogger("git2cl")
    root.handlers.clear()
    root.addHandler(RichHandler(console=err_console, show_path=False))
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git2cl",
        description="Generate a GNU-style ChangeLog from git history",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="Write the ChangeLog to FILE (default: standard output)",
    )
    parser.add_argument(
        "--since",
        metavar="RANGE",
        help="Only include commits after an ISO date (YYYY-MM-DD) or a REF.. range",
    )
    parser.add_argument(
        "--copyright",
        metavar="WHO",
        help="Append a copyright notice naming WHO",
    )
    parser.add_argument(
        "--repo",
        metavar="DIR",
        help="Repository to read (default: current directory)",
    )
    parser.add_argument(
        "--input",
        metavar="FILE",
        help="Read a captured raw log from FILE ('-' for stdin) instead of running git",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Config file (default: ~/.config/git2cl/config.toml)",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Store --since, --copyright and --output as defaults",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__import__('git2cl').__version__}"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the git2cl CLI.

    Returns:
        Exit code (0 for success, 1 if any stage failed).
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path).merged(
        since=args.since,
        copyright_who=args.copyright,
        output=args.output,
    )

    if args.save_config:
        try:
            saved = save_config(config)
        except ChangeLogError as e:
            err_console.print(f"[red]✗[/] Could not save config: {escape(str(e))}")
            return 1
        logger.info(f"Saved defaults to {saved}")

    try:
        if args.input:
            if config.since:
                logger.warning("--since is ignored when reading --input")
            raw = read_raw_file(args.input)
        else:
            raw = read_log(config.since, cwd=args.repo)

        text = render_changelog(raw, config.copyright_who, datetime.now().year)
        written = emit(text, config.output)
    except ChangeLogError as e:
        err_console.print(f"[red]✗[/] {escape(str(e))}")
        return 1

    if written is not None:
        err_console.print(f"Wrote ChangeLog to {escape(str(written))}")
    return 0
