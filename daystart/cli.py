"""
cli.py

Responsibility: CLI entrypoint for start-day.

High-level flow (single command, one positional DAY):
1) Load settings (`.env` + optional `start-day.yaml`) -> `Settings`
2) Copy the template -> `dayNN/`
3) Rewrite the `day_XX` / `dayXX` placeholders
4) Add `dayNN` to the workspace manifest
5) Download the puzzle input -> `dayNN/input`

There is no rollback: the first failing step aborts the remaining ones.

This module should orchestrate behavior but keep concerns isolated:
- Settings: `config.py`
- Copy and substitution: `scaffold.py`
- Manifest edits: `manifest.py`
- HTTP: `puzzle_client.py`
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from daystart import DayStartError, __version__
from daystart.config import SESSION_ENV_VAR, Settings, load_settings
from daystart.manifest import add_member
from daystart.puzzle_client import PuzzleClient
from daystart.scaffold import apply_substitutions, copy_template, day_dir_name, format_day

logger = logging.getLogger(__name__)

_ENV_HELP = (
    "Put the value of the 'session' cookie for the puzzle site in .env like this:\n"
    "\n"
    f'  {SESSION_ENV_VAR}="<your session cookie here>"'
)


@dataclass(frozen=True)
class InitResult:
    day_dir: Path
    input_path: Path
    input_bytes: int
    manifest_updated: bool


def initialize(day: int, settings: Settings, *, overwrite: bool = False) -> InitResult:
    """
    Create the directory for `day`, register it in the manifest and fetch its input.
    """
    day_str = format_day(day)
    client = PuzzleClient(
        settings.session,
        base_url=settings.base_url,
        year=settings.year,
        timeout=settings.timeout,
    )

    day_dir = settings.root / day_dir_name(day, settings.prefix)
    logger.info("Creating %s from %s", day_dir.name, settings.template_dir)
    copy_template(settings.template_path, day_dir, overwrite=overwrite)

    apply_substitutions(day_dir, settings.substitutions, day_str)

    updated = add_member(
        settings.manifest_path,
        day_dir.name,
        closing_marker=settings.closing_marker,
    )
    if updated:
        logger.info("Added %s to %s", day_dir.name, settings.manifest)

    input_path = day_dir / settings.input_filename
    logger.info("Downloading input for %d/day %d", settings.year, day)
    size = client.download_input(day, input_path)
    logger.info("Wrote %d bytes to %s", size, input_path)

    return InitResult(
        day_dir=day_dir,
        input_path=input_path,
        input_bytes=size,
        manifest_updated=updated,
    )


def _positive_int(value: str) -> int:
    try:
        day = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid day: {value!r}") from None
    if day < 1:
        raise argparse.ArgumentTypeError(f"day must be a positive integer, got {day}")
    return day


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        # Usage errors also repeat the .env setup hint.
        self.print_usage(sys.stderr)
        self.exit(2, f"{self.prog}: error: {message}\n\n{_ENV_HELP}\n")


def _build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="start-day",
        description="Copies the template to a new day and downloads the puzzle input",
        epilog=_ENV_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("day", type=_positive_int, metavar="DAY", help="Puzzle day number (e.g. 1 or 23)")
    p.add_argument("--root", default=".", help="Workspace root (default: current directory)")
    p.add_argument("--config", default=None, help="Settings YAML file (default: <root>/start-day.yaml if present)")
    p.add_argument("--year", type=int, default=None, help="Puzzle year (overrides the settings file)")
    p.add_argument("--overwrite", action="store_true", help="Allow copying over an existing day directory")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s", level=logging.WARNING)
    logging.getLogger("daystart").setLevel(logging.DEBUG if args.verbose else logging.INFO)

    try:
        settings = load_settings(args.root, config_path=args.config, year=args.year)
        initialize(args.day, settings, overwrite=bool(args.overwrite))
    except DayStartError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
