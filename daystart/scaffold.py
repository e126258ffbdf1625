"""
scaffold.py

Responsibility: Create a new day directory from the template.

Rules:
- The day identifier is always rendered with at least two digits (`1` -> `01`).
- The template tree is copied as-is, file metadata included.
- Placeholders are replaced only where they appear as a whole token.

This module intentionally does NOT know about the manifest, HTTP, or CLI parsing.
"""

from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path

from daystart import DayStartError

logger = logging.getLogger(__name__)


class ScaffoldError(DayStartError):
    pass


@dataclass(frozen=True)
class Substitution:
    """One placeholder rewrite inside a copied template file.

    `replacement` may reference the zero-padded day as `{day}`.
    """

    path: str
    token: str
    replacement: str

    def render(self, day_str: str) -> str:
        # Plain replace: template text such as `fn day{day}() {}` holds other braces.
        return self.replacement.replace("{day}", day_str)


def default_substitutions() -> tuple[Substitution, ...]:
    return (
        Substitution(path="Cargo.toml", token="day_XX", replacement="day_{day}"),
        Substitution(path="src/main.rs", token="dayXX", replacement="day{day}"),
    )


def format_day(day: int) -> str:
    if day < 1:
        raise ScaffoldError(f"Day must be a positive integer, got {day}")
    return f"{day:02d}"


def day_dir_name(day: int, prefix: str = "day") -> str:
    return f"{prefix}{format_day(day)}"


def copy_template(
    template_dir: str | Path,
    destination_dir: str | Path,
    *,
    overwrite: bool = False,
) -> Path:
    """
    Recursively copy template_dir to destination_dir and return the destination.

    An existing destination is refused unless `overwrite` is set, in which case the
    template files are copied over it.
    """
    tpl_dir = Path(template_dir)
    dst_dir = Path(destination_dir)

    if not tpl_dir.is_dir():
        raise ScaffoldError(f"Template directory not found: {tpl_dir}")
    if dst_dir.exists() and not overwrite:
        raise ScaffoldError(f"Destination already exists: {dst_dir} (use --overwrite to allow)")

    try:
        shutil.copytree(tpl_dir, dst_dir, dirs_exist_ok=overwrite)
    except OSError as e:
        raise ScaffoldError(f"Failed copying {tpl_dir} to {dst_dir}: {e}") from e

    logger.debug("Copied template %s -> %s", tpl_dir, dst_dir)
    return dst_dir


def _token_pattern(token: str) -> re.Pattern[str]:
    # Word characters on either side would make the token part of a longer name.
    return re.compile(rf"(?<!\w){re.escape(token)}(?!\w)")


def replace_token(path: str | Path, token: str, replacement: str) -> int:
    """
    Replace every whole-token occurrence of `token` in a UTF-8 text file.

    Returns the number of replacements made.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ScaffoldError(f"File to rewrite not found: {file_path}")

    try:
        # newline="" keeps the template's line endings untouched.
        with file_path.open(encoding="utf-8", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ScaffoldError(f"Failed reading {file_path}: {e}") from e

    out, count = _token_pattern(token).subn(lambda _m: replacement, text)
    if count == 0:
        logger.warning("Placeholder %r not found in %s", token, file_path)
        return 0

    try:
        with file_path.open("w", encoding="utf-8", newline="") as f:
            f.write(out)
    except OSError as e:
        raise ScaffoldError(f"Failed writing {file_path}: {e}") from e
    return count


def apply_substitutions(
    day_dir: str | Path,
    substitutions: tuple[Substitution, ...] | list[Substitution],
    day_str: str,
) -> int:
    """Apply each substitution inside day_dir. Returns the total number of replacements."""
    root = Path(day_dir)
    total = 0
    for sub in substitutions:
        replacement = sub.render(day_str)
        count = replace_token(root / sub.path, sub.token, replacement)
        logger.debug("Replaced %s -> %s in %s (%d)", sub.token, replacement, sub.path, count)
        total += count
    return total
