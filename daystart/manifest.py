"""
manifest.py

Responsibility: Keep the workspace member list in sync with the day directories.

The manifest is treated as plain text: a list of quoted member names whose last
line is a fixed closing marker (`]` for a Cargo workspace). New members are
always inserted directly above that marker, so the marker stays last.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from daystart import DayStartError

logger = logging.getLogger(__name__)

_MEMBER_RE = re.compile(r'^\s*"([^"]+)"\s*,?\s*$')


class ManifestError(DayStartError):
    pass


def _read_lines(manifest_path: Path) -> list[str]:
    if not manifest_path.is_file():
        raise ManifestError(f"Manifest file not found: {manifest_path}")
    try:
        return manifest_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Failed reading manifest {manifest_path}: {e}") from e


def list_members(manifest_path: str | Path) -> list[str]:
    """
    Return the quoted member names found on their own lines, in file order.
    """
    members: list[str] = []
    for line in _read_lines(Path(manifest_path)):
        m = _MEMBER_RE.match(line)
        if m:
            members.append(m.group(1))
    return members


def add_member(
    manifest_path: str | Path,
    member: str,
    *,
    closing_marker: str = "]",
    indent: str = "    ",
    allow_duplicate: bool = False,
) -> bool:
    """
    Insert `member` as a new entry right before the closing marker line.

    Returns False (and leaves the file alone) when the member is already listed
    and `allow_duplicate` is not set; True otherwise.
    """
    path = Path(manifest_path)
    lines = _read_lines(path)

    # Blank lines after the marker are kept as they are.
    marker_idx = len(lines) - 1
    while marker_idx >= 0 and not lines[marker_idx].strip():
        marker_idx -= 1
    if marker_idx < 0 or lines[marker_idx].strip() != closing_marker:
        raise ManifestError(f"Manifest {path} does not end with the closing line {closing_marker!r}")

    if not allow_duplicate and member in list_members(path):
        logger.info("%s is already listed in %s", member, path)
        return False

    lines.insert(marker_idx, f'{indent}"{member}",')

    tmp_path = path.with_name(path.name + ".new")
    try:
        tmp_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise ManifestError(f"Failed writing manifest {path}: {e}") from e
    return True
