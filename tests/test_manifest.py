from __future__ import annotations

from pathlib import Path

import pytest

from daystart import manifest
from daystart.manifest import ManifestError, add_member, list_members


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "Cargo.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_add_member_inserts_before_closing_line(tmp_path: Path) -> None:
    path = _write(tmp_path, '[workspace]\nmembers = [\n    "util",\n]\n')
    before = path.read_text().splitlines()

    assert add_member(path, "day01") is True

    after = path.read_text().splitlines()
    assert len(after) == len(before) + 1
    assert after[-1] == "]"
    assert after[-2] == '    "day01",'
    assert path.read_text().endswith("]\n")


def test_add_member_keeps_order(tmp_path: Path) -> None:
    path = _write(tmp_path, 'members = [\n    "util",\n]\n')
    add_member(path, "day01")
    add_member(path, "day02")
    assert list_members(path) == ["util", "day01", "day02"]


def test_add_member_keeps_blank_lines_after_marker(tmp_path: Path) -> None:
    path = _write(tmp_path, 'members = [\n    "util",\n]\n\n\n')
    before = path.read_text().splitlines()

    add_member(path, "day03")

    after = path.read_text().splitlines()
    assert len(after) == len(before) + 1
    assert path.read_text() == 'members = [\n    "util",\n    "day03",\n]\n\n\n'


def test_add_member_skips_duplicates(tmp_path: Path) -> None:
    text = 'members = [\n    "day01",\n]\n'
    path = _write(tmp_path, text)
    assert add_member(path, "day01") is False
    assert path.read_text() == text


def test_add_member_allow_duplicate(tmp_path: Path) -> None:
    path = _write(tmp_path, 'members = [\n    "day01",\n]\n')
    assert add_member(path, "day01", allow_duplicate=True) is True
    assert list_members(path) == ["day01", "day01"]


def test_add_member_requires_closing_marker(tmp_path: Path) -> None:
    text = 'members = ["util"]\n[profile.release]\n'
    path = _write(tmp_path, text)
    with pytest.raises(ManifestError, match="closing line"):
        add_member(path, "day01")
    assert path.read_text() == text
    assert not (tmp_path / "Cargo.toml.new").exists()


def test_add_member_custom_marker_and_indent(tmp_path: Path) -> None:
    path = _write(tmp_path, "members:\n  \"util\",\n#end\n")
    add_member(path, "day04", closing_marker="#end", indent="  ")
    assert path.read_text() == 'members:\n  "util",\n  "day04",\n#end\n'


def test_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="not found"):
        add_member(tmp_path / "Cargo.toml", "day01")


def test_failed_replace_removes_temp_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    text = 'members = [\n    "util",\n]\n'
    path = _write(tmp_path, text)

    def fail_replace(src, dst):
        raise OSError("read-only file system")

    monkeypatch.setattr(manifest.os, "replace", fail_replace)
    with pytest.raises(ManifestError, match="read-only"):
        add_member(path, "day01")

    assert path.read_text() == text
    assert not (tmp_path / "Cargo.toml.new").exists()
