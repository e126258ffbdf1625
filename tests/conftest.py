"""Shared fixtures: a minimal Cargo workspace with a `template/` crate."""

from __future__ import annotations

from pathlib import Path

import pytest
import requests

CARGO_TEMPLATE = '[package]\nname = "day_XX"\nversion = "0.1.0"\nedition = "2021"\n'

MAIN_TEMPLATE = (
    'const INPUT_FILE_PATH: &str = "./dayXX/input";\n'
    "\n"
    "fn main() {\n"
    '    println!("{}", INPUT_FILE_PATH);\n'
    "}\n"
)

WORKSPACE_MANIFEST = '[workspace]\nresolver = "2"\nmembers = [\n    "util",\n]\n'


class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b"") -> None:
        self.status_code = status_code
        self.content = content


class FakeGet:
    """Stands in for `requests.get`, recording every call."""

    def __init__(self, response: FakeResponse | None = None, exc: Exception | None = None) -> None:
        self.response = response or FakeResponse(200, b"1abc2\npqr3stu8vwx\n")
        self.exc = exc
        self.calls: list[dict] = []

    def respond(self, status_code: int, content: bytes = b"") -> None:
        self.response = FakeResponse(status_code, content)

    def __call__(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    tpl = tmp_path / "template"
    (tpl / "src").mkdir(parents=True)
    (tpl / "Cargo.toml").write_text(CARGO_TEMPLATE, encoding="utf-8")
    (tpl / "src" / "main.rs").write_text(MAIN_TEMPLATE, encoding="utf-8")
    (tmp_path / "Cargo.toml").write_text(WORKSPACE_MANIFEST, encoding="utf-8")
    return tmp_path


@pytest.fixture
def fake_get(monkeypatch: pytest.MonkeyPatch) -> FakeGet:
    fake = FakeGet()
    monkeypatch.setattr(requests, "get", fake)
    return fake


@pytest.fixture(autouse=True)
def session_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Force-set so a real session in the developer's environment never leaks into tests.
    monkeypatch.setenv("AOC_SESSION", "test-session-cookie")
