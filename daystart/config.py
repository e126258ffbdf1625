"""
config.py

Responsibility: Load workspace settings into a deterministic, typed model.

Sources, in order of precedence:
- CLI overrides passed to `load_settings`
- the optional YAML settings file (`start-day.yaml` in the workspace root)
- built-in defaults matching a Cargo workspace of `dayNN` crates

The session credential only ever comes from the environment (`AOC_SESSION`),
which may be populated from the workspace `.env` file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from daystart import DayStartError
from daystart.puzzle_client import DEFAULT_BASE_URL
from daystart.scaffold import Substitution, default_substitutions

logger = logging.getLogger(__name__)

SESSION_ENV_VAR = "AOC_SESSION"
DEFAULT_CONFIG_NAME = "start-day.yaml"


class ConfigError(DayStartError):
    pass


@dataclass(frozen=True)
class Settings:
    """Everything `initialize` needs, resolved against the workspace root."""

    root: Path
    session: str = field(default="", repr=False)
    year: int = 2023
    base_url: str = DEFAULT_BASE_URL
    template_dir: str = "template"
    prefix: str = "day"
    manifest: str = "Cargo.toml"
    input_filename: str = "input"
    closing_marker: str = "]"
    timeout: float = 30
    substitutions: tuple[Substitution, ...] = field(default_factory=default_substitutions)

    @property
    def template_path(self) -> Path:
        return self.root / self.template_dir

    @property
    def manifest_path(self) -> Path:
        return self.root / self.manifest


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed reading settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must be a mapping at the top level.")
    return data


def _expect(data: dict[str, Any], key: str, kind: type | tuple[type, ...]) -> Any:
    value = data[key]
    # bool is an int subclass; never accept it for numeric settings.
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ConfigError(f"`{key}` has the wrong type: {value!r}")
    return value


def _parse_substitutions(raw: Any) -> tuple[Substitution, ...]:
    if not isinstance(raw, list):
        raise ConfigError("`substitutions` must be a list when provided.")
    subs: list[Substitution] = []
    for item in raw:
        if not isinstance(item, dict):
            raise ConfigError(f"Each substitution must be a mapping, got {item!r}")
        try:
            subs.append(
                Substitution(
                    path=str(item["path"]),
                    token=str(item["token"]),
                    replacement=str(item["replacement"]),
                )
            )
        except KeyError as e:
            raise ConfigError(f"Substitution {item!r} is missing {e.args[0]!r}") from e
    return tuple(subs)


def load_settings(
    root: str | Path = ".",
    *,
    config_path: str | Path | None = None,
    year: int | None = None,
) -> Settings:
    """
    Build `Settings` for the workspace at `root`.

    An explicit `config_path` must exist; the default settings file is optional.
    """
    root_path = Path(root).resolve()

    env_file = root_path / ".env"
    if env_file.is_file():
        load_dotenv(env_file)
        logger.debug("Loaded %s", env_file)

    if config_path is not None:
        cfg_file = Path(config_path)
        if not cfg_file.is_absolute():
            cfg_file = root_path / cfg_file
        if not cfg_file.is_file():
            raise ConfigError(f"Settings file does not exist: {cfg_file}")
    else:
        cfg_file = root_path / DEFAULT_CONFIG_NAME

    data = _load_yaml(cfg_file) if cfg_file.is_file() else {}

    kwargs: dict[str, Any] = {}
    for key in ("base_url", "template_dir", "prefix", "manifest", "input_filename", "closing_marker"):
        if key in data:
            kwargs[key] = _expect(data, key, str)
    if "year" in data:
        kwargs["year"] = _expect(data, "year", int)
    if "timeout" in data:
        kwargs["timeout"] = float(_expect(data, "timeout", (int, float)))
        if kwargs["timeout"] <= 0:
            raise ConfigError(f"`timeout` must be positive, got {data['timeout']!r}")
    if "substitutions" in data:
        kwargs["substitutions"] = _parse_substitutions(data["substitutions"])

    if year is not None:
        kwargs["year"] = year
    if kwargs.get("year", 1) < 1:
        raise ConfigError(f"`year` must be positive, got {kwargs['year']!r}")

    return Settings(
        root=root_path,
        session=os.environ.get(SESSION_ENV_VAR, ""),
        **kwargs,
    )
