"""
daystart package

This package implements `start-day`, a CLI that prepares the workspace for a new
puzzle day.

Key responsibilities are split across modules:
- `config.py`: load `.env` and the optional YAML settings file into `Settings`
- `scaffold.py`: day formatting, template copying and placeholder substitution
- `manifest.py`: add the new day to the workspace member list
- `puzzle_client.py`: isolated HTTP interaction (puzzle input download)
- `cli.py`: CLI entrypoint and orchestration (copy -> substitute -> manifest -> fetch)
"""

from __future__ import annotations

__all__ = ["DayStartError", "__version__"]

__version__ = "0.1.0"


class DayStartError(RuntimeError):
    """Base class for every error raised by start-day."""
