"""
puzzle_client.py

Responsibility: Isolate all direct interaction with the puzzle website.

This module must be the only place that:
- Constructs puzzle input URLs
- Sends HTTP requests to the puzzle host
- Interprets HTTP status codes

Everything else (copying, manifest edits, CLI behavior) should use this client.
"""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from daystart import DayStartError, __version__

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://adventofcode.com"


class PuzzleInputError(DayStartError):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PuzzleClient:
    def __init__(
        self,
        session: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        year: int = 2023,
        timeout: float = 30,
    ) -> None:
        if not session.strip():
            raise PuzzleInputError("AOC_SESSION is required (set it in .env).")
        self._session = session.strip()
        self._base_url = base_url.rstrip("/")
        self._year = year
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Cookie": f"session={self._session}",
            "User-Agent": f"start-day/{__version__}",
        }

    def input_url(self, day: int) -> str:
        return f"{self._base_url}/{self._year}/day/{day}/input"

    def fetch_input(self, day: int) -> bytes:
        """
        Download the raw puzzle input for `day`. One request, no retries.
        """
        url = self.input_url(day)
        logger.debug("GET %s", url)
        try:
            r = requests.get(url, headers=self._headers(), timeout=self._timeout)
        except requests.RequestException as e:
            raise PuzzleInputError(f"Request to {url} failed: {e}") from e

        if r.status_code >= 400:
            hint = " (is AOC_SESSION still valid?)" if r.status_code in (400, 401, 403) else ""
            raise PuzzleInputError(
                f"Puzzle input request failed with HTTP {r.status_code} for {url}{hint}",
                status_code=r.status_code,
            )
        return r.content

    def download_input(self, day: int, destination: str | Path) -> int:
        """
        Fetch the input for `day` and write the body verbatim to destination.

        Returns the number of bytes written.
        """
        body = self.fetch_input(day)
        dst = Path(destination)
        try:
            dst.write_bytes(body)
        except OSError as e:
            raise PuzzleInputError(f"Failed writing puzzle input to {dst}: {e}") from e
        return len(body)
