"""HTTP retrieval of puzzle definitions."""

from __future__ import annotations

import os
from typing import Optional
from urllib.parse import urljoin

import requests

from ..core.exceptions import PuzzleFetchError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


class PuzzleFetcher:
    """Downloads puzzle files from absolute URLs or a configured base URL."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        base_url: Optional[str] = None,
        base_url_env: str = "KENKEN_PUZZLE_BASE_URL",
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.base_url = base_url or os.environ.get(base_url_env)

    def resolve(self, source: str) -> str:
        if is_url(source):
            return source
        if not self.base_url:
            raise PuzzleFetchError(f"No base URL configured to resolve '{source}'")
        base = self.base_url if self.base_url.endswith("/") else self.base_url + "/"
        return urljoin(base, source)

    def fetch(self, source: str) -> str:
        """Return the text body of the puzzle at ``source``."""
        url = self.resolve(source)
        LOGGER.debug("Fetching puzzle from %s", url)
        try:
            response = requests.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise PuzzleFetchError(f"Puzzle request failed: {exc}") from exc
        return response.text
