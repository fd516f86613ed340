"""Network transfer of dictionary files into the local cache."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

import requests

from .errors import FileCachingError

LOGGER = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class Fetcher(Protocol):
    """Anything able to copy the content behind a URL into a local file."""

    def fetch(self, url: str, destination: Path) -> None:
        ...


class HttpFetcher:
    """Blocking HTTP(S) download using :mod:`requests`.

    There is no timeout unless one is given: a stalled transfer blocks the
    calling thread.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, url: str, destination: Path) -> None:
        """Stream ``url`` into ``destination``, creating parent directories."""

        LOGGER.info("Downloading %s", url)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileCachingError(f"cannot create {destination.parent}: {exc}") from exc

        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with destination.open("wb") as handle:
                    for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                        handle.write(chunk)
        except (requests.RequestException, OSError) as exc:
            destination.unlink(missing_ok=True)
            raise FileCachingError(f"cannot download {url}: {exc}") from exc
        LOGGER.debug("Downloaded %s to %s", url, destination)


__all__ = ["Fetcher", "HttpFetcher"]
