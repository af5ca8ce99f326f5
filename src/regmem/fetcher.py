"""HTTP fetching with retries and an on-disk response cache."""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from regmem.config import config
from regmem.document import NOT_FOUND_MARKER
from regmem.exceptions import FetchError

logger = logging.getLogger(__name__)

RETRY_STATUSES = (500, 502, 503, 504)


def make_session(
    max_retries: int,
    backoff_factor: float,
    user_agent: Optional[str] = None,
) -> requests.Session:
    """Session that retries connection errors and server errors on GET."""
    session = requests.Session()
    if user_agent:
        session.headers["User-Agent"] = user_agent
    retry = Retry(
        total=max_retries,
        connect=max_retries,
        read=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def cache_key(url: str) -> str:
    return hashlib.sha1(url.encode("utf-8")).hexdigest()


class Fetcher:
    """
    fetch(url) -> page text, or None when the page does not exist.

    Responses are cached under cache_dir by SHA-1 of the URL. Not-found
    pages are never cached, since an edition that does not exist yet may
    be published later. Failures that survive the retry policy raise
    FetchError.
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
        backoff_factor: Optional[float] = None,
        session: Optional[requests.Session] = None,
        use_cache: bool = True,
    ):
        self.cache_dir = Path(cache_dir if cache_dir is not None else config.cache_dir)
        self.timeout = timeout if timeout is not None else config.timeout
        self.use_cache = use_cache
        self.session = session or make_session(
            max_retries=max_retries if max_retries is not None else config.max_retries,
            backoff_factor=backoff_factor if backoff_factor is not None else config.backoff_factor,
            user_agent=config.user_agent,
        )

    def _cache_path(self, url: str) -> Path:
        return self.cache_dir / cache_key(url)

    def _read_cache(self, url: str) -> Optional[str]:
        if not self.use_cache:
            return None
        path = self._cache_path(url)
        if not path.exists():
            return None
        logger.debug(f"Cached: {url}")
        return path.read_text(encoding="utf-8")

    def _write_cache(self, url: str, text: str) -> None:
        if not self.use_cache:
            return
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path = self._cache_path(url)
        # Readers only ever see a complete entry or none
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            delete=False,
            dir=str(self.cache_dir),
            prefix=path.name,
            suffix=".tmp",
        ) as tmp:
            tmp_path = Path(tmp.name)
            try:
                tmp.write(text)
            except BaseException:
                tmp.close()
                tmp_path.unlink()
                raise
        try:
            os.replace(tmp_path, path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    def fetch(self, url: str) -> Optional[str]:
        cached = self._read_cache(url)
        if cached is not None:
            return cached

        logger.debug(f"Requesting: {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(url, e) from e

        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            raise FetchError(url, requests.HTTPError(f"HTTP {response.status_code}", response=response))

        text = response.text
        if NOT_FOUND_MARKER in text:
            return None

        self._write_cache(url, text)
        return text

    def __call__(self, url: str) -> Optional[str]:
        return self.fetch(url)
