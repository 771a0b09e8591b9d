"""HTTP page fetchers."""

from __future__ import annotations

import logging
from urllib.parse import quote

from requests import Response, Session
from requests.adapters import HTTPAdapter
from requests.exceptions import HTTPError, RequestException
from requests.utils import get_encoding_from_headers
from urllib3.util.retry import Retry

from .config import DEFAULT_MAX_RESPONSE_BYTES, DEFAULT_RELAY_BASE
from .errors import FetchError

# Characters left unescaped by JavaScript's encodeURIComponent.
URI_COMPONENT_SAFE = "-_.!~*'()"
CHUNK_SIZE = 64 * 1024
DEFAULT_ENCODING = "utf-8"


def make_session(user_agent: str) -> Session:
    """Create a requests session that never retries on its own."""
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    adapter = HTTPAdapter(max_retries=Retry(total=0, read=False, raise_on_status=False))
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def relay_url(relay_base: str, target_url: str) -> str:
    """Build ``<relay-base><percent-encoded-target>``."""
    return f"{relay_base}{quote(target_url, safe=URI_COMPONENT_SAFE)}"


def _read_capped(response: Response, max_bytes: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
        total += len(chunk)
        if total > max_bytes:
            raise FetchError(f"Response exceeded {max_bytes} bytes.")
        chunks.append(chunk)
    return b"".join(chunks)


def declared_charset(response: Response) -> str | None:
    """Return the charset named in Content-Type, ignoring the HTTP ISO-8859-1 default."""
    content_type = response.headers.get("Content-Type", "")
    if "charset" not in content_type.lower():
        return None
    return get_encoding_from_headers(response.headers)


def _decode(body: bytes, encoding: str | None) -> str:
    try:
        return body.decode(encoding or DEFAULT_ENCODING, errors="replace")
    except LookupError:
        return body.decode(DEFAULT_ENCODING, errors="replace")


def get_text(
    session: Session,
    url: str,
    *,
    timeout: float,
    max_bytes: int,
    logger: logging.Logger,
) -> str:
    """GET ``url`` and return its body as text, raising FetchError on any failure."""
    try:
        response = session.get(url, timeout=timeout, stream=True)
    except RequestException as exc:
        logger.debug("Request failed for %s: %s", url, exc)
        raise FetchError(f"Failed to reach {url}: {exc}", cause=exc) from exc
    try:
        try:
            response.raise_for_status()
        except HTTPError as exc:
            logger.debug("Non-success status %s for %s", response.status_code, url)
            raise FetchError(
                f"Failed to fetch website. Status: {response.status_code}",
                status=response.status_code,
            ) from exc
        try:
            body = _read_capped(response, max_bytes)
        except RequestException as exc:
            logger.debug("Reading body failed for %s: %s", url, exc)
            raise FetchError(f"Failed to read {url}: {exc}", cause=exc) from exc
        return _decode(body, declared_charset(response))
    finally:
        response.close()


class RelayFetcher:
    """Fetch pages through a relay that takes the target URL as its query string."""

    def __init__(
        self,
        *,
        session: Session,
        timeout: float,
        logger: logging.Logger,
        relay_base: str = DEFAULT_RELAY_BASE,
        max_bytes: int = DEFAULT_MAX_RESPONSE_BYTES,
    ) -> None:
        self._session = session
        self._relay_base = relay_base
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._logger = logger

    def fetch(self, url: str) -> str:
        self._logger.debug("Fetching %s via relay %s", url, self._relay_base)
        return get_text(
            self._session,
            relay_url(self._relay_base, url),
            timeout=self._timeout,
            max_bytes=self._max_bytes,
            logger=self._logger,
        )

    def close(self) -> None:
        self._session.close()


class DirectFetcher:
    """Fetch pages straight from the target host."""

    def __init__(
        self,
        *,
        session: Session,
        timeout: float,
        logger: logging.Logger,
        max_bytes: int = DEFAULT_MAX_RESPONSE_BYTES,
    ) -> None:
        self._session = session
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._logger = logger

    def fetch(self, url: str) -> str:
        self._logger.debug("Fetching %s directly", url)
        return get_text(
            self._session,
            url,
            timeout=self._timeout,
            max_bytes=self._max_bytes,
            logger=self._logger,
        )

    def close(self) -> None:
        self._session.close()
