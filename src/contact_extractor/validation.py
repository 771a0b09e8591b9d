"""URL normalization and runtime guardrails."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from .errors import ConfigError

SCHEME_PREFIX = "http"
DEFAULT_SCHEME = "https://"


def normalize_url(raw: str) -> str:
    """Prefix ``https://`` onto input that does not already start with ``http``.

    Nothing else is checked here; malformed input surfaces as a FetchError
    once the fetcher tries to request it.
    """
    if raw.startswith(SCHEME_PREFIX):
        return raw
    return f"{DEFAULT_SCHEME}{raw}"


def is_supported_url(url: str) -> bool:
    """Allow only absolute HTTP(S) URLs with a hostname."""
    parsed = urlparse(url)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def load_lines_from_file(path: str) -> list[str]:
    """Load non-empty, non-comment lines from a UTF-8 text file."""
    content = Path(path).read_text(encoding="utf-8")
    return [
        line.strip()
        for line in content.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]


def validate_runtime_constraints(
    *,
    urls: tuple[str, ...],
    use_relay: bool,
    relay_base: str,
    request_timeout: float,
    max_response_bytes: int,
) -> None:
    """Validate CLI/runtime configuration and raise ConfigError on invalid values."""
    if not urls:
        raise ConfigError("Provide at least one URL or --urls-file.")
    if any(not url.strip() for url in urls):
        raise ConfigError("URLs must not be blank.")
    if use_relay and not is_supported_url(relay_base):
        raise ConfigError("--relay-base must be an absolute http(s) URL.")
    if request_timeout <= 0:
        raise ConfigError("--timeout must be > 0.")
    if max_response_bytes < 1:
        raise ConfigError("--max-bytes must be >= 1.")
