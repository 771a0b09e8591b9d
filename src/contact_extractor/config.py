"""Runtime configuration model."""

from __future__ import annotations

from dataclasses import dataclass

from .validation import validate_runtime_constraints

DEFAULT_USER_AGENT = "ContactExtractor/1.0 (python-requests)"
DEFAULT_RELAY_BASE = "https://corsproxy.io/?"
DEFAULT_REQUEST_TIMEOUT = 15.0
DEFAULT_MAX_RESPONSE_BYTES = 5 * 1024 * 1024
RELAY_ENV_VAR = "CONTACT_EXTRACTOR_RELAY"


@dataclass(frozen=True)
class ExtractorConfig:
    """Validated configuration used by the CLI and the composition root."""

    urls: tuple[str, ...]
    output: str | None = None
    use_relay: bool = True
    relay_base: str = DEFAULT_RELAY_BASE
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_response_bytes: int = DEFAULT_MAX_RESPONSE_BYTES
    wait_on_rate_limit: bool = True
    show_progress: bool = True

    def __post_init__(self) -> None:
        validate_runtime_constraints(
            urls=self.urls,
            use_relay=self.use_relay,
            relay_base=self.relay_base,
            request_timeout=self.request_timeout,
            max_response_bytes=self.max_response_bytes,
        )
