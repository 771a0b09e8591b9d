"""Extraction engine: throttle, normalize, fetch, extract."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from tqdm import tqdm

from .config import ExtractorConfig
from .errors import ExtractorError, RateLimited
from .extraction import extract_contacts
from .fetchers import DirectFetcher, RelayFetcher, make_session
from .models import ExtractionResult, PageFetcher
from .throttle import ThrottleGate
from .validation import normalize_url

NowFn = Callable[[], datetime]
SleepFn = Callable[[float], None]
Failure = tuple[str, ExtractorError]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ContactExtractor:
    """Turn a user-supplied URL into the emails and phone numbers on that page.

    The gate is armed before the fetch starts, so a failed fetch still uses up
    the throttle window. Nothing is retried here.
    """

    def __init__(
        self,
        *,
        fetcher: PageFetcher,
        throttle: ThrottleGate,
        logger: logging.Logger,
        now_fn: NowFn = utc_now,
    ) -> None:
        self._fetcher = fetcher
        self._throttle = throttle
        self._logger = logger
        self._now_fn = now_fn

    @property
    def throttle(self) -> ThrottleGate:
        return self._throttle

    def extract(self, raw_url: str) -> ExtractionResult:
        """Extract contacts from ``raw_url``.

        Raises RateLimited when called again inside the throttle window and
        FetchError when the page cannot be retrieved. A page without contacts
        is a normal, empty result.
        """
        if not raw_url or not raw_url.strip():
            raise ValueError("URL is required.")
        try:
            self._throttle.check_and_arm()
        except RateLimited as exc:
            self._logger.info("Rate limited; retry in %d seconds", exc.retry_after_seconds)
            raise
        url = normalize_url(raw_url)
        html = self._fetcher.fetch(url)
        contacts = extract_contacts(html)
        if contacts.is_empty():
            self._logger.info("No contacts found on %s", url)
        else:
            self._logger.info(
                "Extracted %d emails and %d phone numbers from %s",
                len(contacts.emails),
                len(contacts.phone_numbers),
                url,
            )
        return ExtractionResult(
            url=url,
            emails=contacts.emails,
            phone_numbers=contacts.phone_numbers,
            captured_at=self._now_fn(),
        )


def build_fetcher(
    config: ExtractorConfig, *, logger: logging.Logger
) -> RelayFetcher | DirectFetcher:
    """Build the configured page fetcher around a fresh session."""
    session = make_session(config.user_agent)
    if config.use_relay:
        return RelayFetcher(
            session=session,
            relay_base=config.relay_base,
            timeout=config.request_timeout,
            max_bytes=config.max_response_bytes,
            logger=logger,
        )
    return DirectFetcher(
        session=session,
        timeout=config.request_timeout,
        max_bytes=config.max_response_bytes,
        logger=logger,
    )


def _extract_waiting(
    extractor: ContactExtractor,
    url: str,
    *,
    wait: bool,
    sleep_fn: SleepFn,
    logger: logging.Logger,
) -> ExtractionResult:
    try:
        return extractor.extract(url)
    except RateLimited as exc:
        if not wait:
            raise
        logger.info("Waiting %d seconds before %s", exc.retry_after_seconds, url)
        sleep_fn(exc.retry_after_seconds)
        return extractor.extract(url)


def extract_many(
    urls: Sequence[str],
    *,
    extractor: ContactExtractor,
    wait_on_rate_limit: bool = True,
    show_progress: bool = False,
    sleep_fn: SleepFn = time.sleep,
    logger: logging.Logger,
) -> tuple[list[ExtractionResult], list[Failure]]:
    """Run the extractor over several URLs in order, collecting results and failures."""
    results: list[ExtractionResult] = []
    failures: list[Failure] = []
    iterator: Sequence[str] = urls
    if show_progress:
        iterator = tqdm(urls, total=len(urls), desc="extracting contacts")
    for url in iterator:
        try:
            results.append(
                _extract_waiting(
                    extractor, url, wait=wait_on_rate_limit, sleep_fn=sleep_fn, logger=logger
                )
            )
        except ExtractorError as exc:
            logger.error("Failed to extract contacts from %s: %s", url, exc)
            failures.append((url, exc))
    return results, failures


def run_extraction(
    config: ExtractorConfig,
    *,
    logger: logging.Logger,
    sleep_fn: SleepFn = time.sleep,
    throttle: ThrottleGate | None = None,
) -> tuple[list[ExtractionResult], list[Failure]]:
    """Build concrete dependencies and extract every configured URL in order."""
    fetcher = build_fetcher(config, logger=logger)
    extractor = ContactExtractor(
        fetcher=fetcher,
        throttle=throttle or ThrottleGate(),
        logger=logger,
    )
    try:
        results, failures = extract_many(
            config.urls,
            extractor=extractor,
            wait_on_rate_limit=config.wait_on_rate_limit,
            show_progress=config.show_progress,
            sleep_fn=sleep_fn,
            logger=logger,
        )
    finally:
        fetcher.close()
    return results, failures
