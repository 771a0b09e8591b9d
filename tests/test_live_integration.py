import logging
import os

import pytest

from contact_extractor.config import ExtractorConfig
from contact_extractor.engine import ContactExtractor, build_fetcher
from contact_extractor.throttle import ThrottleGate

requires_live = pytest.mark.skipif(
    os.getenv("RUN_LIVE_INTEGRATION") != "1",
    reason="Set RUN_LIVE_INTEGRATION=1 to execute live integration tests.",
)


@requires_live
def test_live_direct_fetch_smoke() -> None:
    logger = logging.getLogger("test")
    fetcher = build_fetcher(ExtractorConfig(urls=("example.com",), use_relay=False), logger=logger)
    try:
        result = ContactExtractor(fetcher=fetcher, throttle=ThrottleGate(), logger=logger).extract(
            "example.com"
        )
    finally:
        fetcher.close()
    assert result.url == "https://example.com"
