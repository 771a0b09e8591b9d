"""CLI entrypoint for contact-extractor."""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

from .config import (
    DEFAULT_MAX_RESPONSE_BYTES,
    DEFAULT_RELAY_BASE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
    RELAY_ENV_VAR,
    ExtractorConfig,
)
from .engine import run_extraction
from .errors import ConfigError
from .io_csv import write_results
from .logging_utils import configure_logging, get_logger
from .validation import load_lines_from_file


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="Contact Extractor - find business emails and phone numbers on a web page."
    )
    parser.add_argument("urls", nargs="*", help="URLs or bare domains to scan.")
    parser.add_argument("--urls-file", help="Path to URL file (one URL per line).")
    parser.add_argument("--output", help="Write results to this CSV path.")
    fetch_group = parser.add_mutually_exclusive_group(required=False)
    fetch_group.add_argument(
        "--relay-base",
        help=f"Relay endpoint prefix (or set {RELAY_ENV_VAR}; default {DEFAULT_RELAY_BASE}).",
    )
    fetch_group.add_argument(
        "--direct", action="store_true", help="Fetch pages directly instead of via the relay."
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Request timeout in seconds.",
    )
    parser.add_argument(
        "--max-bytes",
        type=int,
        default=DEFAULT_MAX_RESPONSE_BYTES,
        help="Maximum response size in bytes.",
    )
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header.")
    parser.add_argument(
        "--no-wait",
        action="store_true",
        help="Fail a URL instead of waiting when the rate limit is hit.",
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable tqdm progress bars.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse and pre-validate CLI input."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.urls or args.urls_file):
        parser.error("Provide at least one URL or --urls-file.")
    return args


def _materialize_urls(args: argparse.Namespace) -> tuple[str, ...]:
    urls = list(args.urls)
    if args.urls_file:
        urls.extend(load_lines_from_file(args.urls_file))
    return tuple(urls)


def namespace_to_config(args: argparse.Namespace) -> ExtractorConfig:
    """Convert CLI args to validated ExtractorConfig."""
    relay_base = args.relay_base or os.getenv(RELAY_ENV_VAR) or DEFAULT_RELAY_BASE
    return ExtractorConfig(
        urls=_materialize_urls(args),
        output=args.output,
        use_relay=not args.direct,
        relay_base=relay_base,
        user_agent=args.user_agent,
        request_timeout=args.timeout,
        max_response_bytes=args.max_bytes,
        wait_on_rate_limit=not args.no_wait,
        show_progress=not args.no_progress,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    logger = get_logger()
    try:
        config = namespace_to_config(args)
    except (ConfigError, OSError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    results, failures = run_extraction(config, logger=logger)
    for result in results:
        logger.info("%s", result.url)
        for email in result.emails:
            logger.info("  email: %s", email)
        for phone in result.phone_numbers:
            logger.info("  phone: %s", phone)
    if config.output:
        try:
            write_results(config.output, results)
        except OSError as exc:
            logger.error("Could not write results to %s: %s", config.output, exc)
            return 3
        logger.info("Wrote %d results to %s", len(results), config.output)
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
