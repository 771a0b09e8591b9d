"""Protocols and lightweight model types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


class PageFetcher(Protocol):
    """Contract for page fetchers."""

    def fetch(self, url: str) -> str:
        """Return the page body for an absolute URL or raise FetchError."""


@dataclass(frozen=True)
class ContactSet:
    """Emails and phone numbers found in one piece of text, first-seen order."""

    emails: tuple[str, ...] = ()
    phone_numbers: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not (self.emails or self.phone_numbers)


@dataclass(frozen=True)
class ExtractionResult:
    """Contacts extracted from one URL."""

    url: str
    emails: tuple[str, ...]
    phone_numbers: tuple[str, ...]
    captured_at: datetime
