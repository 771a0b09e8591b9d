"""Pure contact extraction and false-positive filtering."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .models import ContactSet

# The top-level label must be alphabetic, which keeps version strings such as
# ``jquery@3.7.1`` out.
EMAIL_REGEX = re.compile(
    r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}(?![a-zA-Z0-9])",
    re.IGNORECASE | re.ASCII,
)
# North-American-style layouts with ASCII digits only; not a numbering-plan validator.
PHONE_REGEX = re.compile(
    r"(?<!\d)(?:\+?\d{1,3}[\s.\-]?)?\(?\d{3}\)?[\s.\-]?\d{3}[\s.\-]?\d{4}(?!\d)",
    re.ASCII,
)

NON_CONTACT_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".js", ".css")
MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 15
NON_DIGIT_REGEX = re.compile(r"[^0-9]")


def dedupe_preserve_order(items: Iterable[str]) -> list[str]:
    """Dedupe values while preserving first-seen order."""
    output: list[str] = []
    seen: set[str] = set()
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        output.append(item)
    return output


def is_plausible_email(email: str) -> bool:
    """Reject asset file names and numeric-suffix leaks that look like addresses."""
    if email.endswith(NON_CONTACT_EXTENSIONS):
        return False
    domain = email.rpartition("@")[2]
    if not domain:
        return False
    return not domain.rsplit(".", maxsplit=1)[-1].isdigit()


def is_plausible_phone(candidate: str) -> bool:
    digits = NON_DIGIT_REGEX.sub("", candidate)
    return MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS


def extract_emails(text: str) -> list[str]:
    """Return lowercase emails in first-seen order, without false positives."""
    matches = (match.group(0).lower() for match in EMAIL_REGEX.finditer(text or ""))
    return dedupe_preserve_order(email for email in matches if is_plausible_email(email))


def extract_phone_numbers(text: str) -> list[str]:
    """Return phone-shaped tokens with 10-15 digits, as written, in first-seen order."""
    matches = (match.group(0).strip() for match in PHONE_REGEX.finditer(text or ""))
    return dedupe_preserve_order(phone for phone in matches if is_plausible_phone(phone))


def extract_contacts(text: str) -> ContactSet:
    """Extract both emails and phone numbers from raw page text."""
    return ContactSet(
        emails=tuple(extract_emails(text)),
        phone_numbers=tuple(extract_phone_numbers(text)),
    )
