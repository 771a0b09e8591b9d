"""CSV serialization helpers."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from pathlib import Path

from .models import ExtractionResult

CSV_FIELDS = [
    "contact_type",
    "value",
    "source_url",
    "date_scraped_utc",
]


def result_rows(result: ExtractionResult) -> list[dict[str, str]]:
    """Flatten one result into CSV rows, emails first, in result order."""
    captured = result.captured_at.isoformat().replace("+00:00", "Z")
    contacts = [("email", email) for email in result.emails]
    contacts.extend(("phone", phone) for phone in result.phone_numbers)
    return [
        {
            "contact_type": contact_type,
            "value": value,
            "source_url": result.url,
            "date_scraped_utc": captured,
        }
        for contact_type, value in contacts
    ]


def write_results(path: str, results: Iterable[ExtractionResult]) -> None:
    """Write extraction results to CSV with stable schema."""
    output_path = Path(path)
    with output_path.open("w", newline="", encoding="utf-8") as file_obj:
        writer = csv.DictWriter(file_obj, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for result in results:
            writer.writerows(result_rows(result))
