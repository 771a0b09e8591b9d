from contact_extractor.extraction import (
    dedupe_preserve_order,
    extract_contacts,
    extract_emails,
    extract_phone_numbers,
    is_plausible_email,
    is_plausible_phone,
)
from contact_extractor.models import ContactSet


def test_extract_emails_case_folds_dedupes_and_drops_images() -> None:
    html = """
    <a href="mailto:contact@example.com">contact@example.com</a>
    <p>Sales: sales@EXAMPLE.com</p>
    <img srcset="/img/image@2x.png 2x">
    """
    assert extract_emails(html) == ["contact@example.com", "sales@example.com"]


def test_extract_emails_ignores_version_strings() -> None:
    text = '<script src="https://cdn.example.net/jquery@3.7.1/dist/jquery.min.js"></script>'
    assert extract_emails(text) == []


def test_extract_emails_rejects_asset_extensions() -> None:
    text = "logo@2x.jpg banner@3x.webp bundle@1.0.js theme@dark.css icon@sprite.svg real@shop.io"
    assert extract_emails(text) == ["real@shop.io"]


def test_extract_emails_keeps_first_seen_order() -> None:
    text = "b@example.org a@example.com B@Example.org"
    assert extract_emails(text) == ["b@example.org", "a@example.com"]


def test_extract_emails_handles_multi_label_domains_and_punctuation() -> None:
    text = "Write to first.last+tag@mail.example.co.uk. Or info@example-shop.com!"
    assert extract_emails(text) == ["first.last+tag@mail.example.co.uk", "info@example-shop.com"]


def test_is_plausible_email_rejects_numeric_suffix() -> None:
    assert is_plausible_email("user@host.123") is False
    assert is_plausible_email("user@") is False
    assert is_plausible_email("user@example.com") is True


def test_extract_phone_numbers_formats_and_short_tokens() -> None:
    text = "Call (555) 123-4567 or 555.123.4567. Established 1999."
    assert extract_phone_numbers(text) == ["(555) 123-4567", "555.123.4567"]


def test_extract_phone_numbers_dedupes_identical_matches() -> None:
    text = "Phone: 555-123-4567<br>Fax: 555-123-4567<br>Mobile: +1 555 987 6543"
    assert extract_phone_numbers(text) == ["555-123-4567", "+1 555 987 6543"]


def test_extract_phone_numbers_ignores_long_digit_runs() -> None:
    assert extract_phone_numbers("Order 12345678901234567890 shipped") == []


def test_is_plausible_phone_digit_bounds() -> None:
    assert is_plausible_phone("555-1234") is False
    assert is_plausible_phone("(555) 123-4567") is True
    assert is_plausible_phone("+123 555 123 4567") is True
    assert is_plausible_phone("1234567890123456") is False


def test_extract_contacts_empty_page() -> None:
    contacts = extract_contacts("<html><body><p>Nothing here.</p></body></html>")
    assert contacts == ContactSet(emails=(), phone_numbers=())
    assert contacts.is_empty() is True
    assert extract_contacts("").is_empty() is True


def test_extract_contacts_returns_both_sequences() -> None:
    html = "<footer>hello@acme.io | +1 (800) 555-0199</footer>"
    contacts = extract_contacts(html)
    assert contacts.emails == ("hello@acme.io",)
    assert contacts.phone_numbers == ("+1 (800) 555-0199",)


def test_dedupe_preserve_order() -> None:
    assert dedupe_preserve_order(["a", "b", "a", "c", "b"]) == ["a", "b", "c"]


def test_extract_phone_numbers_ignores_non_ascii_digits() -> None:
    text = "ref ٥٥٥-١٢٣-٤٥٦٧ and ５５５.１２３.４５６７"
    assert extract_phone_numbers(text) == []
    assert is_plausible_phone("５５５５５５５５５５") is False
