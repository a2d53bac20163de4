"""
Date normalization for invoice fields.

Stored invoice dates arrive in several textual shapes: the canonical
`YYYY-MM-DD` form used by date inputs, the `DD/MM/YY` or `DD/MM/YYYY` form some
records were saved in, or free text. Everything here is a pure function of its
input and an explicit `today`, so renders are reproducible.
"""

import re
from calendar import monthrange
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from core.config import INVOICE_TIMEZONE, PAYMENT_TERMS_DAYS

DASH_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

# Tried in order when the text is neither dash nor slash form
GENERIC_DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
]


def invoice_today(now: datetime | None = None, zone: str = INVOICE_TIMEZONE) -> date:
    """Today's date in the invoicing time zone."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(ZoneInfo(zone)).date()


def last_day_of_month(today: date) -> date:
    """Return the last calendar day of today's month."""
    return today.replace(day=monthrange(today.year, today.month)[1])


def month_end_text(today: date) -> str:
    """Last day of the current month in YYYY-MM-DD form."""
    return last_day_of_month(today).isoformat()


def current_month_year(today: date) -> str:
    """Work period label for today, e.g. 'March 2025'."""
    return today.strftime("%B %Y")


def _parse_slash_date(text: str) -> date | None:
    """Interpret DD/MM/YY or DD/MM/YYYY. Two-digit years are 20xx."""
    parts = [p.strip() for p in text.split("/")]
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return None

    day, month, year = parts
    if len(year) == 2:
        year = "20" + year
    if len(year) != 4:
        return None

    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def _parse_generic_date(text: str) -> date | None:
    for fmt in GENERIC_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_date(text: str | None) -> date | None:
    """
    Parse a stored date string, or return None if it is not a calendar date.

    Rules, in priority order:
    1. exact YYYY-MM-DD
    2. slash form with three parts, read as DD/MM/YY[YY]
    3. generic formats (ISO timestamps, 'March 15, 2025', ...)
    """
    if not text:
        return None

    text = text.strip()
    if not text:
        return None

    if DASH_DATE_RE.fullmatch(text):
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None

    if "/" in text and len(text.split("/")) == 3:
        parsed = _parse_slash_date(text)
        if parsed:
            return parsed

    return _parse_generic_date(text)


def normalize_date(text: str | None, today: date) -> str:
    """
    Normalize a stored date to YYYY-MM-DD.

    Valid dash-form input is returned unchanged. Anything that cannot be read
    as a calendar date falls back to the last day of today's month.
    """
    parsed = parse_date(text)
    if parsed is None:
        return month_end_text(today)
    return parsed.isoformat()


def to_storage_date(text: str | None, today: date) -> str:
    """
    Convert an edited date for storage.

    Readable dates are stored in dash form. Unreadable input is replaced with
    the current month end in DD/MM/YY form.
    """
    parsed = parse_date(text)
    if parsed is None:
        return last_day_of_month(today).strftime("%d/%m/%y")
    return parsed.isoformat()


def payment_due_date(invoice_date: str | None, today: date) -> str:
    """
    Invoice date plus the payment terms, in YYYY-MM-DD form.

    Uses calendar arithmetic, so month and year boundaries roll over. An
    unreadable invoice date is first replaced by the current month end.
    """
    base = parse_date(invoice_date) or last_day_of_month(today)
    return (base + timedelta(days=PAYMENT_TERMS_DAYS)).isoformat()
