"""
Date-time codec for the Czech report format.

Canonical text is "DD.MM.YY HH:MM". The parser is more lenient: it also
accepts 4-digit years, '/' separators, spaces around separators and
optional seconds. Anything the canonical pattern rejects gets one more
chance as ISO 8601 (what spreadsheet tools usually emit for dates).
"""

import re
from datetime import datetime
from typing import Optional

_CZECH_DATETIME_RE = re.compile(
    r"^(\d{1,2})\s*[./]\s*(\d{1,2})\s*[./]\s*(\d{2}|\d{4})"
    r"\s+(\d{1,2}):(\d{1,2})(?::(\d{1,2}))?$"
)


def _parse_czech(text: str) -> Optional[datetime]:
    m = _CZECH_DATETIME_RE.match(text)
    if not m:
        return None

    day, month, year, hour, minute = (int(g) for g in m.groups()[:5])
    second = int(m.group(6)) if m.group(6) else 0

    # 2-digit years belong to this century
    if year < 100:
        year += 2000

    if not (1 <= month <= 12 and 1 <= day <= 31 and 0 <= hour <= 23
            and 0 <= minute <= 59 and 0 <= second <= 59):
        return None

    try:
        # datetime rejects impossible dates such as Feb 30 itself
        return datetime(year, month, day, hour, minute, second)
    except ValueError:
        return None


def _parse_iso(text: str) -> Optional[datetime]:
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None

    # Aware values are converted to local wall-clock time
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def parse_datetime(text) -> Optional[datetime]:
    """
    Parse report date-time text into a naive local datetime.

    Accepts:
      - "15.03.24 08:30", "15.3.2024 8:30:00", "15/03/24 08:30", "15 . 03 . 24 08:30"
      - ISO 8601, e.g. "2024-03-15T08:30:00" or "2024-03-15 08:30+01:00"

    Returns None when the text is not a valid instant. Never raises.
    """
    if not text or not isinstance(text, str):
        return None

    stripped = text.strip()
    if not stripped:
        return None

    return _parse_czech(stripped) or _parse_iso(stripped)


def format_datetime(dt: datetime) -> str:
    """Format as canonical "DD.MM.YY HH:MM" (seconds dropped)"""
    return f"{dt.day:02d}.{dt.month:02d}.{dt.year % 100:02d} {dt.hour:02d}:{dt.minute:02d}"


def format_iso_date(dt: datetime) -> str:
    """Format the date part as YYYY-MM-DD"""
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"
