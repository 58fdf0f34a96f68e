"""Utility functions"""
import math
import re
import unicodedata
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Union

# Spanish month names, 1-based
MONTHS: Dict[str, int] = {
    'enero': 1,
    'febrero': 2,
    'marzo': 3,
    'abril': 4,
    'mayo': 5,
    'junio': 6,
    'julio': 7,
    'agosto': 8,
    'septiembre': 9,
    'setiembre': 9,
    'octubre': 10,
    'noviembre': 11,
    'diciembre': 12,
}

_DATE_PATTERN = re.compile(r'([0-9]{1,2})\s+([^\W\d_]+)\s+([0-9]{4})')
_DIGITS = re.compile(r'([0-9]+)')


def strip_diacritics(text: str) -> str:
    """Remove accents and other combining marks"""
    decomposed = unicodedata.normalize('NFD', text)
    return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


_MONTH_LOOKUP = {strip_diacritics(name): number for name, number in MONTHS.items()}


def parse_local_date(text: str) -> Optional[date]:
    """Parse a date like '15 enero 2024' into a calendar date.

    Returns None when the text does not follow the '<day> <month> <year>'
    grammar or the month is unknown. Days past the end of the month roll
    over into the next one ('31 febrero 2024' is 2 March 2024).
    """
    if not text:
        return None

    clean = text.lower().replace(',', '').strip()
    match = _DATE_PATTERN.fullmatch(clean)
    if not match:
        return None

    month = _MONTH_LOOKUP.get(strip_diacritics(match.group(2)))
    if month is None:
        return None

    day = int(match.group(1))
    year = int(match.group(3))
    try:
        return date(year, month, 1) + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def to_iso_day(value: Union[date, datetime]) -> str:
    """Format a date as YYYY-MM-DD using local calendar fields"""
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone()
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def to_local_iso(dt: datetime) -> str:
    """Local timestamp without offset, truncated to seconds"""
    return dt.replace(microsecond=0, tzinfo=None).isoformat()


def current_month_range(now: datetime = None) -> Dict[str, str]:
    """Return the 'after' and 'before' bounds of the month containing now"""
    if now is None:
        now = datetime.now()
    start = datetime(now.year, now.month, 1)
    if now.month == 12:
        next_start = datetime(now.year + 1, 1, 1)
    else:
        next_start = datetime(now.year, now.month + 1, 1)
    return {
        'after': to_local_iso(start),
        'before': to_local_iso(next_start),
    }


def natural_key(text: str) -> List[Union[str, int]]:
    """Case and accent insensitive sort key that orders digit runs numerically.

    'Pedido 9' sorts before 'pedido 10'.
    """
    folded = strip_diacritics(text or '').casefold()
    parts = _DIGITS.split(folded)
    # split() with a capture group alternates text (even) and digits (odd)
    return [int(part) if i % 2 else part for i, part in enumerate(parts)]


def parse_timestamp(text: str) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp, None when it is missing or malformed"""
    if not text:
        return None
    try:
        return datetime.fromisoformat(str(text).strip().replace('Z', '+00:00'))
    except ValueError:
        return None


def parse_amount(text) -> float:
    """Coerce a decimal string to float; NaN when it is not a finite number"""
    if text is None:
        return float('nan')
    if isinstance(text, bool):
        return float(text)
    if isinstance(text, (int, float)):
        try:
            value = float(text)
        except OverflowError:
            return float('nan')
        return value if math.isfinite(value) else float('nan')
    clean = str(text).strip()
    if not clean:
        return 0.0
    if '_' in clean:
        return float('nan')
    try:
        value = float(clean)
    except ValueError:
        return float('nan')
    return value if math.isfinite(value) else float('nan')
