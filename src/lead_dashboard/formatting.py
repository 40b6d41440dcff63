"""
Small total helpers shared by the manager and worker derivations.

None of these raise on odd input: missing or malformed values come back as
an empty string, ``None`` or the caller's default.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, List, Optional

from .date_range import WIRE_DATE_FORMAT
from .models import TextSegment

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_QUOTED = re.compile(r'"([^"]*)"')
_WORD_START = re.compile(r"\b\w")

MINUTES_IN_DAY = 1440
MINUTES_IN_MONTH = 43200
MINUTES_IN_TWO_MONTHS = 86400


def initials(name: Optional[str]) -> str:
    """``"John Doe" -> "JD"``, ``"Madonna" -> "M"``, blank names give ``""``."""
    if not name:
        return ""
    return "".join(token[0] for token in name.split()).upper()


def title_case(text: Optional[str]) -> str:
    """Upper-case the first letter of every word, leaving the rest untouched."""
    if not text:
        return ""
    return _WORD_START.sub(lambda match: match.group(0).upper(), text)


def status_label(status: Optional[str]) -> str:
    """``"in-progress" -> "In Progress"``."""
    return title_case((status or "").replace("-", " "))


def stage_label(status: Optional[str]) -> str:
    """Funnel stage label: ``"in-progress" -> "In progress"``."""
    if not status:
        return ""
    return status[:1].upper() + status[1:].replace("-", " ", 1)


def parse_float(value: Any) -> Optional[float]:
    """
    Lenient float parsing for numeric strings coming off the wire.

    Accepts numbers and strings with a leading numeric part (``"12.5%"`` gives
    ``12.5``). Anything else, including NaN, yields ``None``.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        number = float(match.group(1))
    else:
        return None
    if math.isnan(number):
        return None
    return number


def to_fixed(number: float, digits: int = 1) -> str:
    """Fixed-point text with halves rounded away from zero: ``1.25 -> "1.3"``."""
    quantum = Decimal(1).scaleb(-digits)
    try:
        return str(Decimal(number).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return f"{number:.{digits}f}"


def one_decimal(value: Any, default: str = "0.0") -> str:
    number = parse_float(value)
    if number is None or math.isinf(number):
        return default
    return to_fixed(number)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        try:
            parsed = datetime.strptime(value, WIRE_DATE_FORMAT)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def day_label(value: Optional[str]) -> str:
    """``"2024-03-01" -> "01 Mar"``; unparseable input is returned unchanged."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return value or ""
    return parsed.strftime("%d %b")


def _js_round(value: float) -> int:
    return int(math.floor(value + 0.5))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _distance_words(minutes: int) -> str:
    if minutes < 1:
        return "less than a minute"
    if minutes < 45:
        return _plural(minutes, "minute")
    if minutes < 90:
        return "about 1 hour"
    if minutes < MINUTES_IN_DAY:
        return f"about {_plural(_js_round(minutes / 60), 'hour')}"
    if minutes < 2520:
        return "1 day"
    if minutes < MINUTES_IN_MONTH:
        return _plural(_js_round(minutes / MINUTES_IN_DAY), "day")
    if minutes < MINUTES_IN_TWO_MONTHS:
        return f"about {_plural(_js_round(minutes / MINUTES_IN_MONTH), 'month')}"

    months = minutes // MINUTES_IN_MONTH
    if months < 12:
        return _plural(_js_round(minutes / MINUTES_IN_MONTH), "month")
    years, remainder = divmod(months, 12)
    if remainder < 3:
        return f"about {_plural(years, 'year')}"
    if remainder < 9:
        return f"over {_plural(years, 'year')}"
    return f"almost {_plural(years + 1, 'year')}"


def relative_time(value: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Human distance between ``value`` and ``now`` with a suffix.

    Uses the same buckets as date-fns ``formatDistanceToNow`` so labels match
    the rest of the product: ``"5 minutes ago"``, ``"about 2 hours ago"``,
    ``"in 3 days"``.
    """

    moment = parse_timestamp(value)
    if moment is None:
        return ""
    reference = now or datetime.now(timezone.utc)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)

    seconds = (reference - moment).total_seconds()
    words = _distance_words(_js_round(abs(seconds) / 60))
    if seconds >= 0:
        return f"{words} ago"
    return f"in {words}"


def emphasize_quotes(message: Optional[str]) -> List[TextSegment]:
    """
    Split a notification message into plain and emphasized segments.

    ``'Lead "Acme" created'`` becomes ``Lead '`` + *Acme* + ``' created``.
    The rendering layer decides how emphasis looks; no markup is produced.
    """

    if not message:
        return []

    segments: List[TextSegment] = []
    buffer = ""
    cursor = 0
    for match in _QUOTED.finditer(message):
        buffer += message[cursor:match.start()] + "'"
        segments.append(TextSegment(text=buffer))
        segments.append(TextSegment(text=match.group(1), emphasized=True))
        buffer = "'"
        cursor = match.end()
    buffer += message[cursor:]
    if buffer:
        segments.append(TextSegment(text=buffer))
    return segments
