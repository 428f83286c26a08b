"""
Milestone Scheduler - Fallback Policies

Named coercion helpers behind the "never throw, always degrade" rule.
Every date, number or id that reaches the engine from outside passes
through one of these.

Author: Timeline Team
"""

import logging
import re
from datetime import date, datetime, timedelta
from typing import Any, Callable, Optional

import dateparser

logger = logging.getLogger(__name__)


DATEPARSER_SETTINGS = {
    "STRICT_PARSING": True,
    "PREFER_DAY_OF_MONTH": "first",
    "RETURN_AS_TIMEZONE_AWARE": False,
}
DATEPARSER_LANGUAGES = ["en"]

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a date-like value, returning None when it cannot be understood.

    Accepts date/datetime instances, ISO-8601 strings and the free-form
    formats dateparser understands ("Jan 5, 2025", "05 January 2025").
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    try:
        parsed = dateparser.parse(
            text,
            languages=DATEPARSER_LANGUAGES,
            settings=DATEPARSER_SETTINGS,
        )
    except Exception as e:
        logger.debug(f"dateparser failed on {text!r}: {e}")
        return None

    return parsed.date() if parsed else None


def date_or_default(
    value: Any,
    default: Optional[date] = None,
    today: Callable[[], date] = date.today,
) -> date:
    """Parse `value`; fall back to `default`, then to today."""
    parsed = parse_date(value)
    if parsed is not None:
        return parsed
    if default is not None:
        return default
    return today()


def int_or_default(value: Any, default: int) -> int:
    """
    Coerce to int the way an edit form would ("12", 12.0, " 7 ").

    Booleans, blanks and anything non-numeric yield `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return default
        return int(value)
    if isinstance(value, str):
        match = re.match(r"^\s*([+-]?\d+)", value)
        if match:
            return int(match.group(1))
    return default


def clamp(value: float, lower: float, upper: Optional[float] = None) -> float:
    if value < lower:
        return lower
    if upper is not None and value > upper:
        return upper
    return value


def clamp_percent(value: float) -> float:
    return float(clamp(value, 0.0, 100.0))


def sanitize_id_part(value: Any) -> str:
    """Strip every non-alphanumeric character from an id fragment."""
    if value is None:
        return ""
    return _NON_ALNUM.sub("", str(value))


def days_until_max(start: date) -> int:
    """Largest day count that can still be added to `start`."""
    return (date.max - start).days


def add_days(start: date, days: int) -> date:
    """`start + days`, saturating at date.min / date.max instead of overflowing."""
    try:
        return start + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def field_of(item: Any, name: str, default: Any = None) -> Any:
    """
    Read a field from a model or a plain mapping.

    Persisted records may use camelCase keys (isExpanded, contractDate);
    those are accepted when the snake_case name is absent.
    """
    camel = _camel_case(name)
    if isinstance(item, dict):
        if name in item:
            return item[name]
        return item.get(camel, default)
    if hasattr(item, name):
        return getattr(item, name)
    return getattr(item, camel, default)
