from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta

import dateparser

from ..schemas import ParsedInput

logger = logging.getLogger(__name__)

DELIMITER = "@"

# Explicit clock time: "7pm", "09:30", "21:00", "9:15 am"
TIME_PAT = re.compile(r"(\d{1,2})(?::(\d{2}))?\s*(am|pm)?\b")

# Checked in insertion order; the first alias found in the phrase wins.
WEEKDAY_ALIASES = {
    "sun": 6,
    "sunday": 6,
    "mon": 0,
    "monday": 0,
    "tue": 1,
    "tues": 1,
    "tuesday": 1,
    "wed": 2,
    "weds": 2,
    "wednesday": 2,
    "thu": 3,
    "thur": 3,
    "thurs": 3,
    "thursday": 3,
    "fri": 4,
    "friday": 4,
    "sat": 5,
    "saturday": 5,
}

DEFAULT_HOUR = 9

# Only full calendar dates count as a direct literal, never bare times or
# relative phrases.
LITERAL_SETTINGS = {
    "PARSERS": ["absolute-time"],
    "REQUIRE_PARTS": ["day", "month", "year"],
    "STRICT_PARSING": True,
    "DATE_ORDER": "MDY",
    "RETURN_AS_TIMEZONE_AWARE": False,
}


def _next_weekday(now: datetime, target: int) -> datetime:
    diff = target - now.weekday()
    if diff <= 0:
        diff += 7
    return now + timedelta(days=diff)


def _weekday_base(lower: str, now: datetime) -> datetime | None:
    for alias, target in WEEKDAY_ALIASES.items():
        if alias in lower:
            return _next_weekday(now, target)
    return None


# (predicate, effect) pairs for the base day; first match wins.
BASE_DAY_RULES = [
    (lambda s: "tomorrow" in s or "tmrw" in s, lambda now: now + timedelta(days=1)),
    (lambda s: "today" in s, lambda now: now),
    (lambda s: "next week" in s, lambda now: now + timedelta(days=7)),
]

# (predicate, hour) pairs for the time of day; first match wins.
TIME_OF_DAY_RULES = [
    (lambda s: "morning" in s, 9),
    (lambda s: "afternoon" in s, 14),
    (lambda s: "evening" in s or "tonight" in s, 19),
]


def segment(raw: str, delimiter: str = DELIMITER) -> list[str]:
    """Split on the delimiter, dropping segments that are blank once trimmed."""
    return [part.strip() for part in raw.split(delimiter) if part.strip()]


def extract_tags(text: str) -> tuple[str, list[str]]:
    """
    Pull '#tag' tokens out of text.
    'Pasadena #errands #night' -> ('Pasadena', ['errands', 'night'])
    A lone '#' is not a tag and stays in the residual text.
    """
    tags: list[str] = []
    kept: list[str] = []
    for word in text.split():
        if word.startswith("#") and len(word) > 1:
            tags.append(word[1:])
        else:
            kept.append(word)
    return " ".join(kept).strip(), tags


def _parse_literal(phrase: str, now: datetime) -> datetime | None:
    try:
        dt = datetime.fromisoformat(phrase)
    except ValueError:
        dt = None

    if dt is None:
        try:
            dt = dateparser.parse(phrase, languages=["en"], settings=LITERAL_SETTINGS)
        except (ValueError, TypeError, OverflowError) as exc:
            logger.debug("Literal date parse failed for %r: %s", phrase, exc)
            dt = None

    if dt is not None and dt.tzinfo is None and now.tzinfo is not None:
        dt = dt.replace(tzinfo=now.tzinfo)
    return dt


def _base_day(lower: str, now: datetime) -> datetime:
    for matches, shift in BASE_DAY_RULES:
        if matches(lower):
            return shift(now)
    return _weekday_base(lower, now) or now


def _default_hour(lower: str) -> int:
    for matches, hour in TIME_OF_DAY_RULES:
        if matches(lower):
            return hour
    return DEFAULT_HOUR


def _clock_time(lower: str, default_hour: int) -> tuple[int, int]:
    m = TIME_PAT.search(lower)
    if not m:
        return default_hour, 0

    hour = int(m.group(1))
    minute = int(m.group(2)) if m.group(2) else 0
    meridiem = m.group(3)
    if meridiem == "pm" and hour < 12:
        hour += 12
    if meridiem == "am" and hour == 12:
        hour = 0
    return hour, minute


def resolve_when(phrase: str, now: datetime) -> datetime | None:
    """
    Turn a casual when-phrase into an absolute datetime relative to `now`:
    '7pm', 'tomorrow 9:30am', 'next monday 8am', 'saturday afternoon',
    '2025-12-25 10:00'. Returns None only for a blank phrase.
    """
    raw = phrase.strip()
    if not raw:
        return None

    direct = _parse_literal(raw, now)
    if direct is not None:
        return direct

    lower = raw.lower()
    base = _base_day(lower, now)
    hour, minute = _clock_time(lower, _default_hour(lower))

    # Added as a duration so out-of-range captures roll over instead of raising.
    midnight = base.replace(hour=0, minute=0, second=0, microsecond=0)
    due = midnight + timedelta(hours=hour, minutes=minute)

    # A time that already passed today means the next day.
    if due <= now and "tomorrow" not in lower and "next" not in lower:
        due += timedelta(days=1)

    return due


def parse_quick_input(raw: str, now: datetime | None = None) -> ParsedInput:
    """
    Quick-add grammar:
    - 'Title'
    - 'Title @ when'
    - 'Title @ when @ location/notes #tag1 #tag2'
    The rest after the when-phrase is rejoined with ' @ ' and scanned for tags.
    """
    trimmed = raw.strip()
    if not trimmed:
        return ParsedInput(title="")

    parts = segment(trimmed)
    if not parts:
        # Nothing but delimiters
        return ParsedInput(title="")
    if len(parts) == 1:
        return ParsedInput(title=parts[0])

    now = now or datetime.now()
    title, when_part = parts[0], parts[1]
    due_at = resolve_when(when_part, now)

    if len(parts) == 2:
        return ParsedInput(title=title, due_at=due_at)

    rest = f" {DELIMITER} ".join(parts[2:]).strip()
    text, tags = extract_tags(rest)

    fields = {
        "title": title,
        "due_at": due_at,
        "location": text or None,
        "description": text or None,
    }
    if tags:
        fields["tags"] = tags
    return ParsedInput(**fields)
