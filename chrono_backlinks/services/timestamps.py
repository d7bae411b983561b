"""Timestamp resolution for backlink labels.

A label resolves to milliseconds since the epoch through a fixed chain; the
first stage that produces a value wins:

1. the whole label is a long-form date ("December 4th, 2025")
2. the label embeds a bracketed long-form date ("# [[August 12th, 2025]] call")
3. the whole label is an ISO date ("2025-12-04")
4. the note's frontmatter ``edited`` then ``created`` field (YYYY-MM-DD)
5. the note's modification time
6. the modification time of the same name under the daily notes folder
7. 0, meaning unknown

Dates resolve to local midnight. Malformed or impossible dates (e.g.
"February 30th, 2025") decline to the next stage; nothing here raises.
"""

import logging
import re
from datetime import datetime
from typing import Callable, Optional

from ..config import settings
from ..models.common import MetadataRecord, Resolution, TimestampSource

logger = logging.getLogger(__name__)

MetadataLookup = Callable[[str], Optional[MetadataRecord]]

UNKNOWN_TIMESTAMP = 0

MONTHS = {
    "January": 1, "February": 2, "March": 3, "April": 4,
    "May": 5, "June": 6, "July": 7, "August": 8,
    "September": 9, "October": 10, "November": 11, "December": 12,
}

_MONTH_NAMES = "|".join(MONTHS)
_LONG_FORM = rf"({_MONTH_NAMES})\s+(\d+)(?:st|nd|rd|th),\s+(\d{{4}})"

LONG_FORM_RE = re.compile(_LONG_FORM, re.ASCII)
EMBEDDED_LONG_FORM_RE = re.compile(rf"\[\[{_LONG_FORM}\]\]", re.ASCII)
ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
MONTH_HINT_RE = re.compile(_MONTH_NAMES, re.IGNORECASE)

FRONTMATTER_FIELDS = (
    ("edited", TimestampSource.FRONTMATTER_EDITED),
    ("created", TimestampSource.FRONTMATTER_CREATED),
)


def resolve_timestamp(
    label: str,
    lookup: Optional[MetadataLookup] = None,
    debug: Optional[bool] = None,
) -> int:
    """Resolve a label to a timestamp in ms; 0 when nothing is known."""
    return explain_timestamp(label, lookup, debug).timestamp


def explain_timestamp(
    label: str,
    lookup: Optional[MetadataLookup] = None,
    debug: Optional[bool] = None,
) -> Resolution:
    """Resolve a label and report which stage produced the timestamp."""
    if debug is None:
        debug = settings.debug_mode
    label = label or ""

    ts = parse_long_form_date(label)
    if ts is not None:
        return _resolved(label, ts, TimestampSource.LONG_FORM, debug)

    ts = parse_embedded_long_form_date(label)
    if ts is not None:
        return _resolved(label, ts, TimestampSource.EMBEDDED_LONG_FORM, debug)

    if debug and MONTH_HINT_RE.search(label):
        logger.debug(f'Long-form date regex failed for "{label}" (looks like a date but didn\'t match)')

    ts = parse_iso_date(label)
    if ts is not None:
        return _resolved(label, ts, TimestampSource.ISO, debug)

    if label and lookup is not None:
        record = _lookup_note(label, lookup)
        if debug:
            logger.debug(
                f'Note lookup for "{label}": '
                f"found={record is not None} path={record.path if record else None}"
            )

        if record is not None:
            found = frontmatter_timestamp(record, debug=debug)
            if found is not None:
                ts, source = found
                return _resolved(label, ts, source, debug)
            return _resolved(label, record.mtime, TimestampSource.MODIFIED, debug)

        daily = _safe_lookup(lookup, f"{settings.daily_notes_folder}/{label}{settings.note_suffix}")
        if daily is not None:
            return _resolved(label, daily.mtime, TimestampSource.DAILY_NOTE_MODIFIED, debug)

    if debug:
        logger.debug(f'No timestamp found for "{label}", using 0')
    return Resolution(label=label)


def parse_long_form_date(text: str) -> Optional[int]:
    """"December 4th, 2025" -> ms. The whole string must be the date."""
    m = LONG_FORM_RE.fullmatch(text)
    if not m:
        return None
    return _long_form_to_ms(m)


def parse_embedded_long_form_date(text: str) -> Optional[int]:
    """First "[[December 4th, 2025]]" anywhere in the text -> ms."""
    m = EMBEDDED_LONG_FORM_RE.search(text)
    if not m:
        return None
    return _long_form_to_ms(m)


def parse_iso_date(text: str) -> Optional[int]:
    """"2025-12-04" -> ms. The whole string must be the date."""
    m = ISO_DATE_RE.fullmatch(text)
    if not m:
        return None
    year, month, day = (int(g) for g in m.groups())
    return date_to_ms(year, month, day)


def frontmatter_timestamp(
    record: MetadataRecord,
    debug: bool = False,
) -> Optional[tuple[int, TimestampSource]]:
    """Timestamp from the ``edited`` field, else ``created``."""
    fm = record.frontmatter
    if debug:
        logger.debug(f'Frontmatter for "{record.path}": {fm!r}')
    if not fm:
        return None

    for field, source in FRONTMATTER_FIELDS:
        value = fm.get(field)
        if not value:
            continue
        ts = parse_iso_date(str(value).strip())
        if ts is not None:
            return ts, source
        if debug:
            logger.debug(f'Date format mismatch for "{record.path}" {field}: "{value}"')
    return None


def date_to_ms(year: int, month: int, day: int) -> Optional[int]:
    """Local midnight of a calendar date in ms, None if the date is impossible."""
    try:
        return int(datetime(year, month, day).timestamp() * 1000)
    except (ValueError, OverflowError, OSError):
        return None


def _long_form_to_ms(m: re.Match) -> Optional[int]:
    month_name, day, year = m.groups()
    return date_to_ms(int(year), MONTHS[month_name], int(day))


def _lookup_note(label: str, lookup: MetadataLookup) -> Optional[MetadataRecord]:
    record = _safe_lookup(lookup, label + settings.note_suffix)
    if record is None:
        record = _safe_lookup(lookup, label)
    return record


def _safe_lookup(lookup: MetadataLookup, ref: str) -> Optional[MetadataRecord]:
    try:
        return lookup(ref)
    except Exception as e:
        logger.warning(f'Metadata lookup failed for "{ref}": {e}')
        return None


def _resolved(label: str, ts: int, source: TimestampSource, debug: bool) -> Resolution:
    if debug:
        logger.debug(f'Resolved "{label}" via {source.value}: {format_timestamp(ts)}')
    return Resolution(label=label, timestamp=ts, source=source)


def format_timestamp(ts: int) -> str:
    """YYYY-MM-DD for a ms timestamp, "unknown" for the sentinel."""
    if ts == UNKNOWN_TIMESTAMP:
        return "unknown"
    try:
        return datetime.fromtimestamp(ts / 1000).strftime("%Y-%m-%d")
    except (ValueError, OverflowError, OSError):
        return str(ts)
