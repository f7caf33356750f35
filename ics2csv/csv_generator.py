"""
CSV generator for converted calendar events.
Serializes Event records into CSV text with the fixed column schema, and
reads that text back for round-trip checks.
"""

import csv
import io
from typing import Iterable, List, Optional

from ics2csv.event_models import CSV_COLUMNS, Event

CSV_HEADERS = [header for header, _ in CSV_COLUMNS]


def escape_csv_field(value: Optional[str]) -> str:
    """
    Escape a single value for CSV output.
    Values containing a comma, double quote, CR or LF are wrapped in double
    quotes with inner quotes doubled; all other values are left as they are.

    Args:
        value: Field text (None is treated as empty)

    Returns:
        Field text safe to join with commas
    """
    if value is None:
        return ""

    text = str(value)
    if any(ch in text for ch in (',', '"', '\n', '\r')):
        return '"' + text.replace('"', '""') + '"'
    return text


def events_to_csv(events: Iterable[Event]) -> str:
    """
    Build CSV text for a sequence of events.

    Args:
        events: Events in the order they should appear

    Returns:
        Header row followed by one row per event, joined with newlines
        (no trailing newline)
    """
    csv_lines = [','.join(CSV_HEADERS)]
    for event in events:
        csv_lines.append(','.join(escape_csv_field(value) for value in event.as_row()))
    return '\n'.join(csv_lines)


def csv_to_events(text: str) -> List[Event]:
    """
    Read CSV text written by events_to_csv back into events.

    Raises:
        ValueError: If the header row does not match the event columns
    """
    reader = csv.reader(io.StringIO(text.lstrip('\ufeff'), newline=''))
    header = next(reader, None)
    if header != CSV_HEADERS:
        raise ValueError(f"Unexpected CSV header: {header}")

    events = []
    for row in reader:
        if not row:
            continue
        if len(row) != len(CSV_COLUMNS):
            raise ValueError(f"Expected {len(CSV_COLUMNS)} fields, got {len(row)}: {row}")
        events.append(Event(**{name: value for (_, name), value in zip(CSV_COLUMNS, row)}))
    return events
