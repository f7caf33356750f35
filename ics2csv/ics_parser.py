"""
ICS (iCalendar) parser for the VEVENT subset used by the CSV export.

Parses the text of a calendar document into Event records. The parser is
best-effort: malformed lines, unknown properties and unterminated blocks are
skipped, and nothing here raises for bad calendar content.
"""

import re
from typing import Callable, Dict, List, Optional, Tuple

from ics2csv.event_models import Event

_LINE_BREAK = re.compile(r'\r?\n')
_MAILTO = re.compile(r'mailto:([^;]+)', re.IGNORECASE)


def unfold_lines(document: str) -> List[str]:
    """
    Split a calendar document into logical lines.

    Continuation lines (starting with a space or tab) are joined onto the
    line before them with their first character removed, then every logical
    line is trimmed.

    Args:
        document: Full calendar text, CRLF or LF line endings

    Returns:
        List of unfolded, trimmed lines
    """
    physical = _LINE_BREAK.split(document)
    logical = []
    i = 0
    while i < len(physical):
        line = physical[i]
        while i + 1 < len(physical) and physical[i + 1].startswith((' ', '\t')):
            i += 1
            line += physical[i][1:]
        logical.append(line.strip())
        i += 1
    return logical


def format_datetime(value: str) -> str:
    """
    Reformat an iCalendar date or date-time as readable text.

    20240115T093000Z becomes 2024-01-15 09:30:00 and 20240115 becomes
    2024-01-15. The digits are kept as written; no time zone is applied.
    Anything else is returned unchanged.
    """
    if not value:
        return ""

    if 'T' in value:
        digits = value.replace('T', '').replace('Z', '')
        if len(digits) >= 8:
            year, month, day = digits[0:4], digits[4:6], digits[6:8]
            hour = digits[8:10] or "00"
            minute = digits[10:12] or "00"
            second = digits[12:14] or "00"
            return f"{year}-{month}-{day} {hour}:{minute}:{second}"
    elif len(value) == 8:
        return f"{value[0:4]}-{value[4:6]}-{value[6:8]}"

    return value


def unescape_description(value: str) -> str:
    """Flatten DESCRIPTION escapes: \\n to a space, \\, to a comma, \\\\ to a backslash."""
    # Order matters: the backslash rule runs last
    return value.replace('\\n', ' ').replace('\\,', ',').replace('\\\\', '\\')


def extract_organizer(value: str) -> str:
    """Return the mailto: address from an ORGANIZER value, or the value itself."""
    match = _MAILTO.search(value)
    return match.group(1) if match else value


def _verbatim(value: str) -> str:
    return value


# Property name -> (Event attribute, value normalizer)
_PROPERTY_FIELDS: Dict[str, Tuple[str, Callable[[str], str]]] = {
    'SUMMARY': ('summary', _verbatim),
    'DTSTART': ('dtstart', format_datetime),
    'DTEND': ('dtend', format_datetime),
    'DESCRIPTION': ('description', unescape_description),
    'LOCATION': ('location', _verbatim),
    'ORGANIZER': ('organizer', extract_organizer),
    'STATUS': ('status', _verbatim),
    'UID': ('uid', _verbatim),
    'CREATED': ('created', format_datetime),
    'LAST-MODIFIED': ('last_modified', format_datetime),
}


def _apply_property(event: Event, line: str):
    """Set the Event field named by a NAME[;PARAMS]:VALUE line, if it is one we export."""
    name, value = line.split(':', 1)
    # Parameters such as TZID are dropped
    base_name = name.upper().split(';', 1)[0]
    target = _PROPERTY_FIELDS.get(base_name)
    if target is None:
        return
    attribute, normalize = target
    setattr(event, attribute, normalize(value))


def parse_calendar(document: str) -> List[Event]:
    """
    Parse the VEVENT blocks of a calendar document.

    Args:
        document: Decoded text of an .ics file

    Returns:
        Events in document order; empty if the document has no complete
        VEVENT block
    """
    events: List[Event] = []
    current: Optional[Event] = None

    for line in unfold_lines(document):
        if line == 'BEGIN:VEVENT':
            # A second BEGIN before END replaces the unfinished event
            current = Event()
        elif line == 'END:VEVENT':
            if current is not None:
                events.append(current)
                current = None
        elif current is not None and ':' in line:
            _apply_property(current, line)

    return events
