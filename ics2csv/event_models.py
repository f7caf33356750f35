"""
Event data models for calendar-to-table conversion.
Defines Event (one VEVENT block) and the CSV column schema.
"""

from dataclasses import dataclass, fields
from typing import List, Tuple

# (CSV header, Event attribute) in output order
CSV_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("Title", "summary"),
    ("Start Date", "dtstart"),
    ("End Date", "dtend"),
    ("Description", "description"),
    ("Location", "location"),
    ("Organizer", "organizer"),
    ("Status", "status"),
    ("UID", "uid"),
    ("Created", "created"),
    ("Last Modified", "last_modified"),
)


@dataclass
class Event:
    """
    One calendar event read from a VEVENT block.
    Every field is a string; properties missing from the block stay empty.
    """
    summary: str = ""
    dtstart: str = ""  # YYYY-MM-DD or YYYY-MM-DD HH:MM:SS
    dtend: str = ""
    description: str = ""
    location: str = ""
    organizer: str = ""  # Email address when the value carried mailto:
    status: str = ""
    uid: str = ""
    created: str = ""
    last_modified: str = ""

    def as_row(self) -> List[str]:
        """Field values in CSV column order."""
        return [getattr(self, name) for _, name in CSV_COLUMNS]

    def is_empty(self) -> bool:
        """Check if no field was filled in."""
        return all(getattr(self, f.name) == "" for f in fields(self))
