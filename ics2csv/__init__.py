"""
ics2csv - convert iCalendar (.ics) events into CSV.

parse_calendar() turns calendar text into Event records and
events_to_csv() turns those records into CSV text.
"""

from ics2csv.csv_generator import escape_csv_field, events_to_csv
from ics2csv.event_models import CSV_COLUMNS, Event
from ics2csv.ics_parser import format_datetime, parse_calendar

__all__ = [
    'CSV_COLUMNS',
    'Event',
    'escape_csv_field',
    'events_to_csv',
    'format_datetime',
    'parse_calendar',
]
