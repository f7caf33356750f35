"""Unit tests for CSV serialization."""

import pytest

from ics2csv.csv_generator import CSV_HEADERS, csv_to_events, escape_csv_field, events_to_csv
from ics2csv.event_models import Event
from ics2csv.ics_parser import parse_calendar

HEADER_LINE = "Title,Start Date,End Date,Description,Location,Organizer,Status,UID,Created,Last Modified"


@pytest.mark.parametrize("value, expected", [
    ("Standup", "Standup"),
    ("", ""),
    (None, ""),
    ("Lunch, with Bob", '"Lunch, with Bob"'),
    ('Say "hi"', '"Say ""hi"""'),
    ("line one\nline two", '"line one\nline two"'),
    ("carriage\rreturn", '"carriage\rreturn"'),
    ("semi;colon and 'single'", "semi;colon and 'single'"),
])
def test_escape_csv_field(value, expected):
    assert escape_csv_field(value) == expected


def test_header_only_for_no_events():
    assert events_to_csv([]) == HEADER_LINE


def test_header_matches_column_schema():
    assert ",".join(CSV_HEADERS) == HEADER_LINE


def test_rows_follow_input_order():
    events = [Event(summary="B"), Event(summary="A"), Event(summary="C")]
    rows = events_to_csv(events).split("\n")[1:]
    assert [row.split(",")[0] for row in rows] == ["B", "A", "C"]


def test_row_field_order():
    event = Event(
        summary="Title", dtstart="s", dtend="e", description="d", location="l",
        organizer="o", status="st", uid="u", created="c", last_modified="lm",
    )
    assert events_to_csv([event]).split("\n")[1] == "Title,s,e,d,l,o,st,u,c,lm"


def test_no_trailing_newline():
    assert not events_to_csv([Event(summary="x")]).endswith("\n")


def test_sample_calendar_to_csv(sample_ics):
    csv_text = events_to_csv(parse_calendar(sample_ics))
    lines = csv_text.split("\n")

    assert len(lines) == 3
    assert lines[0] == HEADER_LINE
    assert lines[1] == "Company Holiday,2024-01-15,2024-01-16,,,,,holiday-1@example.com,,"
    assert lines[1].split(",")[1] == "2024-01-15"
    assert lines[2] == (
        '"Lunch, with Bob",2024-01-16 09:30:00,2024-01-16 10:30:00,'
        '"Meeting, with team follow up","Cafe ""Blue""",alice@example.com,'
        "CONFIRMED,lunch-2@example.com,2023-12-01 12:00:00,2023-12-02 08:09:10"
    )


class TestCsvToEvents:

    def test_reads_back_written_events(self, sample_ics):
        events = parse_calendar(sample_ics)
        assert csv_to_events(events_to_csv(events)) == events

    def test_quoted_line_breaks_survive(self):
        events = [Event(summary='Two\nlines, "quoted"', location="Room\r\n4")]
        assert csv_to_events(events_to_csv(events)) == events

    def test_byte_order_mark_is_skipped(self):
        text = "\ufeff" + events_to_csv([Event(uid="1")])
        assert csv_to_events(text) == [Event(uid="1")]

    def test_rejects_foreign_header(self):
        with pytest.raises(ValueError, match="Unexpected CSV header"):
            csv_to_events("Subject,Start\nx,y")

    def test_rejects_short_rows(self):
        with pytest.raises(ValueError, match="Expected 10 fields"):
            csv_to_events(HEADER_LINE + "\nonly,three,fields")
