"""Shared fixtures for ics2csv tests."""

import pytest

from ics2csv import settings_manager
from ics2csv.logging_helper import Log

# Two events the way Google Calendar exports them: one all-day, one timed in UTC
SAMPLE_ICS = (
    "BEGIN:VCALENDAR\r\n"
    "VERSION:2.0\r\n"
    "PRODID:-//Google Inc//Google Calendar 70.9054//EN\r\n"
    "BEGIN:VEVENT\r\n"
    "DTSTART;VALUE=DATE:20240115\r\n"
    "DTEND;VALUE=DATE:20240116\r\n"
    "SUMMARY:Company Holiday\r\n"
    "UID:holiday-1@example.com\r\n"
    "END:VEVENT\r\n"
    "BEGIN:VEVENT\r\n"
    "DTSTART:20240116T093000Z\r\n"
    "DTEND:20240116T103000Z\r\n"
    "SUMMARY:Lunch, with Bob\r\n"
    "DESCRIPTION:Meeting\\, with team\\nfollow up\r\n"
    "LOCATION:Cafe \"Blue\"\r\n"
    "ORGANIZER;CN=Alice:MAILTO:alice@example.com\r\n"
    "STATUS:CONFIRMED\r\n"
    "UID:lunch-2@example.com\r\n"
    "CREATED:20231201T120000Z\r\n"
    "LAST-MODIFIED:20231202T080910Z\r\n"
    "END:VEVENT\r\n"
    "END:VCALENDAR\r\n"
)

EMPTY_ICS = (
    "BEGIN:VCALENDAR\r\n"
    "VERSION:2.0\r\n"
    "END:VCALENDAR\r\n"
)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep logs and settings out of the real home directory."""
    Log.set_log_dir(tmp_path / "logs")
    monkeypatch.setattr(settings_manager, "SETTINGS_FILE", tmp_path / "config" / "settings.json")
    yield
    Log.use_stderr(False)
    Log.set_log_dir(tmp_path / "logs")


@pytest.fixture
def sample_ics():
    return SAMPLE_ICS


@pytest.fixture
def ics_file(tmp_path):
    path = tmp_path / "Work.ics"
    path.write_text(SAMPLE_ICS, encoding="utf-8")
    return path


@pytest.fixture
def empty_ics_file(tmp_path):
    path = tmp_path / "empty.ics"
    path.write_text(EMPTY_ICS, encoding="utf-8")
    return path
