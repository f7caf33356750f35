"""
Converter for turning .ics files and calendar feeds into CSV files.
Handles acquiring the calendar text, running the parser and serializer, and
delivering the CSV to a file or the clipboard.
"""

import re
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import unquote, urlparse

import requests

from ics2csv.csv_generator import events_to_csv
from ics2csv.event_models import Event
from ics2csv.ics_parser import parse_calendar
from ics2csv.logging_helper import Log

DEFAULT_CSV_FILENAME = "calendar_events.csv"
FETCH_TIMEOUT_SECONDS = 30
USER_AGENT = "ics2csv/1.0"

_ICS_SUFFIX = re.compile(r'\.ics$', re.IGNORECASE)


class ConversionError(Exception):
    """Base error for anything that stops a conversion."""


class InvalidFileError(ConversionError):
    """The input is not a readable .ics file."""


class FetchError(ConversionError):
    """A calendar feed could not be downloaded."""


class NoEventsFoundError(ConversionError):
    """The calendar text contained no complete events."""

    def __init__(self, message: str = "No events found in the ICS file"):
        super().__init__(message)


@dataclass
class ConversionResult:
    """Events and CSV text produced from one calendar source."""
    events: List[Event]
    csv_text: str
    source_name: str = ""
    output_path: Optional[Path] = field(default=None)


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def csv_filename_for(source_name: Optional[str]) -> str:
    """
    Suggest a CSV filename for a calendar source.

    Args:
        source_name: Original file name (e.g. 'Work.ICS'), or None

    Returns:
        Name with the .ics suffix swapped for .csv, or the fallback name
    """
    if not source_name:
        return DEFAULT_CSV_FILENAME
    if _ICS_SUFFIX.search(source_name):
        return _ICS_SUFFIX.sub('.csv', source_name)
    return f"{source_name}.csv"


def load_ics_file(path) -> str:
    """
    Read a local .ics file as UTF-8 text.

    Raises:
        InvalidFileError: If the name does not end in .ics or it cannot be read
    """
    path = Path(path)
    if not path.name.lower().endswith('.ics'):
        raise InvalidFileError(f"Please select a valid ICS file: {path.name}")

    try:
        # utf-8-sig drops a leading byte-order mark
        return path.read_text(encoding='utf-8-sig')
    except FileNotFoundError:
        raise InvalidFileError(f"ICS file not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidFileError(f"Error reading ICS file {path}: {e}")


def fetch_ics_url(url: str, timeout: int = FETCH_TIMEOUT_SECONDS) -> str:
    """
    Download a calendar feed.

    Args:
        url: http(s) URL of the feed
        timeout: Request timeout in seconds

    Returns:
        Calendar text decoded as UTF-8

    Raises:
        FetchError: On any network or HTTP error
    """
    try:
        response = requests.get(
            url,
            timeout=timeout,
            headers={
                'User-Agent': USER_AGENT,
                'Accept': 'text/calendar'
            }
        )
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Network error fetching {url}: {e}")

    # Feeds often omit the charset
    response.encoding = 'utf-8'
    return response.text


def read_source(source: str) -> Tuple[str, str]:
    """
    Acquire calendar text from a file path or URL.

    Returns:
        (calendar text, source file name)
    """
    if is_url(source):
        name = unquote(Path(urlparse(source).path).name)
        Log.info(f"Fetching calendar feed: {source}")
        text = fetch_ics_url(source)
    else:
        name = Path(source).name
        Log.info(f"Reading calendar file: {source}")
        text = load_ics_file(source)
    Log.kv({"stage": "read", "source": name or source, "chars": len(text)})
    return text, name


def convert_text(text: str, source_name: str = "") -> ConversionResult:
    """
    Parse calendar text and serialize the events as CSV.

    Raises:
        NoEventsFoundError: If no VEVENT block was found
    """
    events = parse_calendar(text)
    if not events:
        raise NoEventsFoundError()

    csv_text = events_to_csv(events)
    Log.kv({"stage": "convert", "events": len(events), "csv_chars": len(csv_text)})
    return ConversionResult(events=events, csv_text=csv_text, source_name=source_name)


def write_csv(csv_text: str, path, bom: bool = True) -> Path:
    """
    Write CSV text to disk as UTF-8.

    Args:
        csv_text: Output of events_to_csv
        path: Destination file
        bom: Prefix a byte-order mark so spreadsheet apps detect UTF-8

    Returns:
        Path written
    """
    path = Path(path)
    content = ('\ufeff' + csv_text) if bom else csv_text
    # newline='' keeps the \n row separators as-is on every platform
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    Log.info(f"CSV file written: {path}")
    return path


def _clipboard_command() -> Optional[List[str]]:
    """Find a clipboard tool for this platform."""
    if sys.platform == 'darwin':
        candidates = [['pbcopy']]
    elif sys.platform.startswith('win'):
        candidates = [['clip']]
    else:
        candidates = [
            ['wl-copy'],
            ['xclip', '-selection', 'clipboard'],
            ['xsel', '--clipboard', '--input'],
        ]
    for command in candidates:
        if shutil.which(command[0]):
            return command
    return None


def copy_to_clipboard(text: str) -> bool:
    """
    Copy text to the system clipboard.

    Returns:
        True if copied, False if no clipboard tool worked
    """
    command = _clipboard_command()
    if command is None:
        Log.warn("No clipboard tool found (pbcopy, wl-copy, xclip, xsel or clip)")
        return False

    try:
        subprocess.run(command, input=text.encode('utf-8'), check=True, timeout=10)
    except (OSError, subprocess.SubprocessError) as e:
        Log.warn(f"Failed to copy to clipboard with {command[0]}: {e}")
        return False

    Log.info(f"Copied {len(text)} characters to clipboard")
    Log.kv({"stage": "clipboard", "result": "success", "tool": command[0]})
    return True


def default_output_path(source: str, source_name: str, output_dir: Optional[Path] = None) -> Path:
    """Place the CSV in output_dir, next to a local input file, or in the working directory."""
    filename = csv_filename_for(source_name)
    if output_dir is not None:
        return Path(output_dir) / filename
    if not is_url(source):
        return Path(source).parent / filename
    return Path(filename)


def convert_source(
    source: str,
    output=None,
    bom: bool = True,
    output_dir: Optional[Path] = None
) -> ConversionResult:
    """
    Convert a calendar file or feed to a CSV file.

    Args:
        source: Path to an .ics file or an http(s) URL
        output: Destination CSV path (default: derived from the source name)
        bom: Write a UTF-8 byte-order mark
        output_dir: Directory for the derived destination

    Returns:
        ConversionResult with output_path set

    Raises:
        ConversionError: If the source cannot be read or has no events
    """
    Log.section("ICS to CSV")
    text, source_name = read_source(source)
    result = convert_text(text, source_name)

    destination = Path(output) if output else default_output_path(source, source_name, output_dir)
    try:
        result.output_path = write_csv(result.csv_text, destination, bom=bom)
    except OSError as e:
        raise ConversionError(f"Failed to write CSV file {destination}: {e}")

    Log.kv({
        "stage": "write",
        "result": "success",
        "events": len(result.events),
        "csv_path": str(result.output_path)
    })
    return result
