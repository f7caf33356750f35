"""
Plain-text preview of converted events for the terminal.
"""

from typing import List, Sequence

from ics2csv.event_models import Event

PREVIEW_COLUMNS = (
    ("Title", "summary"),
    ("Start Date", "dtstart"),
    ("End Date", "dtend"),
    ("Location", "location"),
)
MAX_CELL_WIDTH = 40


def _cell(value: str) -> str:
    # Keep each row on one line
    value = " ".join(value.split())
    if len(value) > MAX_CELL_WIDTH:
        return value[:MAX_CELL_WIDTH - 3] + "..."
    return value


def render_preview(events: Sequence[Event], limit: int = 5) -> str:
    """
    Render a titled table of the first few events.

    Args:
        events: Converted events
        limit: Maximum number of events to show

    Returns:
        Multi-line preview text
    """
    count = len(events)
    lines: List[str] = [f"Found {count} event{'s' if count != 1 else ''}"]
    shown = events[:max(limit, 0)]
    if not shown:
        return lines[0]

    rows = [[header for header, _ in PREVIEW_COLUMNS]]
    for event in shown:
        if event.is_empty():
            rows.append(["(empty event)"] + [""] * (len(PREVIEW_COLUMNS) - 1))
        else:
            rows.append([_cell(getattr(event, name)) for _, name in PREVIEW_COLUMNS])

    widths = [max(len(row[i]) for row in rows) for i in range(len(PREVIEW_COLUMNS))]
    for index, row in enumerate(rows):
        lines.append("  ".join(text.ljust(width) for text, width in zip(row, widths)).rstrip())
        if index == 0:
            lines.append("  ".join("-" * width for width in widths))

    if count > len(shown):
        lines.append(f"... and {count - len(shown)} more")
    return "\n".join(lines)
