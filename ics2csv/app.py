"""
Command-line entry point for ics2csv.
Converts an .ics file or calendar feed URL into a CSV file.
"""

import argparse
import sys
from pathlib import Path

from ics2csv.converter import (
    ConversionError,
    convert_source,
    convert_text,
    copy_to_clipboard,
    read_source,
)
from ics2csv.logging_helper import Log
from ics2csv.preview import render_preview
from ics2csv.settings_manager import load_settings, update_settings


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="ics2csv",
        description="Convert iCalendar (.ics) events to CSV"
    )
    parser.add_argument(
        "source",
        help="Path to an .ics file, or an http(s) URL of a calendar feed"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="CSV file to write (default: input name with .csv)"
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the CSV to stdout instead of writing a file"
    )
    parser.add_argument(
        "--copy",
        action="store_true",
        help="Also copy the CSV to the clipboard"
    )
    parser.add_argument(
        "--preview",
        type=int,
        metavar="N",
        help="Number of events to preview (0 to disable)"
    )
    parser.add_argument(
        "--no-bom",
        action="store_true",
        help="Write the CSV file without a UTF-8 byte-order mark"
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Remember --preview and --no-bom as defaults"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Keep stdout clean when it carries the CSV
    Log.use_stderr(args.stdout)

    settings = load_settings()
    preview_rows = args.preview if args.preview is not None else settings["preview_rows"]
    write_bom = settings["write_bom"] and not args.no_bom
    output_dir = Path(settings["output_dir"]).expanduser() if settings["output_dir"] else None

    if args.save:
        try:
            update_settings(preview_rows=preview_rows, write_bom=write_bom)
        except ValueError as e:
            Log.error(str(e))
            return 1

    if args.debug:
        Log.info(f"Log file: {Log.get_log_path()}")
        Log.kv({"preview_rows": preview_rows, "write_bom": write_bom, "output_dir": output_dir})

    try:
        if args.stdout:
            text, source_name = read_source(args.source)
            result = convert_text(text, source_name)
        else:
            result = convert_source(args.source, args.output, bom=write_bom, output_dir=output_dir)
    except ConversionError as e:
        Log.error(str(e))
        Log.kv({"stage": "convert", "result": "failed", "error": type(e).__name__})
        return 1

    if preview_rows > 0:
        print(render_preview(result.events, preview_rows), file=sys.stderr if args.stdout else sys.stdout)

    if args.stdout:
        sys.stdout.write(result.csv_text + "\n")

    if args.copy:
        copy_to_clipboard(result.csv_text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
