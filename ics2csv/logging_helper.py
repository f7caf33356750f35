"""
Logging helper module for terminal-first logging.
All output goes to the console with formatted prefixes, and also to a log file.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

# Log directory, overridable through the environment
_log_dir = Path(os.environ.get("ICS2CSV_LOG_DIR", Path.home() / ".ics2csv" / "logs"))
_log_file_path: Optional[Path] = None
_log_file: Optional[TextIO] = None

# Console goes to stderr when CSV is written to stdout
_use_stderr = False


def _open_log_file() -> Optional[TextIO]:
    """Open the timestamped log file on first use."""
    global _log_file, _log_file_path
    if _log_file is None:
        try:
            _log_dir.mkdir(parents=True, exist_ok=True)
            _log_file_path = _log_dir / f"ics2csv_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
            _log_file = open(_log_file_path, 'a', encoding='utf-8')
        except OSError as err:
            print(f"[WARN] Unable to open log file in {_log_dir}: {err}", file=sys.stderr)
            return None
    return _log_file


def _log(message: str):
    """Write message to both the console and log file."""
    print(message, file=sys.stderr if _use_stderr else sys.stdout)
    log_file = _open_log_file()
    if log_file is not None:
        log_file.write(message + '\n')
        log_file.flush()


class Log:
    """Simple logging class that outputs to the console and log file with formatted prefixes."""

    @staticmethod
    def section(title: str):
        """Print a section header: blank line + '===== TITLE ====='"""
        _log("")
        _log(f"===== {title} =====")

    @staticmethod
    def info(message: str):
        """Print an info message: '[INFO] message'"""
        _log(f"[INFO] {message}")

    @staticmethod
    def warn(message: str):
        """Print a warning message: '[WARN] message'"""
        _log(f"[WARN] {message}")

    @staticmethod
    def error(message: str):
        """Print an error message: '[ERROR] message'"""
        _log(f"[ERROR] {message}")

    @staticmethod
    def kv(pairs: dict):
        """
        Print key-value pairs: '[KV] key=value | key2=value2'

        Args:
            pairs: Dictionary of key-value pairs to print
        """
        kv_string = " | ".join([f"{k}={v}" for k, v in pairs.items()])
        _log(f"[KV] {kv_string}")

    @staticmethod
    def use_stderr(enabled: bool = True):
        """Send console output to stderr instead of stdout."""
        global _use_stderr
        _use_stderr = enabled

    @staticmethod
    def set_log_dir(path: Path):
        """Switch the log directory. The next message opens a new log file there."""
        global _log_dir, _log_file, _log_file_path
        if _log_file is not None:
            _log_file.close()
        _log_dir = Path(path)
        _log_file = None
        _log_file_path = None

    @staticmethod
    def get_log_path() -> str:
        """Get the path to the current log file."""
        _open_log_file()
        return str(_log_file_path)
