"""Timestamped logging to a size-limited log file with simple rotation."""

from __future__ import annotations

import inspect
import sys
from datetime import datetime
from enum import IntEnum
from pathlib import Path

MAX_LOG_SIZE = 10 * 1024
FUNCTION_COLUMN_WIDTH = 40


class LogType(IntEnum):
    """How a log line is decorated and whether it is echoed to stdout."""

    NORMAL = 0
    RUNNER = 1
    RUNNER_EXCEPT = 3


class Logger:
    """Writes messages to a log file and echoes them to stdout.

    When the log file grows past 10 KiB it is renamed to an ``until_*.log``
    file; once two or more of those exist, the oldest is renamed to ``.zip``.
    """

    _instance: Logger | None = None

    def __init__(self, filename: str | Path = "latest.log") -> None:
        self.path = Path(filename)
        self.log_type = LogType.NORMAL

    @classmethod
    def get_instance(cls) -> Logger:
        """Return the shared logger writing to ``latest.log``."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def print(self, function: str, msg: str) -> None:
        """Log ``msg`` as coming from ``function``."""
        now = datetime.now()
        text = self.format_message(now, function, msg)

        if self.path.is_file():
            self.check_file_size(now)
            log_files = self.find_until_files()
            if len(log_files) >= 2:
                self.archive_oldest(log_files)

        try:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(text)
        except OSError:
            pass

        if self.log_type != LogType.RUNNER_EXCEPT:
            sys.stdout.write(text)

    def find_until_files(self) -> list[Path]:
        """Return the rotated ``until_*.log`` files next to the log file."""
        directory = self.path.parent
        return sorted(
            entry
            for entry in directory.iterdir()
            if entry.is_file()
            and entry.name.startswith("until_")
            and entry.name.endswith(".log")
        )

    def check_file_size(self, now: datetime) -> Path | None:
        """Rotate the log file if it is too large; return the new path if rotated."""
        try:
            size = self.path.stat().st_size
        except OSError:
            return None
        if size <= MAX_LOG_SIZE:
            return None

        target = self.path.parent / self.new_file_name(now)
        try:
            self.path.rename(target)
        except OSError as exc:
            sys.stderr.write(f"Failed to rename {self.path} to {target}: {exc}\n")
            return None
        return target

    def set_log_type(self, log_type: int) -> None:
        self.log_type = LogType(log_type)

    def new_file_name(self, now: datetime) -> str:
        """Name for a rotated log file, stamped with ``now``."""
        return now.strftime("until_%y%m%d_%Hh_%Mm_%Ss.log")

    def format_message(self, now: datetime, function: str, msg: str) -> str:
        """Build the text of one log entry."""
        if self.log_type != LogType.NORMAL:
            return msg
        stamp = now.strftime("[%y.%m.%d %H:%M] ")
        full_function = f"{function}( )".ljust(FUNCTION_COLUMN_WIDTH)
        return f"{stamp}{full_function}: {msg}"

    def archive_oldest(self, log_files: list[Path]) -> Path | None:
        """Rename the least recently modified file to ``.zip``."""
        if not log_files:
            return None
        oldest = min(log_files, key=lambda entry: entry.stat().st_mtime)
        target = oldest.with_suffix(".zip")
        try:
            oldest.rename(target)
        except OSError as exc:
            sys.stderr.write(f"Failed to rename {oldest} to {target}: {exc}\n")
            return None
        return target


def log(msg: str, function: str | None = None) -> None:
    """Log ``msg`` through the shared logger, named after the calling function."""
    if function is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        function = caller.f_code.co_name if caller is not None else "<unknown>"
    Logger.get_instance().print(function, msg)