"""Small helpers shared by the test shell."""

from __future__ import annotations

import os
import random
from pathlib import Path

RAND_MAX = 32767


class CompareError(Exception):
    """Raised when written and read data differ."""


def create_random_string(rng: random.Random | None = None) -> str:
    """Return a random 32-bit value as ``0x`` followed by 8 upper-case hex digits."""
    source = rng if rng is not None else random
    value = (source.randint(0, RAND_MAX) << 16) | source.randint(0, RAND_MAX)
    return f"0x{value:08X}"


def compare_data(write_data: str, read_data: str) -> bool:
    """Return True if the two values match, otherwise raise CompareError."""
    if write_data == read_data:
        return True
    raise CompareError("Compare Failed")


def remove_file(filename: str | Path) -> bool:
    """Delete ``filename``; report and return whether it was removed."""
    try:
        os.remove(filename)
    except OSError:
        return False
    print(f"{filename} deleted successfully.")
    return True


def make_file(filename: str | Path) -> bool:
    """Write a one-line sample log entry to ``filename``."""
    try:
        with open(filename, "w", encoding="utf-8") as handle:
            handle.write("This is a log entry.\n")
    except OSError:
        return False
    print(f"Log written to {filename}")
    return True