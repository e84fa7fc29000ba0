"""Shell operations that drive the SSD program and validate their inputs."""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from ssdshell.logger import log

MAX_LBA = 99
ERASE_BLOCK_SIZE = 10
FULL_READ_SIZE = 100
HEX_DIGITS = "0123456789ABCDEF"
DECIMAL_DIGITS = "0123456789"

HELP_TEXT = (
    "How to use CMD\n"
    "read (address) : read the data at (address)\n"
    "write (address) (data) : write (data) to (address)\n"
    "fullread : read every address\n"
    "fullwrite (data) : write (data) to every address\n"
    "exit : quit\n"
    "help : show this help\n"
)


class OperationError(Exception):
    """Raised when an operation is given invalid arguments."""


def check_lba(lba: str) -> bool:
    """Validate a logical block address written as one or two decimal digits."""
    if not lba or len(lba) > 2:
        raise ValueError("LBA must be in range 0 ~ 99")
    if any(ch not in DECIMAL_DIGITS for ch in lba):
        raise ValueError("only digits 0~9 are allowed")
    return True


def check_hex_data(data: str) -> bool:
    """Validate data written as ``0x`` followed by 8 upper-case hex digits."""
    if len(data) != 10 or not data.startswith("0x"):
        raise ValueError("only 8-digit hexadecimal values are allowed")
    if any(ch not in HEX_DIGITS for ch in data[2:]):
        raise ValueError("only 0~9 and A~F are allowed")
    return True


def adjust_range(lba: int, size: int) -> tuple[int, int]:
    """Clamp an erase request to the device; a negative size counts backwards."""
    if size < 0:
        end = lba
        size = abs(size)
        lba = lba - size + 1
        if lba < 0:
            lba = 0
            size = end + 1
    elif lba + size - 1 > MAX_LBA:
        size = MAX_LBA - lba + 1
    return lba, size


class SSDExecutor:
    """Runs the SSD program and reads the file it writes its results to."""

    def __init__(self, program: str = "ssd.exe", output_file: str | Path = "ssd_output.txt") -> None:
        self.program = program
        self.output_file = Path(output_file)

    def run_command(self, param: str) -> bool:
        """Run the SSD program with ``param``; False if it could not be started."""
        try:
            subprocess.run(
                [self.program, *param.split()],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError:
            log(f"[ERROR] Failed to execute: {self.program} {param}")
            return False
        return True

    def read_output(self, output_file: str | Path | None = None) -> str:
        """Return the output file's lines joined without line breaks."""
        path = Path(output_file) if output_file is not None else self.output_file
        try:
            with path.open(encoding="utf-8") as handle:
                return "".join(line.rstrip("\r\n") for line in handle)
        except OSError:
            return "error: cannot open output file"


class TestOperation(ABC):
    """A shell command that can be run with up to two parameters."""

    __test__ = False

    def __init__(self, executor: SSDExecutor | None = None) -> None:
        self.executor = executor if executor is not None else SSDExecutor()

    @abstractmethod
    def run(self, param1: str = "", param2: str = "") -> None:
        """Carry out the operation."""


class Flush(TestOperation):
    def run(self, param1: str = "", param2: str = "") -> None:
        self.flush()

    def flush(self) -> bool:
        return self.executor.run_command("F")


class Erase(TestOperation):
    def run(self, param1: str = "", param2: str = "") -> None:
        self.erase(param1, param2)

    def erase(self, lba: str, size: str) -> None:
        """Erase ``size`` blocks from ``lba`` in chunks of at most ten."""
        try:
            check_lba(lba)
            start, count = adjust_range(int(lba), int(size))
        except ValueError as exc:
            log(f"error message : {exc}\n")
            return

        remaining = count
        erase_size = ERASE_BLOCK_SIZE
        for _ in range(count // ERASE_BLOCK_SIZE + 1):
            if remaining < ERASE_BLOCK_SIZE:
                erase_size = remaining
            self.erase_ssd(f"E {start} {erase_size}")
            start += ERASE_BLOCK_SIZE
            remaining -= ERASE_BLOCK_SIZE

    def erase_ssd(self, command: str) -> bool:
        return self.executor.run_command(command)


class EraseRange(Erase):
    def run(self, param1: str = "", param2: str = "") -> None:
        self.erase_range(param1, param2)

    def erase_range(self, start: str, end: str) -> None:
        """Erase every block between ``start`` and ``end`` inclusive, in either order."""
        try:
            check_lba(start)
            check_lba(end)
        except ValueError as exc:
            log(f"error message : {exc}\n")
            return
        first, last = int(start), int(end)
        size = str(abs(first - last) + 1)
        self.erase(end if first > last else start, size)


class Read(TestOperation):
    def run(self, param1: str = "", param2: str = "") -> None:
        self.read(param1)

    def read(self, address: str) -> str:
        """Read one address; raise OperationError if it is invalid."""
        try:
            check_lba(address)
        except ValueError as exc:
            log(f"error message : {exc}\n")
            raise OperationError(str(exc)) from exc
        return self.read_ssd(address)

    def read_ssd(self, address: str) -> str:
        self.executor.run_command(f"R {address}")
        result = self.executor.read_output()
        shown = "0" + address if len(address) == 1 else address
        log(f"[Read] LBA  {shown} : {result}\n")
        return result


class FullRead(Read):
    def run(self, param1: str = "", param2: str = "") -> None:
        self.full_read()

    def full_read(self) -> list[str]:
        return [self.read(str(lba)) for lba in range(FULL_READ_SIZE)]


class Help(TestOperation):
    def run(self, param1: str = "", param2: str = "") -> None:
        log(HELP_TEXT)


class Write(TestOperation):
    def run(self, param1: str = "", param2: str = "") -> None:
        self.write(param1, param2)

    def write(self, address: str, data: str) -> None:
        """Write ``data`` to ``address``; raise OperationError if either is invalid."""
        try:
            check_lba(address)
            check_hex_data(data)
        except ValueError as exc:
            log(f"error message : {exc}\n")
            raise OperationError(str(exc)) from exc
        self.write_ssd(address, data)

    def write_ssd(self, address: str, data: str) -> bool:
        return self.executor.run_command(f"W {address} {data}")


class FullWrite(Write):
    def run(self, param1: str = "", param2: str = "") -> None:
        self.full_write(param1)

    def full_write(self, data: str) -> None:
        """Write ``data`` to every address."""
        try:
            check_hex_data(data)
        except ValueError as exc:
            log(f"error message : {exc}\n")
            raise OperationError(str(exc)) from exc
        for lba in range(FULL_READ_SIZE):
            self.write_ssd(str(lba), data)