"""Test scenarios that exercise the SSD through the shell operations."""

from __future__ import annotations

import random
from pathlib import Path

from ssdshell.logger import Logger, LogType, log
from ssdshell.shell import (
    FULL_READ_SIZE,
    MAX_LBA,
    Erase,
    OperationError,
    Read,
    SSDExecutor,
    TestOperation,
    Write,
)
from ssdshell.util import compare_data, create_random_string

COMPARE_BLOCK = 5
PARTIAL_LOOPS = 30
PARTIAL_WRITE_ORDER = ("4", "0", "3", "1", "2")
PARTIAL_READ_ORDER = ("0", "1", "2", "3", "4")
AGING_LOOPS = 200
ERASE_AGING_LOOPS = 30
ERASE_AGING_SIZE = "3"


class _Scenario(TestOperation):
    """A scenario that writes random data and reads it back for comparison."""

    def __init__(
        self,
        write: Write | None = None,
        read: Read | None = None,
        executor: SSDExecutor | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(executor)
        self.writer = write if write is not None else Write(self.executor)
        self.reader = read if read is not None else Read(self.executor)
        self.rng = rng

    def _random_data(self) -> str:
        return create_random_string(self.rng)

    def _write_and_compare(self, address: str, data: str) -> None:
        self.writer.run(address, data)
        compare_data(data, self.reader.read(address))


class FullWriteAndReadCompare(_Scenario):
    """Fill the device five blocks at a time, comparing each group after writing it."""

    def run(self, param1: str = "", param2: str = "") -> None:
        for first in range(0, FULL_READ_SIZE, COMPARE_BLOCK):
            data = self._random_data()
            addresses = [str(lba) for lba in range(first, first + COMPARE_BLOCK)]
            for address in addresses:
                self.writer.run(address, data)
            for address in addresses:
                compare_data(data, self.reader.read(address))


class PartialLBAWrite(_Scenario):
    """Repeatedly write the first five blocks out of order and compare them."""

    def run(self, param1: str = "", param2: str = "") -> None:
        data = self._random_data()
        for _ in range(PARTIAL_LOOPS):
            for address in PARTIAL_WRITE_ORDER:
                self.writer.run(address, data)
            for address in PARTIAL_READ_ORDER:
                compare_data(data, self.reader.read(address))


class WriteReadAging(_Scenario):
    """Repeatedly write fresh data to the first and last blocks and compare them."""

    def run(self, param1: str = "", param2: str = "") -> None:
        last = str(MAX_LBA)
        for _ in range(AGING_LOOPS):
            first_data = self._random_data()
            self.writer.run("0", first_data)
            last_data = self._random_data()
            self.writer.run(last, last_data)
            compare_data(first_data, self.reader.read("0"))
            compare_data(last_data, self.reader.read(last))


class EraseAndWriteAging(_Scenario):
    """Write, overwrite and erase every even block repeatedly."""

    def __init__(
        self,
        write: Write | None = None,
        read: Read | None = None,
        erase: Erase | None = None,
        executor: SSDExecutor | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(write, read, executor, rng)
        self.eraser = erase if erase is not None else Erase(self.executor)

    def run(self, param1: str = "", param2: str = "") -> None:
        self.eraser.run("0", ERASE_AGING_SIZE)
        for _ in range(ERASE_AGING_LOOPS):
            for address in range(2, MAX_LBA, 2):
                self.write_and_erase(address)

    def write_and_erase(self, start_addr: int) -> None:
        """Write and compare twice at ``start_addr``, then erase from there."""
        address = str(start_addr)
        self._write_and_compare(address, self._random_data())
        self._write_and_compare(address, self._random_data())
        self.eraser.run(address, ERASE_AGING_SIZE)


class FullScenario(TestOperation):
    """Run the scenarios named, one per line, in a script file.

    Stops at the first line that names no scenario or whose scenario fails.
    """

    def __init__(
        self,
        executor: SSDExecutor | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(executor)
        self.rng = rng

    def _scenario_for(self, line: str) -> TestOperation | None:
        if "1_" in line:
            return FullWriteAndReadCompare(executor=self.executor, rng=self.rng)
        if "2_" in line:
            return PartialLBAWrite(executor=self.executor, rng=self.rng)
        if "3_" in line:
            return WriteReadAging(executor=self.executor, rng=self.rng)
        if "4_" in line:
            return EraseAndWriteAging(executor=self.executor, rng=self.rng)
        return None

    def run(self, param1: str = "", param2: str = "") -> None:
        """Run the script file named by ``param1``."""
        try:
            handle = Path(param1).open(encoding="utf-8")
        except OSError as exc:
            log("Invalid File name. Can't find it\n")
            raise OperationError(f"cannot open script file {param1!r}") from exc

        logger = Logger.get_instance()
        logger.set_log_type(LogType.RUNNER)
        try:
            with handle:
                for line in handle:
                    scenario = self._scenario_for(line)
                    if scenario is None:
                        log(f"{line} is invalid test script\n")
                        break
                    name = line[:-1] if line.endswith("\n") else line
                    log(f"{name}   ___   Run... ")
                    try:
                        logger.set_log_type(LogType.RUNNER_EXCEPT)
                        scenario.run("", "")
                    except Exception:
                        logger.set_log_type(LogType.RUNNER)
                        log("FAIL!\n")
                        break
                    logger.set_log_type(LogType.RUNNER)
                    log("Pass\n")
        finally:
            logger.set_log_type(LogType.NORMAL)