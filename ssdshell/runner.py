"""Interactive command loop of the SSD test shell."""

from __future__ import annotations

import sys
from collections import deque
from collections.abc import Mapping, Sequence
from enum import IntEnum
from typing import TextIO

from ssdshell.logger import log
from ssdshell.scripts import (
    EraseAndWriteAging,
    FullScenario,
    FullWriteAndReadCompare,
    PartialLBAWrite,
    WriteReadAging,
)
from ssdshell.shell import (
    Erase,
    EraseRange,
    Flush,
    FullRead,
    FullWrite,
    Help,
    OperationError,
    Read,
    SSDExecutor,
    TestOperation,
    Write,
)


class Operation(IntEnum):
    """Shell commands, ordered so that the number of parameters can be told by rank."""

    WRITE = 0
    ERASE = 1
    ERASE_RANGE = 2
    FULLWRITE = 3
    READ = 4
    FULLREAD = 5
    EXIT = 6
    HELP = 7
    FLUSH = 8
    SCENARIO_1 = 9
    SCENARIO_2 = 10
    SCENARIO_3 = 11
    SCENARIO_4 = 12

    @property
    def parameter_count(self) -> int:
        if self <= Operation.ERASE_RANGE:
            return 2
        if self <= Operation.READ:
            return 1
        return 0


_COMMANDS = {
    "read": Operation.READ,
    "write": Operation.WRITE,
    "help": Operation.HELP,
    "exit": Operation.EXIT,
    "fullwrite": Operation.FULLWRITE,
    "fullread": Operation.FULLREAD,
    "flush": Operation.FLUSH,
    "erase": Operation.ERASE,
    "erase_range": Operation.ERASE_RANGE,
    "1_": Operation.SCENARIO_1,
    "1_FullWriteAndReadCompare": Operation.SCENARIO_1,
    "2_": Operation.SCENARIO_2,
    "2_PartialLBAWrite": Operation.SCENARIO_2,
    "3_": Operation.SCENARIO_3,
    "3_WriteReadAging": Operation.SCENARIO_3,
    "4_": Operation.SCENARIO_4,
    "4_EraseAndWriteAging": Operation.SCENARIO_4,
}


def parse_command(command: str) -> Operation | None:
    """Return the operation a command word names, or None if it names none."""
    return _COMMANDS.get(command)


class TestRun:
    """Reads commands word by word and runs the matching operation."""

    __test__ = False

    def __init__(
        self,
        stream: TextIO | None = None,
        operators: Mapping[Operation, TestOperation] | None = None,
        executor: SSDExecutor | None = None,
    ) -> None:
        self._stream = stream
        self._pending: deque[str] = deque()
        executor = executor if executor is not None else SSDExecutor()
        self.operators: dict[Operation, TestOperation] = {
            Operation.READ: Read(executor),
            Operation.FULLREAD: FullRead(executor),
            Operation.HELP: Help(executor),
            Operation.WRITE: Write(executor),
            Operation.FULLWRITE: FullWrite(executor),
            Operation.ERASE: Erase(executor),
            Operation.ERASE_RANGE: EraseRange(executor),
            Operation.FLUSH: Flush(executor),
            Operation.SCENARIO_1: FullWriteAndReadCompare(executor=executor),
            Operation.SCENARIO_2: PartialLBAWrite(executor=executor),
            Operation.SCENARIO_3: WriteReadAging(executor=executor),
            Operation.SCENARIO_4: EraseAndWriteAging(executor=executor),
        }
        if operators:
            self.operators.update(operators)

    def get_input(self) -> str:
        """Return the next whitespace-separated word; raise EOFError at end of input."""
        stream = self._stream if self._stream is not None else sys.stdin
        while not self._pending:
            line = stream.readline()
            if not line:
                raise EOFError("end of input")
            self._pending.extend(line.split())
        return self._pending.popleft()

    def get_operator(self, operation: Operation) -> TestOperation:
        return self.operators[operation]

    def run_command(self) -> bool:
        """Run one command; return False when the shell should stop."""
        try:
            operation = parse_command(self.get_input())
            if operation is None:
                log("INVALID COMMAND\n")
                return True
            if operation is Operation.EXIT:
                return False
            params = [self.get_input() for _ in range(operation.parameter_count)]
        except EOFError:
            return False

        params += [""] * (2 - len(params))
        current = self.get_operator(operation)
        try:
            current.run(params[0], params[1])
        except Exception:
            log("Fail\n")
        else:
            log("Pass\n")
        return True


def main(argv: Sequence[str] | None = None) -> int:
    """Run a script file given on the command line, or the interactive shell."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args:
        file_name = args[0]
        if ".txt" in file_name:
            try:
                FullScenario().run(file_name, "")
            except OperationError:
                return 1
        return 0

    runner = TestRun()
    while runner.run_command():
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())