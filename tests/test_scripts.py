import random

import pytest

from ssdshell.logger import Logger, LogType
from ssdshell.scripts import (
    EraseAndWriteAging,
    FullScenario,
    FullWriteAndReadCompare,
    PartialLBAWrite,
    WriteReadAging,
)
from ssdshell.shell import MAX_LBA, OperationError
from ssdshell.util import CompareError

ERASED = "0x00000000"


class FakeSSD:
    """In-memory device that understands the shell's command strings."""

    def __init__(self, corrupt=False):
        self.cells = {}
        self.commands = []
        self.last_read = ERASED
        self.corrupt = corrupt

    def run_command(self, param):
        self.commands.append(param)
        parts = param.split()
        if parts[0] == "W":
            self.cells[int(parts[1])] = parts[2]
        elif parts[0] == "R":
            value = self.cells.get(int(parts[1]), ERASED)
            self.last_read = "0xBADBADBA" if self.corrupt else value
        elif parts[0] == "E":
            start, size = int(parts[1]), int(parts[2])
            for lba in range(start, start + size):
                self.cells[lba] = ERASED
        return True

    def read_output(self, output_file=None):
        return self.last_read

    def of_kind(self, kind):
        return [c for c in self.commands if c.startswith(kind + " ")]


@pytest.fixture(autouse=True)
def in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Logger.get_instance().set_log_type(LogType.NORMAL)
    yield
    Logger.get_instance().set_log_type(LogType.NORMAL)


def test_full_write_and_read_compare_fills_device_in_blocks():
    device = FakeSSD()
    FullWriteAndReadCompare(executor=device, rng=random.Random(3)).run()
    writes = device.of_kind("W")
    assert len(writes) == 100
    assert sorted(device.cells) == list(range(100))
    for first in range(0, 100, 5):
        values = {device.cells[lba] for lba in range(first, first + 5)}
        assert len(values) == 1
    assert len(device.of_kind("R")) == len(writes)


def test_full_write_and_read_compare_detects_mismatch():
    with pytest.raises(CompareError):
        FullWriteAndReadCompare(executor=FakeSSD(corrupt=True)).run()


def test_full_write_is_deterministic_with_seeded_rng():
    first, second = FakeSSD(), FakeSSD()
    FullWriteAndReadCompare(executor=first, rng=random.Random(7)).run()
    FullWriteAndReadCompare(executor=second, rng=random.Random(7)).run()
    assert first.commands == second.commands


def test_partial_lba_write_order_and_single_value():
    device = FakeSSD()
    PartialLBAWrite(executor=device).run()
    writes = device.of_kind("W")
    addresses = [w.split()[1] for w in writes]
    assert addresses[:5] == ["4", "0", "3", "1", "2"]
    assert len(addresses) % 5 == 0
    assert addresses == addresses[:5] * (len(addresses) // 5)
    assert len({w.split()[2] for w in writes}) == 1
    reads = [r.split()[1] for r in device.of_kind("R")]
    assert reads[:5] == ["0", "1", "2", "3", "4"]


def test_partial_lba_write_detects_mismatch():
    with pytest.raises(CompareError):
        PartialLBAWrite(executor=FakeSSD(corrupt=True)).run()


def test_write_read_aging_touches_only_first_and_last():
    device = FakeSSD()
    WriteReadAging(executor=device).run()
    addresses = {w.split()[1] for w in device.of_kind("W")}
    assert addresses == {"0", str(MAX_LBA)}
    assert len(device.of_kind("R")) == len(device.of_kind("W"))


def test_write_read_aging_detects_mismatch():
    with pytest.raises(CompareError):
        WriteReadAging(executor=FakeSSD(corrupt=True)).run()


def test_erase_and_write_aging_commands():
    device = FakeSSD()
    EraseAndWriteAging(executor=device).run()
    assert device.commands[0] == "E 0 3"
    assert device.commands[-1] == "E 98 2"
    written = {int(w.split()[1]) for w in device.of_kind("W")}
    assert written == set(range(2, MAX_LBA, 2))
    for lba in written:
        assert device.cells[lba] == ERASED


def test_write_and_erase_single_address():
    device = FakeSSD()
    EraseAndWriteAging(executor=device).write_and_erase(10)
    assert [c.split()[0] for c in device.commands] == ["W", "R", "W", "R", "E"]
    assert device.commands[-1] == "E 10 3"
    assert device.cells[10] == ERASED


def test_full_scenario_runs_each_listed_script(tmp_path, capsys):
    script = tmp_path / "scripts.txt"
    script.write_text("1_FullWriteAndReadCompare\n2_PartialLBAWrite\n", encoding="utf-8")
    FullScenario(executor=FakeSSD()).run(str(script), "")
    out = capsys.readouterr().out
    assert out == (
        "1_FullWriteAndReadCompare   ___   Run... Pass\n"
        "2_PartialLBAWrite   ___   Run... Pass\n"
    )
    assert Logger.get_instance().log_type == LogType.NORMAL


def test_full_scenario_stops_on_failure(tmp_path, capsys):
    script = tmp_path / "scripts.txt"
    script.write_text("3_WriteReadAging\n1_\n", encoding="utf-8")
    FullScenario(executor=FakeSSD(corrupt=True)).run(str(script), "")
    out = capsys.readouterr().out
    assert out == "3_WriteReadAging   ___   Run... FAIL!\n"
    assert Logger.get_instance().log_type == LogType.NORMAL


def test_full_scenario_stops_on_invalid_line(tmp_path, capsys):
    script = tmp_path / "scripts.txt"
    script.write_text("bogus\n1_\n", encoding="utf-8")
    device = FakeSSD()
    FullScenario(executor=device).run(str(script), "")
    out = capsys.readouterr().out
    assert "bogus\n is invalid test script\n" in out
    assert device.commands == []


def test_full_scenario_missing_file_raises(tmp_path):
    with pytest.raises(OperationError):
        FullScenario(executor=FakeSSD()).run(str(tmp_path / "missing.txt"), "")
    assert "Invalid File name. Can't find it\n" in (tmp_path / "latest.log").read_text(encoding="utf-8")