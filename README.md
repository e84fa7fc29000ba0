# ssdshell

A test shell for a command-line SSD simulator. For every operation it
starts the simulator program (`ssd.exe` by default) with the operation's
arguments, reads results back from `ssd_output.txt`, and compares what
it reads with what it wrote. It can be driven by hand or made to run a
list of test scenarios from a file.

## Installation

```
pip install .
```

## Interactive shell

```
ssdshell
```

Commands are read one whitespace-separated word at a time from standard
input. The shell stops on `exit` or at the end of input.

| Command                        | Arguments       | Effect |
|--------------------------------|-----------------|--------|
| `write`                        | `<lba> <data>`  | write `data` (`0x` plus 8 upper-case hex digits) to LBA 0–99 |
| `read`                         | `<lba>`         | read one LBA and log its value |
| `fullwrite`                    | `<data>`        | write `data` to all 100 LBAs |
| `fullread`                     |                 | read all 100 LBAs |
| `erase`                        | `<lba> <size>`  | erase `size` LBAs from `lba`, sent in chunks of at most 10; a negative size counts backwards from `lba`, and the range is clamped to LBAs 0–99 |
| `erase_range`                  | `<start> <end>` | erase every LBA from `start` to `end` inclusive, in either order |
| `flush`                        |                 | send the simulator its `F` command |
| `1_` / `1_FullWriteAndReadCompare` |             | write random data to all LBAs five at a time, comparing each group |
| `2_` / `2_PartialLBAWrite`     |                 | 30 rounds of writing LBAs 4, 0, 3, 1, 2 and comparing LBAs 0–4 |
| `3_` / `3_WriteReadAging`      |                 | 200 rounds of writing and comparing LBAs 0 and 99 |
| `4_` / `4_EraseAndWriteAging`  |                 | erase LBAs 0–2, then 30 rounds of write, rewrite, compare and erase on every even LBA from 2 to 98 |
| `help`                         |                 | show usage |
| `exit`                         |                 | leave the shell |

After each command the shell logs `Pass`, or `Fail` if the operation
raised (an invalid address or data for `read`, `write` and `fullwrite`,
or a mismatch in a scenario). An invalid address given to `erase` or
`erase_range` is logged as an error and the command still reports
`Pass`. An unknown command logs `INVALID COMMAND`.

## Running a scenario file

```
ssdshell scenarios.txt
```

If the first argument contains `.txt`, the file is read one scenario per
line; a line is matched by whether it contains `1_`, `2_`, `3_` or `4_`.
Scenarios run in order, and the run stops at the first failing scenario
or at the first line that names no scenario. The command exits with
status 1 if the file cannot be opened, and 0 otherwise.

## Using it from Python

- `ssdshell.shell` holds the operations (`Read`, `Write`, `FullRead`,
  `FullWrite`, `Erase`, `EraseRange`, `Flush`, `Help`), the validators
  `check_lba` and `check_hex_data`, `adjust_range`, and `SSDExecutor`,
  which names the simulator program and its output file.
- `ssdshell.scripts` holds the scenarios (`FullWriteAndReadCompare`,
  `PartialLBAWrite`, `WriteReadAging`, `EraseAndWriteAging`) and
  `FullScenario`, which runs a scenario file.
- `ssdshell.runner` holds `TestRun`, the command loop, `parse_command`
  and `main`.
- `ssdshell.logger` holds `Logger` and `log`; `ssdshell.util` holds
  `create_random_string` and `compare_data`.

## Logging

Every message is appended to `latest.log` in the current directory and,
unless the logger is in `LogType.RUNNER_EXCEPT` mode, echoed to standard
output. In `LogType.NORMAL` mode each entry is prefixed with a
`[YY.MM.DD HH:MM]` timestamp and the calling function's name; while a
scenario file runs, entries are written without that prefix and the
output of the scenarios themselves is kept off the console.

When `latest.log` grows past 10 KiB it is renamed to
`until_YYMMDD_HHh_MMm_SSs.log`. Once two or more such files exist, the
least recently modified one is renamed with a `.zip` suffix; it is only
renamed, not compressed.

## What this package does not do

It does not include the SSD simulator. The shell only starts the
simulator program and reads its output file; without that program in
place, reads return `error: cannot open output file` and scenarios fail.