# pimsim

Building blocks for simulating a processing-in-memory (PIM) DRAM device.

## Modules

- `pimsim.pimcmd`: the PIM instruction set. `PIMCmd` is a dataclass for one
  32-bit command word. `PIMCmd.from_int` decodes a word, `to_int` encodes it,
  and `to_str` renders it in assembly notation, for example
  `MAC GRF_B[0], GRF_A[0], EVEN_BANK, auto`. `validate` raises
  `InvalidCommandError` for a `MOV` or `FILL` from a GRF into a bank. Two
  commands are equal when they encode to the same word. `PIMCmdType` and
  `PIMOpdType` name the opcodes and operands. The helpers `bitmask`, `to_bit`,
  `from_bit`, `opd_to_str` and `cmd_to_str` are public too.
- `pimsim.configuration`: `ConfigurationDB` holds named `ConfigurationData`
  entries (name, `VarType`, `ParamType`, value as text). `initialize()` loads
  the built-in `DEFAULT_CONFIGURATION` table. `update` adds or replaces an
  entry. `update_values` sets the values of known names from `(name, value)`
  pairs and ignores unknown names. `find` looks up an entry by name. `dump`
  writes system and device values under `!!SYSTEM INI PARAMETER`,
  `!!DEVICE INI PARAMETER` and `!!EPOCH_DATA` headings. `get_db()` returns a
  process-wide database.
- `pimsim.csvwriter`: `CSVWriter` collects field names up to its first
  `finalize()`, which writes the header line. After that, names are ignored
  and each `finalize()` ends one row of values. The `<<` operator sends
  strings and `IndexedName` objects to `add_field`, and anything else to
  `add_value`. `IndexedName("name", 0, 1)` gives the field name `name[0][1]`.
  It takes one to three indices and raises `ValueError` when the name is too
  long.
- `pimsim.transaction`: `Transaction` is a read, write or returned-data
  transaction at an address. `bus_packet_type()` maps reads to
  `BusPacketType.READ` and writes to `BusPacketType.WRITE`. It raises
  `ValueError` for other transaction types and for any row buffer policy
  other than `RowBufferPolicy.OPEN_PAGE`.
- `pimsim.simobject`: `SimulatorObject`, an abstract clocked base with
  `current_clock_cycle`, `step()` and an abstract `update()`.
- `pimsim.output`: `DebugFlags` holds the output switches. `SimOutput`
  prints messages only when `show_sim_output` is set. It sends them to its
  log when `log_output` is set, and otherwise to its console (standard output
  by default). `error()` prints a message, tagged with the caller's file and
  line, to standard error. `Color` holds terminal escape sequences.
- `pimsim.npy`: reads and writes NumPy `.npy` files. `save_array` and
  `load_array` do the whole job. The header helpers are `write_header`,
  `read_header`, `parse_header`, `parse_dict`, `parse_tuple` and related
  functions. Malformed input raises `NpyError`. Unsigned 16-bit data is
  taken to hold raw half-precision bits and is written as `f2`.
- `pimsim.utils`: `ulog2` (base-2 logarithm rounded up), `is_power_of_two`,
  and `bytes_to_gb`, `bytes_to_mb` and `bytes_to_kb`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Encoding and decoding a PIM command:

```python
from pimsim.pimcmd import PIMCmd, PIMCmdType, PIMOpdType

cmd = PIMCmd(PIMCmdType.MAC, dst=PIMOpdType.GRF_B, src0=PIMOpdType.GRF_A,
             src1=PIMOpdType.EVEN_BANK, is_auto=True)
word = cmd.to_int()
assert PIMCmd.from_int(word) == cmd
print(cmd.to_str())
```

Writing statistics as CSV:

```python
import io
from pimsim.csvwriter import CSVWriter

out = io.StringIO()
writer = CSVWriter(out)
writer << "Bandwidth" << 0.5 << "Latency" << 5
writer.finalize()          # writes "Bandwidth,Latency,"
writer << "Bandwidth" << 1.5 << "Latency" << 15
writer.finalize()          # writes "1.5,15,"
```

Saving and loading an array:

```python
import numpy as np
from pimsim.npy import save_array, load_array

data = np.arange(6, dtype=np.float32)
save_array("data.npy", data, (2, 3), False)
shape, values = load_array("data.npy", np.float32)   # (2, 3), flat array of 6
```

## What this package does not do

This package is a set of parts, not a running simulator. It has no memory
controller, ranks, banks, address mapping or PIM execution engine. It does
not read configuration files: values reach `ConfigurationDB` only through
`update` and `update_values`. It provides no command-line program and no
trace-driven runner.