"""Simulator configuration parameters and the database that holds them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterable, TextIO


class VarType(IntEnum):
    """Type of a configuration value."""

    STRING = 0
    UINT = 1
    UINT64 = 2
    FLOAT = 3
    BOOL = 4


class ParamType(IntEnum):
    """Whether a parameter describes the system or the device."""

    SYS_PARAM = 0
    DEV_PARAM = 1


@dataclass(frozen=True)
class ConfigurationData:
    """One named configuration parameter with its value kept as text."""

    name: str
    variable_type: VarType
    parameter_type: ParamType
    value: str


_DEFAULT_VALUES = {
    VarType.STRING: "",
    VarType.UINT: "0",
    VarType.UINT64: "0",
    VarType.FLOAT: "0",
    VarType.BOOL: "false",
}


def _define(name: str, var_type: VarType, param_type: ParamType, value: str | None = None):
    if value is None:
        value = _DEFAULT_VALUES[var_type]
    return ConfigurationData(name, var_type, param_type, value)


_U, _F, _B, _S = VarType.UINT, VarType.FLOAT, VarType.BOOL, VarType.STRING
_DEV, _SYS = ParamType.DEV_PARAM, ParamType.SYS_PARAM

DEFAULT_CONFIGURATION: tuple[ConfigurationData, ...] = (
    _define("NUM_BANKS", _U, _DEV),
    _define("NUM_BANK_GROUPS", _U, _DEV),
    _define("NUM_ROWS", _U, _DEV),
    _define("NUM_COLS", _U, _DEV),
    _define("NUM_PIM_BLOCKS", _U, _DEV),
    _define("DEVICE_WIDTH", _U, _DEV),
    _define("tRFC", _U, _DEV),
    _define("tRFCSB", _U, _DEV),
    _define("tREFI", _U, _DEV),
    _define("tREFISB", _U, _DEV),
    _define("tCK", _F, _DEV),
    _define("AL", _U, _DEV),
    _define("BL", _U, _DEV),
    _define("tRAS", _U, _DEV),
    _define("RL", _U, _DEV),
    _define("WL", _U, _DEV),
    _define("tRCDRD", _U, _DEV),
    _define("tRCDWR", _U, _DEV),
    _define("tRC", _U, _DEV),
    _define("tRP", _U, _DEV),
    _define("tWR", _U, _DEV),
    _define("tRTRS", _U, _DEV),
    _define("XAW", _U, _DEV),
    _define("tXAW", _U, _DEV),
    _define("tCKE", _U, _DEV),
    _define("tXP", _U, _DEV),
    _define("tCMD", _U, _DEV),
    _define("IDD0", _U, _DEV),
    _define("IDD1", _U, _DEV),
    _define("IDD2P", _U, _DEV),
    _define("IDD2Q", _U, _DEV),
    _define("IDD2N", _U, _DEV),
    _define("IDD3Pf", _U, _DEV),
    _define("IDD3Ps", _U, _DEV),
    _define("IDD3N", _U, _DEV),
    _define("IDD4W", _U, _DEV),
    _define("IDD4R", _U, _DEV),
    _define("IDD5", _U, _DEV),
    _define("IDD6", _U, _DEV),
    _define("IDD6L", _U, _DEV),
    _define("IDD7", _U, _DEV),
    _define("IDD0C", _U, _DEV),
    _define("IDD0Q", _U, _DEV),
    _define("IDD3NC", _U, _DEV),
    _define("IDD3NQ", _U, _DEV),
    _define("IDD4WC", _U, _DEV),
    _define("IDD4WQ", _U, _DEV),
    _define("IDD4RC", _U, _DEV),
    _define("IDD4RQ", _U, _DEV),
    _define("Vddc", _F, _DEV),
    _define("Vddq", _F, _DEV),
    _define("Vpp", _F, _DEV),
    _define("Vdd", _F, _DEV),
    _define("Ealu", _U, _DEV),
    _define("Ereg", _U, _DEV),
    _define("NUM_CHANS", _U, _SYS),
    _define("JEDEC_DATA_BUS_BITS", _U, _SYS),
    # pre-defined parameters
    _define("READ_TO_WRITE_DELAY", _U, _DEV),
    _define("READ_TO_PRE_DELAY", _U, _DEV),
    _define("READ_TO_PRE_DELAY_LONG", _U, _DEV),
    _define("READ_TO_PRE_DELAY_SHORT", _U, _DEV),
    _define("WRITE_TO_PRE_DELAY", _U, _DEV),
    _define("READ_TO_WRITE_DELAY", _U, _DEV),
    _define("READ_AUTOPRE_DELAY", _U, _DEV),
    _define("WRITE_AUTOPRE_DELAY", _U, _DEV),
    _define("WRITE_TO_READ_DELAY_B_LONG", _U, _DEV),
    _define("WRITE_TO_READ_DELAY_B_SHORT", _U, _DEV),
    _define("WRITE_TO_READ_DELAY_R", _U, _DEV),
    # memory controller
    _define("TRANS_QUEUE_DEPTH", _U, _SYS),
    _define("CMD_QUEUE_DEPTH", _U, _SYS),
    _define("EPOCH_LENGTH", _U, _SYS),
    # power
    _define("USE_LOW_POWER", _B, _SYS),
    _define("TOTAL_ROW_ACCESSES", _U, _SYS),
    _define("ROW_BUFFER_POLICY", _S, _SYS),
    _define("SCHEDULING_POLICY", _S, _SYS),
    _define("ADDRESS_MAPPING_SCHEME", _S, _SYS),
    _define("QUEUING_STRUCTURE", _S, _SYS),
    # debug flags
    _define("DEBUG_TRANS_Q", _B, _SYS),
    _define("DEBUG_CMD_Q", _B, _SYS),
    _define("DEBUG_ADDR_MAP", _B, _SYS),
    _define("DEBUG_BANKSTATE", _B, _SYS),
    _define("DEBUG_BUS", _B, _SYS),
    _define("DEBUG_BANKS", _B, _SYS),
    _define("DEBUG_POWER", _B, _SYS),
    _define("DEBUG_CMD_TRACE", _B, _SYS),
    _define("DEBUG_PIM_BLOCK", _B, _SYS),
    _define("DEBUG_PIM_TIME", _B, _SYS),
    _define("VIS_FILE_OUTPUT", _B, _SYS),
    _define("VERIFICATION_OUTPUT", _B, _SYS),
    _define("PRINT_CHAN_STAT", _B, _DEV),
    _define("SHOW_SIM_OUTPUT", _B, _DEV),
    _define("LOG_OUTPUT", _B, _DEV),
    # DDR4 support
    _define("tCCDL", _U, _DEV),
    _define("tCCDS", _U, _DEV),
    _define("tRRDL", _U, _DEV),
    _define("tRRDS", _U, _DEV),
    _define("tWTRL", _U, _DEV),
    _define("tWTRS", _U, _DEV),
    _define("tRTPL", _U, _DEV),
    _define("tRTPS", _U, _DEV),
    _define("PIM_PRECISION", _S, _SYS),
    _define("SIM_TRACE_FILE", _S, _SYS),
    # number of latencies per bucket in the latency histogram
    _define("HISTOGRAM_BIN_SIZE", _U, _SYS, "10"),
    # PIM related
    _define("PIM_MODE", _S, _SYS, "mac_in_bankgroup"),
    _define("PIM_PRECISION", _S, _SYS, "FP16"),
    # controller related
    _define("ROW_BUFFER_POLICY", _S, _SYS, "open_page"),
    _define("SCHEDULING_POLICY", _S, _SYS, "rank_then_bank_round_robin"),
    _define("QUEUING_STRUCTURE", _S, _SYS, "per_rank"),
    _define("ADDRESS_MAPPING_SCHEME", _S, _SYS, "Scheme8"),
)


class ConfigurationDB:
    """Named configuration parameters; a later entry of the same name replaces an earlier one."""

    def __init__(self) -> None:
        self._entries: dict[str, ConfigurationData] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self):
        return iter(self._entries.values())

    def clear(self) -> None:
        """Remove every parameter."""
        self._entries.clear()

    def initialize(
        self, config: Iterable[ConfigurationData] | None = DEFAULT_CONFIGURATION
    ) -> None:
        """Clear the database and load ``config`` into it."""
        self.clear()
        if config is None:
            return
        for entry in config:
            if not entry.name:
                break
            self.update(entry)

    def find(self, key: str) -> ConfigurationData | None:
        """Return the parameter called ``key``, or ``None``."""
        return self._entries.get(key)

    def update(self, config: ConfigurationData) -> None:
        """Add ``config`` or replace the parameter of the same name."""
        self._entries[config.name] = config

    def update_values(self, pairs: Iterable[tuple[str, str]] | None) -> None:
        """Set the values of known parameters from ``(name, value)`` pairs; unknown names are ignored."""
        if pairs is None:
            return
        for name, value in pairs:
            current = self._entries.get(name)
            if current is not None:
                self._entries[name] = replace(current, value=value)

    def dump(self, stream: TextIO) -> None:
        """Write system and device parameter values in the visualiser's layout."""
        stream.write("!!SYSTEM INI PARAMETER\n")
        for entry in self._entries.values():
            if entry.parameter_type == ParamType.SYS_PARAM:
                stream.write(f"{entry.value}\n")
        stream.write("!!DEVICE INI PARAMETER\n")
        for entry in self._entries.values():
            if entry.parameter_type == ParamType.DEV_PARAM:
                stream.write(f"{entry.value}\n")
        stream.write("!!EPOCH_DATA\n")


_DB = ConfigurationDB()


def get_db() -> ConfigurationDB:
    """Return the process-wide configuration database."""
    return _DB