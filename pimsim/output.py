"""Simulation output switches and printing helpers."""

from __future__ import annotations

import inspect
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import TextIO


class Color(str, Enum):
    """Terminal colour escape sequences."""

    L_BLUE = "\x1b[94m"
    GREEN = "\x1b[32m"
    RED = "\x1b[31m"
    BLUE = "\x1b[0;34m"
    MAGENTA = "\x1b[0;35m"
    CYAN = "\x1b[0;36m"
    GRAY = "\x1b[90m"
    END = "\x1b[0m"


@dataclass
class DebugFlags:
    """Switches that control debug printing and output files."""

    debug_trans_q: bool = False
    debug_cmd_q: bool = False
    debug_addr_map: bool = False
    debug_bankstate: bool = False
    debug_bus: bool = False
    debug_banks: bool = False
    debug_power: bool = False
    debug_cmd_trace: bool = False
    debug_pim_time: bool = False
    debug_pim_block: bool = False
    use_low_power: bool = False
    vis_file_output: bool = False
    print_chan_stat: bool = False
    verification_output: bool = False
    log_output: bool = False
    show_sim_output: bool = False
    sim_trace_file: str = ""


def error(message: object) -> None:
    """Print an error message, tagged with the caller's location, to stderr."""
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    if caller is not None:
        where = f"{os.path.basename(caller.f_code.co_filename)}:{caller.f_lineno}"
    else:
        where = "?"
    print(f"[ERROR ({where})]: {message}", file=sys.stderr)


@dataclass
class SimOutput:
    """Sends simulation messages to the log or the console, as the flags say.

    Nothing is printed unless ``show_sim_output`` is set. With ``log_output``
    messages go to ``log`` (dropped if there is none), otherwise to ``console``
    (standard output when not given).
    """

    flags: DebugFlags = field(default_factory=DebugFlags)
    log: TextIO | None = None
    console: TextIO | None = None

    def _target(self) -> TextIO | None:
        if self.flags.log_output:
            return self.log
        return self.console if self.console is not None else sys.stdout

    def write(self, text: object) -> None:
        """Print ``text`` without a newline."""
        if not self.flags.show_sim_output:
            return
        target = self._target()
        if target is not None:
            target.write(str(text))

    def write_if(self, condition: bool, text: object) -> None:
        """Print ``text`` without a newline when ``condition`` holds."""
        if condition:
            self.write(text)

    def emit(self, message: object) -> None:
        """Print ``message`` followed by a newline."""
        self.write(f"{message}\n")

    def emit_if(self, condition: bool, message: object) -> None:
        """Print ``message`` on its own line when ``condition`` holds."""
        if condition:
            self.emit(message)