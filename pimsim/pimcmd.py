"""Encoding, decoding and formatting of PIM micro-commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class PIMCmdType(IntEnum):
    """Operation codes of the PIM command register file."""

    NOP = 0
    ADD = 1
    MUL = 2
    MAC = 3
    MAD = 4
    REV0 = 5
    REV1 = 6
    REV2 = 7
    MOV = 8
    FILL = 9
    REV3 = 10
    REV4 = 11
    REV5 = 12
    REV6 = 13
    JUMP = 14
    EXIT = 15


class PIMOpdType(IntEnum):
    """Operand sources and destinations of a PIM command."""

    A_OUT = 0
    M_OUT = 1
    EVEN_BANK = 2
    ODD_BANK = 3
    GRF_A = 4
    GRF_B = 5
    SRF_M = 6
    SRF_A = 7


class InvalidCommandError(ValueError):
    """Raised for a command that the instruction set does not allow."""


_WORD_MASK = 0xFFFFFFFF

_BANK_OPERANDS = (PIMOpdType.EVEN_BANK, PIMOpdType.ODD_BANK)
_GRF_OPERANDS = (PIMOpdType.GRF_A, PIMOpdType.GRF_B)
_ARITHMETIC = (PIMCmdType.ADD, PIMCmdType.MUL, PIMCmdType.MAC, PIMCmdType.MAD)
_MOVES = (PIMCmdType.MOV, PIMCmdType.FILL)


def bitmask(bits: int) -> int:
    """Return a mask of the lowest ``bits`` bits."""
    return ((1 << bits) - 1) & _WORD_MASK


def to_bit(value: int, bit_len: int, bit_pos: int) -> int:
    """Place the low ``bit_len`` bits of ``value`` at ``bit_pos`` in a 32-bit word."""
    return ((int(value) & bitmask(bit_len)) << bit_pos) & _WORD_MASK


def from_bit(value: int, bit_len: int, bit_pos: int) -> int:
    """Extract ``bit_len`` bits at ``bit_pos`` from ``value``."""
    return (int(value) >> bit_pos) & bitmask(bit_len)


def opd_to_str(opd: PIMOpdType, idx: int = 0) -> str:
    """Return the assembly name of an operand."""
    if opd in (PIMOpdType.A_OUT, PIMOpdType.M_OUT, PIMOpdType.EVEN_BANK, PIMOpdType.ODD_BANK):
        return opd.name
    if opd in (PIMOpdType.GRF_A, PIMOpdType.GRF_B, PIMOpdType.SRF_M, PIMOpdType.SRF_A):
        return f"{opd.name}[{idx}]"
    return "NOT_DEFINED"


def cmd_to_str(cmd_type: PIMCmdType) -> str:
    """Return the mnemonic of a command type, ``NOT_DEFINED`` for reserved codes."""
    if cmd_type in _ARITHMETIC or cmd_type in _MOVES or cmd_type in (
        PIMCmdType.NOP,
        PIMCmdType.JUMP,
        PIMCmdType.EXIT,
    ):
        return PIMCmdType(cmd_type).name
    return "NOT_DEFINED"


@dataclass(eq=False)
class PIMCmd:
    """One 32-bit PIM command; two commands are equal when they encode alike."""

    cmd_type: PIMCmdType = PIMCmdType.NOP
    dst: PIMOpdType = PIMOpdType.A_OUT
    src0: PIMOpdType = PIMOpdType.A_OUT
    src1: PIMOpdType = PIMOpdType.A_OUT
    src2: PIMOpdType = PIMOpdType.A_OUT
    loop_counter: int = 0
    loop_offset: int = 0
    is_auto: bool = False
    dst_idx: int = 0
    src0_idx: int = 0
    src1_idx: int = 0
    is_relu: bool = False

    @classmethod
    def from_int(cls, value: int) -> PIMCmd:
        """Decode a 32-bit command word."""
        cmd = cls(cmd_type=PIMCmdType(from_bit(value, 4, 28)))
        t = cmd.cmd_type
        if t == PIMCmdType.NOP:
            cmd.loop_counter = from_bit(value, 11, 0)
        elif t == PIMCmdType.JUMP:
            cmd.loop_counter = from_bit(value, 17, 11)
            cmd.loop_offset = from_bit(value, 11, 0)
        elif t in _MOVES:
            cmd.dst = PIMOpdType(from_bit(value, 3, 25))
            cmd.src0 = PIMOpdType(from_bit(value, 3, 22))
            cmd.is_relu = bool(from_bit(value, 1, 12))
            cmd.dst_idx = from_bit(value, 4, 8)
            cmd.src0_idx = from_bit(value, 4, 4)
            cmd.src1_idx = from_bit(value, 4, 0)
        elif t in _ARITHMETIC:
            if t == PIMCmdType.MAD:
                cmd.src2 = PIMOpdType(from_bit(value, 3, 16))
            cmd.dst = PIMOpdType(from_bit(value, 3, 25))
            cmd.src0 = PIMOpdType(from_bit(value, 3, 22))
            cmd.src1 = PIMOpdType(from_bit(value, 3, 19))
            cmd.is_auto = bool(from_bit(value, 1, 15))
            cmd.dst_idx = from_bit(value, 4, 8)
            cmd.src0_idx = from_bit(value, 4, 4)
            cmd.src1_idx = from_bit(value, 4, 0)
        return cmd

    def validate(self) -> None:
        """Raise :class:`InvalidCommandError` for moves from a GRF into a bank."""
        if self.cmd_type in _MOVES and self.dst in _BANK_OPERANDS:
            if any(src in _GRF_OPERANDS for src in (self.src0, self.src1, self.src2)):
                raise InvalidCommandError(f"Invalid in ISA 1.0 {self.to_str()}")

    def to_int(self) -> int:
        """Encode the command as a 32-bit word."""
        self.validate()
        t = self.cmd_type
        val = to_bit(t, 4, 28)
        if t == PIMCmdType.NOP:
            val |= to_bit(self.loop_counter, 11, 0)
        elif t == PIMCmdType.JUMP:
            val |= to_bit(self.loop_counter, 17, 11)
            val |= to_bit(self.loop_offset, 11, 0)
        elif t in _MOVES:
            val |= to_bit(self.dst, 3, 25)
            val |= to_bit(self.src0, 3, 22)
            val |= to_bit(self.dst_idx, 4, 8)
            val |= to_bit(self.src0_idx, 4, 4)
            val |= to_bit(self.src1_idx, 4, 0)
            val |= to_bit(self.is_relu, 1, 12)
        elif t in _ARITHMETIC:
            if t == PIMCmdType.MAD:
                val |= to_bit(self.src2, 3, 16)
            val |= to_bit(self.dst, 3, 25)
            val |= to_bit(self.src0, 3, 22)
            val |= to_bit(self.src1, 3, 19)
            val |= to_bit(self.is_auto, 1, 15)
            val |= to_bit(self.dst_idx, 4, 8)
            val |= to_bit(self.src0_idx, 4, 4)
            val |= to_bit(self.src1_idx, 4, 0)
        return val

    def to_str(self) -> str:
        """Return the command in assembly notation."""
        t = self.cmd_type
        parts = cmd_to_str(t) + " "
        if t == PIMCmdType.NOP:
            parts += f"{self.loop_counter + 1}x"
        elif t == PIMCmdType.JUMP:
            parts += f"{self.loop_counter}x [PC - {self.loop_offset}]"
        elif t in _MOVES:
            parts += f"{opd_to_str(self.dst, self.dst_idx)}, {opd_to_str(self.src0, self.src0_idx)}"
            if self.is_relu:
                parts += ", relu"
        elif t in (PIMCmdType.ADD, PIMCmdType.MUL, PIMCmdType.MAC):
            parts += ", ".join(
                (
                    opd_to_str(self.dst, self.dst_idx),
                    opd_to_str(self.src0, self.src0_idx),
                    opd_to_str(self.src1, self.src1_idx),
                )
            )
        elif t == PIMCmdType.MAD:
            parts += ", ".join(
                (
                    opd_to_str(self.dst, self.dst_idx),
                    opd_to_str(self.src0, self.src0_idx),
                    opd_to_str(self.src1, self.src1_idx),
                    opd_to_str(self.src2, self.src1_idx),
                )
            )
        if self.is_auto:
            parts += ", auto"
        return parts

    def __str__(self) -> str:
        return self.to_str()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PIMCmd):
            return NotImplemented
        return self.to_int() == other.to_int()