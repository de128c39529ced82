"""Memory transactions issued to the simulated memory system."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Sequence


class TransactionType(IntEnum):
    """Kind of a memory transaction."""

    DATA_READ = 0
    DATA_WRITE = 1
    RETURN_DATA = 2


class BusPacketType(Enum):
    """Commands carried on the command and data buses."""

    READ = "READ"
    WRITE = "WRITE"
    ACTIVATE = "ACTIVATE"
    PRECHARGE = "PRECHARGE"
    REF = "REF"
    DATA = "DATA"


class RowBufferPolicy(str, Enum):
    """How a bank's row buffer is handled after an access."""

    OPEN_PAGE = "open_page"
    CLOSE_PAGE = "close_page"


_ALLOWED_ROW_BUFFER_POLICIES = (RowBufferPolicy.OPEN_PAGE,)

_PACKET_TYPES = {
    TransactionType.DATA_READ: BusPacketType.READ,
    TransactionType.DATA_WRITE: BusPacketType.WRITE,
}


def _format_data(data: Sequence[object] | None) -> str:
    if data is None:
        return ""
    return " ".join(str(v) for v in data)


@dataclass
class Transaction:
    """A read, write or returned-data transaction at one address."""

    transaction_type: TransactionType
    address: int
    data: Sequence[object] | None = None
    tag: str = ""
    time_added: int = 0
    time_returned: int = 0
    row_buffer_policy: RowBufferPolicy = RowBufferPolicy.OPEN_PAGE

    def bus_packet_type(self) -> BusPacketType:
        """Return the bus command that carries out this transaction.

        Raises ``ValueError`` for an unsupported row buffer policy or for a
        transaction type that has no bus command.
        """
        if self.row_buffer_policy not in _ALLOWED_ROW_BUFFER_POLICIES:
            raise ValueError("Unknown row buffer policy")
        try:
            return _PACKET_TYPES[self.transaction_type]
        except KeyError:
            raise ValueError(
                "This transaction type doesn't have a corresponding bus packet type"
            ) from None

    def __str__(self) -> str:
        addr = f"[0x{self.address:x}]"
        if self.transaction_type == TransactionType.DATA_READ:
            return f"T [Read] {addr}"
        if self.transaction_type == TransactionType.DATA_WRITE:
            return f"T [Write] {addr} [{_format_data(self.data)}]"
        return f"T [Data] {addr} [{_format_data(self.data)}]"