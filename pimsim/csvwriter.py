"""CSV output whose header is taken from the field names of the first record."""

from __future__ import annotations

import sys
from typing import TextIO


class IndexedName:
    """A field name with one to three bracketed indices, such as ``name[0][1]``."""

    MAX_TMP_STR = 64
    SINGLE_INDEX_LEN = 4

    def __init__(self, base_name: str, *indices: int) -> None:
        if not 1 <= len(indices) <= 3:
            raise ValueError("an indexed name takes one to three indices")
        self.check_name_length(base_name, len(indices))
        text = base_name + "".join(f"[{int(i)}]" for i in indices)
        self.text = text[: self.MAX_TMP_STR - 1]

    @staticmethod
    def is_name_too_long(base_name: str, num_indices: int) -> bool:
        """Return whether the name would not fit in the maximum length."""
        return (
            len(base_name) + num_indices * IndexedName.SINGLE_INDEX_LEN
            > IndexedName.MAX_TMP_STR
        )

    @staticmethod
    def check_name_length(base_name: str, num_indices: int) -> None:
        """Raise ``ValueError`` if the name is too long."""
        if IndexedName.is_name_too_long(base_name, num_indices):
            raise ValueError(
                f"Your string {base_name} is too long for the max stats size "
                f"({IndexedName.MAX_TMP_STR}), increase MAX_TMP_STR"
            )

    def __str__(self) -> str:
        return self.text


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class CSVWriter:
    """Writes CSV records, taking the header from the names given before the first finalize.

    Before the first :meth:`finalize` names are collected and values are
    ignored; that call writes the header. Afterwards names are ignored and
    each :meth:`finalize` ends a record of values.
    """

    def __init__(self, output: TextIO) -> None:
        self.output = output
        self.field_names: list[str] = []
        self._finalized = False
        self._idx = 0

    @property
    def finalized(self) -> bool:
        """Whether the header has been written."""
        return self._finalized

    def add_field(self, name: str | IndexedName) -> CSVWriter:
        """Record a field name while the header is still being collected."""
        if not self._finalized:
            self.field_names.append(str(name))
        return self

    def add_value(self, value: int | float) -> CSVWriter:
        """Write a value once the header has been written."""
        if self._finalized:
            self.output.write(f"{_format_value(value)},")
            self._idx += 1
        return self

    def __lshift__(self, item: object) -> CSVWriter:
        if isinstance(item, (str, IndexedName)):
            return self.add_field(item)
        return self.add_value(item)

    def finalize(self) -> None:
        """Write the header the first time, then end the current record."""
        if not self._finalized:
            self.output.write("".join(f"{name}," for name in self.field_names))
            self.output.write("\n")
            self.output.flush()
            self._finalized = True
            return
        if self._idx < len(self.field_names):
            print(
                f" Number of fields doesn't match values "
                f"(fields={len(self.field_names)}, values={self._idx}), "
                "check each value has a field name before it",
                file=sys.stdout,
            )
        self._idx = 0
        self.output.write("\n")