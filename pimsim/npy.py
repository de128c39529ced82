"""Reading and writing of arrays in the NumPy ``.npy`` file format."""

from __future__ import annotations

import math
import re
import sys
from typing import BinaryIO, Iterable, Sequence

import numpy as np

MAGIC_STRING = b"\x93NUMPY"
MAGIC_STRING_LENGTH = len(MAGIC_STRING)

LITTLE_ENDIAN_CHAR = "<"
BIG_ENDIAN_CHAR = ">"
NO_ENDIAN_CHAR = "|"
HOST_ENDIAN_CHAR = BIG_ENDIAN_CHAR if sys.byteorder == "big" else LITTLE_ENDIAN_CHAR

HEADER_KEYS = ("descr", "fortran_order", "shape")

_TYPESTRING_RE = re.compile(r"'([<>|])([ifuc])(\d+)'")
_WHITESPACE = " \t"
_BOOL_LITERALS = {True: "True", False: "False"}
_BOOL_VALUES = {literal: value for value, literal in _BOOL_LITERALS.items()}


class NpyError(ValueError):
    """Raised when an ``.npy`` stream is malformed or cannot be read or written."""


def write_magic(stream: BinaryIO, major: int = 1, minor: int = 0) -> None:
    """Write the magic string followed by the format version."""
    stream.write(MAGIC_STRING)
    stream.write(bytes([major, minor]))


def read_magic(stream: BinaryIO) -> tuple[int, int]:
    """Read and check the magic string; return ``(major, minor)``."""
    buf = stream.read(MAGIC_STRING_LENGTH + 2)
    if len(buf) < MAGIC_STRING_LENGTH + 2:
        raise NpyError("io error: failed reading file")
    if buf[:MAGIC_STRING_LENGTH] != MAGIC_STRING:
        raise NpyError("this file does not have a valid npy format.")
    return buf[MAGIC_STRING_LENGTH], buf[MAGIC_STRING_LENGTH + 1]


def parse_typestring(typestring: str) -> None:
    """Check that a quoted typestring such as ``'<f4'`` is well formed."""
    if _TYPESTRING_RE.fullmatch(typestring) is None:
        raise NpyError("invalid typestring")


def trim(text: str) -> str:
    """Remove leading and trailing spaces and tabs."""
    return text.strip(_WHITESPACE)


def get_value_from_map(mapstr: str) -> str:
    """Return the trimmed text after the first colon, or an empty string."""
    _, sep, rest = mapstr.partition(":")
    if not sep:
        return ""
    return trim(rest)


def parse_dict(text: str, keys: Iterable[str]) -> dict[str, str]:
    """Parse the text of a Python dict whose keys are known in advance.

    The values are returned as raw, trimmed strings.
    """
    keys = list(keys)
    if not keys:
        return {}

    text = trim(text)
    if len(text) >= 2 and text[0] == "{" and text[-1] == "}":
        text = text[1:-1]
    else:
        raise NpyError("Not a Python dictionary.")

    positions = []
    for key in keys:
        pos = text.find(f"'{key}'")
        if pos < 0:
            raise NpyError(f"Missing '{key}' key.")
        positions.append((pos, key))
    positions.sort()

    result: dict[str, str] = {}
    ends = [pos for pos, _ in positions[1:]] + [len(text)]
    for (begin, key), end in zip(positions, ends):
        raw_value = trim(text[begin:end])
        if raw_value.endswith(","):
            raw_value = raw_value[:-1]
        result[key] = get_value_from_map(raw_value)
    return result


def parse_bool(text: str) -> bool:
    """Parse a Python boolean literal."""
    try:
        return _BOOL_VALUES[text]
    except KeyError:
        raise NpyError("Invalid Python boolean.") from None


def parse_str(text: str) -> str:
    """Parse a single-quoted Python string literal."""
    if text and text[0] == "'" and text[-1] == "'":
        return text[1:-1]
    raise NpyError("Invalid Python string.")


def parse_tuple(text: str) -> list[str]:
    """Split the text of a Python tuple into its raw items."""
    text = trim(text)
    if len(text) >= 2 and text[0] == "(" and text[-1] == ")":
        text = text[1:-1]
    else:
        raise NpyError("Invalid Python tuple.")
    items = text.split(",")
    if items[-1] == "":
        items.pop()
    return items


def write_tuple(values: Sequence[object]) -> str:
    """Format values as a Python tuple literal; an empty sequence gives ``""``."""
    if not values:
        return ""
    if len(values) == 1:
        return f"({values[0]},)"
    return "(" + ", ".join(str(v) for v in values) + ")"


def write_boolean(value: bool) -> str:
    """Format a Python boolean literal."""
    return _BOOL_LITERALS[bool(value)]


def parse_header(header: str) -> tuple[str, bool, list[int]]:
    """Parse a header dictionary; return ``(descr, fortran_order, shape)``."""
    if not header.endswith("\n"):
        raise NpyError("invalid header")
    header = header[:-1]

    values = parse_dict(header, HEADER_KEYS)
    if not values:
        raise NpyError("invalid dictionary in header")

    descr_s = values["descr"]
    parse_typestring(descr_s)
    descr = parse_str(descr_s)
    fortran_order = parse_bool(values["fortran_order"])

    items = parse_tuple(values["shape"])
    if not items:
        raise NpyError("invalid shape tuple in header")
    shape = []
    for item in items:
        try:
            dim = int(item)
        except ValueError as exc:
            raise NpyError(f"invalid shape entry: {item!r}") from exc
        if dim < 0:
            raise NpyError(f"invalid shape entry: {item!r}")
        shape.append(dim)
    return descr, fortran_order, shape


def write_header_dict(descr: str, fortran_order: bool, shape: Sequence[int]) -> str:
    """Format the header dictionary."""
    return (
        "{'descr': '" + descr + "', 'fortran_order': " + write_boolean(fortran_order)
        + ", 'shape': " + write_tuple(shape) + ", }"
    )


def write_header(stream: BinaryIO, descr: str, fortran_order: bool, shape: Sequence[int]) -> None:
    """Write magic string, version, header length and padded header dictionary."""
    header_dict = write_header_dict(descr, fortran_order, shape)

    length = MAGIC_STRING_LENGTH + 2 + 2 + len(header_dict) + 1
    version = (1, 0)
    if length >= 255 * 255:
        length = MAGIC_STRING_LENGTH + 2 + 4 + len(header_dict) + 1
        version = (2, 0)
    padding = " " * (16 - length % 16)

    write_magic(stream, *version)
    header_len = len(header_dict) + len(padding) + 1
    if version == (1, 0):
        stream.write(header_len.to_bytes(2, "little"))
    else:
        stream.write(header_len.to_bytes(4, "little"))
    stream.write((header_dict + padding + "\n").encode("latin-1"))


def read_header(stream: BinaryIO) -> str:
    """Read the magic string and return the raw header text."""
    version = read_magic(stream)
    if version == (1, 0):
        width = 2
    elif version == (2, 0):
        width = 4
    else:
        raise NpyError("unsupported file format version")

    length_bytes = stream.read(width)
    if len(length_bytes) < width:
        raise NpyError("io error: failed reading file")
    header_length = int.from_bytes(length_bytes, "little")

    raw = stream.read(header_length)
    if len(raw) < header_length:
        raise NpyError("io error: failed reading file")
    return raw.decode("latin-1")


def comp_size(shape: Iterable[int]) -> int:
    """Return the number of elements of an array of the given shape."""
    return math.prod(shape)


def typestring_for(dtype: object) -> str:
    """Return the typestring written for elements of ``dtype``.

    Unsigned 16-bit elements are taken to hold raw half-precision bits and
    are described as ``f2``.
    """
    dt = np.dtype(dtype)
    size = dt.itemsize
    kind = dt.kind
    if kind in "fci":
        code = kind
    elif kind == "u":
        code = "f" if size == 2 else "u"
    else:
        raise NpyError(f"unsupported element type: {dt}")
    endian = NO_ENDIAN_CHAR if size == 1 else HOST_ENDIAN_CHAR
    return f"{endian}{code}{size}"


def save_array(
    filename: str,
    data: object,
    shape: Sequence[int] | None = None,
    fortran_order: bool = False,
) -> None:
    """Write ``data`` to ``filename`` in ``.npy`` format.

    ``shape`` defaults to the shape of ``data``; the first ``comp_size(shape)``
    elements are written in host byte order.
    """
    arr = np.asarray(data)
    typestring = typestring_for(arr.dtype)
    arr = arr.astype(arr.dtype.newbyteorder("="), copy=False)
    shape_v = list(arr.shape if shape is None else shape)
    flat = np.ravel(arr, order="F" if fortran_order else "C")
    size = comp_size(shape_v)
    if flat.size < size:
        raise NpyError(f"data holds {flat.size} elements, shape needs {size}")

    try:
        stream = open(filename, "wb")
    except OSError as exc:
        raise NpyError("io error: failed to open a file.") from exc
    with stream:
        write_header(stream, typestring, fortran_order, shape_v)
        stream.write(flat[:size].tobytes())


def load_array(filename: str, dtype: object) -> tuple[tuple[int, ...], np.ndarray]:
    """Read an ``.npy`` file of elements of ``dtype``.

    Returns the shape and the flat data in file order.
    """
    expected = typestring_for(dtype)
    native = np.dtype(dtype).newbyteorder("=")
    try:
        stream = open(filename, "rb")
    except OSError as exc:
        raise NpyError("io error: failed to open a file.") from exc
    with stream:
        header = read_header(stream)
        descr, _fortran_order, shape = parse_header(header)
        if descr != expected:
            raise NpyError("formatting error: typestrings not matching")
        size = comp_size(shape)
        nbytes = size * native.itemsize
        raw = stream.read(nbytes)
    if len(raw) < nbytes:
        raise NpyError("io error: failed reading file")
    return tuple(shape), np.frombuffer(raw, dtype=native, count=size).copy()