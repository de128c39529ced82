"""Small integer helpers."""


def ulog2(value: int) -> int:
    """Return the base-2 logarithm of ``value`` rounded up; 0 for 0 and 1."""
    if value < 0:
        raise ValueError("value must not be negative")
    log_base2 = max(value.bit_length() - 1, 0)
    if (1 << log_base2) < value:
        log_base2 += 1
    return log_base2


def is_power_of_two(value: int) -> bool:
    """Return whether ``value`` is a power of two."""
    return (1 << ulog2(value)) == value


def bytes_to_gb(value: int) -> int:
    """Whole gibibytes in ``value`` bytes."""
    return value >> 30


def bytes_to_mb(value: int) -> int:
    """Whole mebibytes in ``value`` bytes."""
    return value >> 20


def bytes_to_kb(value: int) -> int:
    """Whole kibibytes in ``value`` bytes."""
    return value >> 10