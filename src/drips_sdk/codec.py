"""
Drips receiver configuration codec.

A DripsReceiverConfig travels to the contract as a single uint256:

    bits 224-255  reserved (zero on encode, ignored on decode)
    bits  64-223  amount_per_sec
    bits  32-63   start
    bits   0-31   duration

Integer conversions between transport words and Python ints go through
to_uint / to_int / from_uint so that no value is silently truncated.
"""

from typing import Any

from ._exceptions import ArgumentError, ArgumentRangeError, ConfigRangeError
from .constants import (
    AMT_PER_SEC_BITS,
    AMT_PER_SEC_OFFSET,
    DURATION_BITS,
    DURATION_OFFSET,
    START_BITS,
    START_OFFSET,
)
from .types import DripsReceiver, DripsReceiverConfig

# Config fields in packing order, with their segment widths.
CONFIG_FIELDS: tuple[tuple[str, int, int], ...] = (
    ("amount_per_sec", AMT_PER_SEC_BITS, AMT_PER_SEC_OFFSET),
    ("start", START_BITS, START_OFFSET),
    ("duration", DURATION_BITS, DURATION_OFFSET),
)


def _mask(bits: int) -> int:
    return (1 << bits) - 1


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def to_uint(value: Any, bits: int, name: str) -> int:
    """
    Convert a semantic integer into an unsigned transport word of `bits` width.

    Raises:
        ArgumentRangeError: If value is not an int or does not fit.
    """
    if not _is_int(value):
        raise ArgumentRangeError(f"'{name}' must be an integer, got {type(value).__name__}", name, value)
    if value < 0 or value > _mask(bits):
        raise ArgumentRangeError(f"'{name}' must fit in uint{bits}, got {value}", name, value)
    return value


def to_int(value: Any, bits: int, name: str) -> int:
    """Signed counterpart of to_uint (two's complement range of `bits`)."""
    if not _is_int(value):
        raise ArgumentRangeError(f"'{name}' must be an integer, got {type(value).__name__}", name, value)
    bound = 1 << (bits - 1)
    if not -bound <= value < bound:
        raise ArgumentRangeError(f"'{name}' must fit in int{bits}, got {value}", name, value)
    return value


def from_uint(raw: Any, bits: int, name: str) -> int:
    """
    Convert a value decoded by a transport back into a Python int.

    Accepts ints (web3) and decimal or 0x-prefixed strings (subgraph BigInt).
    """
    if isinstance(raw, str):
        try:
            raw = int(raw, 0) if raw.lower().startswith("0x") else int(raw)
        except ValueError as e:
            raise ArgumentRangeError(f"'{name}' is not an integer: {raw!r}", name, raw) from e
    return to_uint(raw, bits, name)


def check_config_ranges(config: DripsReceiverConfig, error: type[ArgumentError] = ConfigRangeError) -> None:
    """Raise `error` if any config field is negative or wider than its segment."""
    for field, bits, _ in CONFIG_FIELDS:
        value = getattr(config, field)
        if value < 0:
            raise error(f"Drips receiver config '{field}' must be >= 0, got {value}", field, value)
        if value > _mask(bits):
            raise error(f"Drips receiver config '{field}' must fit in {bits} bits, got {value}", field, value)


def pack_config(config: DripsReceiverConfig) -> int:
    """
    Pack a DripsReceiverConfig into its uint256 representation.

    Raises:
        ConfigRangeError: If a field is negative or does not fit its segment.

    Example:
        >>> pack_config(DripsReceiverConfig(start=0, duration=0, amount_per_sec=1000))
        18446744073709551616000
    """
    check_config_ranges(config)

    packed = 0
    for field, _, offset in CONFIG_FIELDS:
        packed |= getattr(config, field) << offset
    return packed


def unpack_config(value: int) -> DripsReceiverConfig:
    """
    Unpack a uint256 into a DripsReceiverConfig.

    The reserved high bits are ignored.

    Raises:
        ArgumentRangeError: If value is not a uint256.
    """
    value = to_uint(value, 256, "config")
    return DripsReceiverConfig(**{field: (value >> offset) & _mask(bits) for field, bits, offset in CONFIG_FIELDS})


def pack_receiver(receiver: DripsReceiver) -> tuple[int, int]:
    """Convert a DripsReceiver to the on-chain (userId, config) tuple."""
    return (receiver.user_id, pack_config(receiver.config))


def unpack_receiver(raw: tuple[int, int] | list[int]) -> DripsReceiver:
    """Convert an on-chain (userId, config) tuple to a DripsReceiver."""
    user_id, config = raw
    return DripsReceiver(
        user_id=from_uint(user_id, 256, "user_id"),
        config=unpack_config(from_uint(config, 256, "config")),
    )
