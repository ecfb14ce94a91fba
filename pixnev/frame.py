"""CAN frame container and bit-level helpers for single data bytes."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["Header", "CanFrame", "get_bits", "set_bits", "sign_extend"]

_BYTE_MASK = 0xFF
_MAX_DATA_LENGTH = 8


def _check_byte(byte: int) -> None:
    if not 0 <= byte <= _BYTE_MASK:
        raise ValueError(f"byte value out of range 0..255: {byte}")


def _check_span(start: int, length: int) -> None:
    if length < 1 or start < 0 or start + length > 8:
        raise ValueError(
            f"bit span start={start} length={length} does not fit in one byte"
        )


def get_bits(byte: int, start: int, length: int) -> int:
    """Return the unsigned value of ``length`` bits of ``byte`` beginning at bit ``start``."""
    _check_byte(byte)
    _check_span(start, length)
    return (byte >> start) & ((1 << length) - 1)


def set_bits(byte: int, value: int, start: int, length: int) -> int:
    """Add ``value``, truncated to ``length`` bits, into ``byte`` at bit ``start``.

    The field is added to the existing byte (wrapping at 8 bits), so fields are
    expected to be written into bits that are still clear.
    """
    _check_byte(byte)
    _check_span(start, length)
    field_value = (value & ((1 << length) - 1)) << start
    return (byte + field_value) & _BYTE_MASK


def sign_extend(value: int, bits: int) -> int:
    """Interpret the low ``bits`` bits of ``value`` as a two's-complement number."""
    if bits < 1:
        raise ValueError(f"bit width must be positive: {bits}")
    value &= (1 << bits) - 1
    if value & (1 << (bits - 1)):
        value -= 1 << bits
    return value


@dataclass
class Header:
    """Timestamp and coordinate frame carried alongside a message."""

    stamp: float = 0.0
    frame_id: str = ""


@dataclass
class CanFrame:
    """A classic CAN frame with up to eight data bytes."""

    id: int
    data: bytes = field(default_factory=lambda: bytes(_MAX_DATA_LENGTH))
    dlc: int = _MAX_DATA_LENGTH
    is_extended: bool = False
    header: Header = field(default_factory=Header)

    def __post_init__(self) -> None:
        self.data = bytes(self.data)
        if len(self.data) > _MAX_DATA_LENGTH:
            raise ValueError(
                f"CAN frame carries at most {_MAX_DATA_LENGTH} bytes, got {len(self.data)}"
            )
        if not 0 <= self.dlc <= _MAX_DATA_LENGTH:
            raise ValueError(f"dlc out of range 0..8: {self.dlc}")