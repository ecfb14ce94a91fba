"""Feedback reports decoded from CAN frames sent by the vehicle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from .frame import Header, get_bits, sign_extend

__all__ = ["InstrumentFb1", "InstrumentFb2"]

_DATA_LENGTH = 8

# Each layout entry: (attribute name, byte index, start bit, bit length, kind).
# kind is "int", "signed" or "bool".
_Layout = tuple[tuple[str, int, int, int, str], ...]


def _normalise(data: bytes | bytearray | list[int]) -> bytes:
    raw = bytes(data)
    if len(raw) > _DATA_LENGTH:
        raise ValueError(
            f"CAN payload carries at most {_DATA_LENGTH} bytes, got {len(raw)}"
        )
    return raw.ljust(_DATA_LENGTH, b"\x00")


def _decode(data: bytes | bytearray | list[int], layout: _Layout) -> dict[str, Any]:
    raw = _normalise(data)
    values: dict[str, Any] = {}
    for name, index, start, length, kind in layout:
        value = get_bits(raw[index], start, length)
        if kind == "signed":
            values[name] = sign_extend(value, length)
        elif kind == "bool":
            values[name] = bool(value)
        else:
            values[name] = value
    return values


@dataclass
class InstrumentFb1:
    """Gear, drive mode, doors, lights and windows status (frame 0x28D)."""

    ID: ClassVar[int] = 0x28D
    _LAYOUT: ClassVar[_Layout] = (
        ("gear_shift_sta", 0, 0, 3, "int"),
        ("eco_sta", 0, 3, 2, "int"),
        ("left_door_sta", 1, 0, 1, "bool"),
        ("right_door_sta", 1, 1, 1, "bool"),
        ("reserve", 1, 2, 1, "bool"),
        ("dome_light_sta", 1, 3, 1, "bool"),
        ("atmospherelightsp_sta", 1, 4, 1, "bool"),
        ("left_window_sta", 2, 0, 2, "signed"),
        ("right_window_sta", 2, 2, 2, "signed"),
    )

    gear_shift_sta: int = 0
    eco_sta: int = 0
    left_door_sta: bool = False
    right_door_sta: bool = False
    reserve: bool = False
    dome_light_sta: bool = False
    atmospherelightsp_sta: bool = False
    left_window_sta: int = 0
    right_window_sta: int = 0
    header: Header = field(default_factory=Header)

    @classmethod
    def parse(
        cls, data: bytes | bytearray | list[int], header: Header | None = None
    ) -> InstrumentFb1:
        """Decode the eight data bytes of a 0x28D frame."""
        return cls(header=header or Header(), **_decode(data, cls._LAYOUT))


@dataclass
class InstrumentFb2:
    """Defrost, air conditioning and ventilation status (frame 0x28F)."""

    ID: ClassVar[int] = 0x28F
    _LAYOUT: ClassVar[_Layout] = (
        ("defrost_sta", 0, 0, 8, "int"),
        ("air_cod_sta", 1, 0, 8, "int"),
        ("air_cod_gear_sta", 2, 0, 8, "int"),
        ("air_cod_mod_sta", 3, 0, 8, "int"),
        ("air_cod_temp_sta", 4, 0, 8, "int"),
        ("ventilation_mod_sta", 5, 0, 4, "int"),
        ("in_loop_mod_sta", 6, 0, 8, "int"),
        ("reserve", 7, 0, 8, "int"),
    )

    defrost_sta: int = 0
    air_cod_sta: int = 0
    air_cod_gear_sta: int = 0
    air_cod_mod_sta: int = 0
    air_cod_temp_sta: int = 0
    ventilation_mod_sta: int = 0
    in_loop_mod_sta: int = 0
    reserve: int = 0
    header: Header = field(default_factory=Header)

    @classmethod
    def parse(
        cls, data: bytes | bytearray | list[int], header: Header | None = None
    ) -> InstrumentFb2:
        """Decode the eight data bytes of a 0x28F frame."""
        return cls(header=header or Header(), **_decode(data, cls._LAYOUT))