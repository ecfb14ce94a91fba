"""Control command messages and their encoding into CAN frames."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .frame import CanFrame, Header, set_bits

__all__ = ["InstrumentCommand1", "InstrumentCommand2", "DtcCommand"]

# Each layout entry: (attribute name, byte index, start bit, bit length).
_Layout = tuple[tuple[str, int, int, int], ...]


def _encode(message: object, layout: _Layout) -> bytes:
    data = bytearray(8)
    for name, index, start, length in layout:
        data[index] = set_bits(data[index], int(getattr(message, name)), start, length)
    return bytes(data)


def _frame(frame_id: int, header: Header, data: bytes) -> CanFrame:
    return CanFrame(
        id=frame_id,
        data=data,
        dlc=8,
        is_extended=False,
        header=Header(stamp=header.stamp),
    )


@dataclass
class InstrumentCommand1:
    """Gear, drive mode, doors, lights and windows control (frame 0x28A)."""

    ID: ClassVar[int] = 0x28A
    _LAYOUT: ClassVar[_Layout] = (
        ("gear_shift_ctrl", 0, 0, 3),
        ("eoc_mode_shift_ctrl", 0, 3, 2),
        ("left_door_ctrl", 1, 0, 1),
        ("right_door_ctrl", 1, 1, 1),
        ("emergency_button_ctrl", 1, 2, 1),
        ("dome_light_ctrl", 1, 3, 1),
        ("atmospherelightsp_ctrl", 1, 4, 1),
        ("left_window_ctrl", 2, 0, 2),
        ("right_window_ctrl", 2, 2, 2),
    )

    gear_shift_ctrl: int = 0
    eoc_mode_shift_ctrl: int = 0
    left_door_ctrl: bool = False
    right_door_ctrl: bool = False
    emergency_button_ctrl: bool = False
    dome_light_ctrl: bool = False
    atmospherelightsp_ctrl: bool = False
    left_window_ctrl: int = 0
    right_window_ctrl: int = 0
    header: Header = field(default_factory=Header)

    def encode(self) -> bytes:
        """Return the eight data bytes for this command."""
        return _encode(self, self._LAYOUT)

    def to_frame(self) -> CanFrame:
        """Return a standard CAN frame carrying this command."""
        return _frame(self.ID, self.header, self.encode())


@dataclass
class InstrumentCommand2:
    """Defrost, air conditioning and ventilation control (frame 0x28B)."""

    ID: ClassVar[int] = 0x28B
    _LAYOUT: ClassVar[_Layout] = (
        ("defrost_ctrl", 0, 0, 8),
        ("air_cod_ctrl", 1, 0, 8),
        ("air_cod_gear_ctrl", 2, 0, 8),
        ("air_cod_mod_ctrl", 3, 0, 8),
        ("air_cod_temp_ctrl", 4, 0, 8),
        ("ventilation_mod_ctrl", 5, 0, 4),
        ("in_loop_mod_ctrl", 6, 0, 8),
        ("reserve", 7, 0, 8),
    )

    defrost_ctrl: int = 0
    air_cod_ctrl: int = 0
    air_cod_gear_ctrl: int = 0
    air_cod_mod_ctrl: int = 0
    air_cod_temp_ctrl: int = 0
    ventilation_mod_ctrl: int = 0
    in_loop_mod_ctrl: int = 0
    reserve: int = 0
    header: Header = field(default_factory=Header)

    def encode(self) -> bytes:
        """Return the eight data bytes for this command."""
        return _encode(self, self._LAYOUT)

    def to_frame(self) -> CanFrame:
        """Return a standard CAN frame carrying this command."""
        return _frame(self.ID, self.header, self.encode())


@dataclass
class DtcCommand:
    """Diagnostic trouble code command (frame 0x28C)."""

    ID: ClassVar[int] = 0x28C
    _LAYOUT: ClassVar[_Layout] = (("csc_flt_code1", 0, 0, 8),)

    csc_flt_code1: int = 0
    header: Header = field(default_factory=Header)

    def encode(self) -> bytes:
        """Return the eight data bytes for this command."""
        return _encode(self, self._LAYOUT)

    def to_frame(self) -> CanFrame:
        """Return a standard CAN frame carrying this command."""
        return _frame(self.ID, self.header, self.encode())