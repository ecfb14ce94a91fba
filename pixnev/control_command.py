"""Control command node logic: encodes commands to CAN frames and tracks delays."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Optional, Union

from .commands import DtcCommand, InstrumentCommand1, InstrumentCommand2
from .frame import CanFrame

__all__ = [
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "PIX_CHASSIS_VERSION",
    "ERROR_THRESHOLD",
    "WARNING_THRESHOLD",
    "DelayRecording",
    "TimeoutThresholdMs",
    "ControlCommandParams",
    "DiagnosticStatus",
    "ControlCommand",
]

VERSION_MAJOR = 1
VERSION_MINOR = 1
PIX_CHASSIS_VERSION = VERSION_MAJOR * 10 + VERSION_MINOR

# Multiples of the driver period after which a missing command is reported.
ERROR_THRESHOLD = 5
WARNING_THRESHOLD = 3

Command = Union[InstrumentCommand1, InstrumentCommand2, DtcCommand]


@dataclass
class DelayRecording:
    """Running counts of late command arrivals at each severity."""

    count_error: int = 0
    count_warning: int = 0


@dataclass(frozen=True)
class TimeoutThresholdMs:
    """Delay thresholds in whole milliseconds, each stored in one byte."""

    error: int
    warning: int

    def __post_init__(self) -> None:
        for name in ("error", "warning"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} threshold out of range 0..255 ms: {value}")


@dataclass
class ControlCommandParams:
    """Settings of the control command node."""

    base_frame_id: str = "base_link"
    loop_rate: float = 50.0
    timeout_threshold_ms: TimeoutThresholdMs = field(
        default_factory=lambda: TimeoutThresholdMs(
            error=int(50.0 * ERROR_THRESHOLD), warning=int(50.0 * WARNING_THRESHOLD)
        )
    )

    def __post_init__(self) -> None:
        if self.loop_rate <= 0:
            raise ValueError(f"loop rate must be positive: {self.loop_rate}")

    @classmethod
    def from_period(
        cls,
        period_ms: float = 50.0,
        base_frame_id: str = "base_link",
        loop_rate: float = 50.0,
    ) -> ControlCommandParams:
        """Build settings whose thresholds are multiples of the driver period."""
        thresholds = TimeoutThresholdMs(
            error=int(period_ms * ERROR_THRESHOLD),
            warning=int(period_ms * WARNING_THRESHOLD),
        )
        return cls(
            base_frame_id=base_frame_id,
            loop_rate=loop_rate,
            timeout_threshold_ms=thresholds,
        )

    @property
    def period(self) -> float:
        """Timer period in seconds."""
        return 1.0 / self.loop_rate


@dataclass
class DiagnosticStatus:
    """A diagnostic report with a level, a summary and named values."""

    OK: ClassVar[int] = 0
    WARN: ClassVar[int] = 1
    ERROR: ClassVar[int] = 2
    STALE: ClassVar[int] = 3

    name: str
    hardware_id: str
    level: int
    message: str
    values: dict[str, str] = field(default_factory=dict)


_CHANNELS = ("instrument_command1", "instrument_command2", "dtc_command")


@dataclass
class _Channel:
    received_time: float
    subscribed: bool = False
    last_message: Optional[Command] = None
    delay: DelayRecording = field(default_factory=DelayRecording)


class ControlCommand:
    """Turns command messages into CAN frames and counts late arrivals."""

    NAME = "delayed_alarm"
    HARDWARE_ID = "pix_nev_driver-ControlCommand"

    def __init__(
        self,
        publish: Callable[[CanFrame], object],
        params: Optional[ControlCommandParams] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.params = params or ControlCommandParams.from_period()
        self._publish = publish
        self._clock = clock or time.monotonic
        now = self._clock()
        self._channels = {name: _Channel(received_time=now) for name in _CHANNELS}

    def delay(self, channel: str) -> DelayRecording:
        """Return the delay counts of ``channel``."""
        return self._channels[channel].delay

    def last_message(self, channel: str) -> Optional[Command]:
        """Return the last command received on ``channel``, if any."""
        return self._channels[channel].last_message

    def _receive(self, channel: str, msg: Command) -> CanFrame:
        state = self._channels[channel]
        state.subscribed = True
        state.received_time = self._clock()
        state.last_message = msg
        frame = msg.to_frame()
        self._publish(frame)
        return frame

    def callback_instrument_command1(self, msg: InstrumentCommand1) -> CanFrame:
        """Encode and publish an instrument command 1 message."""
        return self._receive("instrument_command1", msg)

    def callback_instrument_command2(self, msg: InstrumentCommand2) -> CanFrame:
        """Encode and publish an instrument command 2 message."""
        return self._receive("instrument_command2", msg)

    def callback_dtc_command(self, msg: DtcCommand) -> CanFrame:
        """Encode and publish a trouble code command message."""
        return self._receive("dtc_command", msg)

    def timer_callback(self) -> None:
        """Count commands that are overdue, once every command has arrived once."""
        if not all(state.subscribed for state in self._channels.values()):
            return
        now = self._clock()
        thresholds = self.params.timeout_threshold_ms
        for state in self._channels.values():
            delta_ms = (now - state.received_time) * 1000.0
            if delta_ms > thresholds.error:
                state.delay.count_error += 1
            elif delta_ms > thresholds.warning:
                state.delay.count_warning += 1

    def on_delayed_alarm(self) -> DiagnosticStatus:
        """Return the diagnostic report of delay counts."""
        values: dict[str, str] = {}
        for name, state in self._channels.items():
            values[f"{name} count_eorro"] = str(state.delay.count_error)
            values[f"{name} count_warn"] = str(state.delay.count_warning)
        return DiagnosticStatus(
            name=self.NAME,
            hardware_id=self.HARDWARE_ID,
            level=DiagnosticStatus.OK,
            message="[ReportConverter]: Timeout",
            values=values,
        )