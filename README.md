# pixnev

`pixnev` turns instrument-panel and diagnostic commands for a PIX NEV chassis
into 8-byte CAN frames. It also decodes the chassis' instrument feedback
frames into structured messages. It needs nothing outside the standard library.

## Modules

| Module | Contents |
| --- | --- |
| `pixnev.frame` | `Header`, `CanFrame`, and the bit helpers `get_bits`, `set_bits` and `sign_extend` |
| `pixnev.commands` | `InstrumentCommand1`, `InstrumentCommand2` and `DtcCommand`. Each has `encode()` and `to_frame()` |
| `pixnev.feedback` | `InstrumentFb1` and `InstrumentFb2`. Each has a `parse(data, header)` class method |
| `pixnev.control_command` | `ControlCommand`, `ControlCommandParams`, `DelayRecording`, `TimeoutThresholdMs`, `DiagnosticStatus` and the version and threshold constants |

## CAN identifiers

Every message class has its identifier in the class attribute `ID`. All
frames are standard (11-bit) frames with a DLC of 8.

| Direction | Message | ID |
| --- | --- | --- |
| to chassis | `InstrumentCommand1` | `0x28A` |
| to chassis | `InstrumentCommand2` | `0x28B` |
| to chassis | `DtcCommand` | `0x28C` |
| from chassis | `InstrumentFb1` | `0x28D` |
| from chassis | `InstrumentFb2` | `0x28F` |

## Signal layout

Bit 0 is the least significant bit of a byte.

`InstrumentCommand1` and `InstrumentFb1`:

- byte 0: gear shift in bits 0–2 and eco mode in bits 3–4.
- byte 1: left door, right door, emergency button, dome light and ambient
  light in bits 0 to 4. In the feedback, bit 2 is the `reserve` flag instead
  of the emergency button.
- byte 2: left window in bits 0–1 and right window in bits 2–3. The feedback
  decodes these 2-bit fields as signed values, so a raw 2 reads as -2 and a
  raw 3 reads as -1.

`InstrumentCommand2` and `InstrumentFb2` have one signal per byte. Bytes 0 to
7 hold, in order:

1. defrost
2. air conditioning
3. air conditioning gear
4. air conditioning mode
5. temperature in °C
6. ventilation mode (low 4 bits only)
7. in-loop mode
8. a reserved value

`DtcCommand` has one signal, `csc_flt_code1`, in byte 0.

## Bit helpers

- `get_bits(byte, start, length)` returns a field of one byte as an unsigned
  number.
- `set_bits(byte, value, start, length)` truncates `value` to `length` bits
  and adds it into `byte` at `start`. The result wraps at 8 bits.
- `sign_extend(value, bits)` reads the low `bits` bits of `value` as a
  two's-complement number.

These helpers raise `ValueError` in three cases: a byte outside 0–255, a
field that does not fit in one byte, and a width that is not positive.
`CanFrame` also raises `ValueError` if it has more than 8 data bytes or a
`dlc` outside 0–8.

## Encoding a command

Commands are dataclasses whose fields all default to zero or `False`.
`encode()` truncates each value to the width of its field.

```python
from pixnev.commands import InstrumentCommand1

command = InstrumentCommand1(
    gear_shift_ctrl=3,
    eoc_mode_shift_ctrl=1,
    left_door_ctrl=True,
    dome_light_ctrl=True,
    left_window_ctrl=1,
    right_window_ctrl=2,
)
command.encode()           # b"\x0b\x09\x09\x00\x00\x00\x00\x00"
frame = command.to_frame() # CanFrame(id=0x28A, dlc=8, is_extended=False, ...)
```

`to_frame()` copies the command's `header.stamp` into the frame's header.

## Decoding feedback

`parse` takes up to 8 data bytes. A shorter payload is padded with zero
bytes, and a longer one raises `ValueError`. The header you pass, or an empty
`Header`, is attached to the result.

```python
from pixnev.feedback import InstrumentFb1, InstrumentFb2
from pixnev.frame import Header

decoders = {cls.ID: cls for cls in (InstrumentFb1, InstrumentFb2)}

decoder = decoders.get(frame.id)
if decoder is not None:
    report = decoder.parse(
        frame.data, Header(stamp=frame.header.stamp, frame_id="base_link")
    )
```

## Sending commands and watching for delays

`ControlCommand` encodes each command it is given. It hands the frame to a
`publish` callable and also returns it. It records when each of its three
channels last received a command: `"instrument_command1"`,
`"instrument_command2"` and `"dtc_command"`. The clock defaults to
`time.monotonic`.

Each call to `timer_callback()` measures how long ago each channel last
received a command. If that is more than the error threshold, the channel's
error count goes up by one. Otherwise, if it is more than the warning
threshold, the warning count goes up by one. Nothing is counted until all
three channels have received a command at least once.

`ControlCommandParams.from_period(period_ms, base_frame_id, loop_rate)` sets
the error threshold to five periods and the warning threshold to three. The
defaults are a 50 ms period, giving thresholds of 250 ms and 150 ms. Each
threshold must fit in 0–255 ms, so a period above 51 ms raises `ValueError`.

```python
from pixnev.commands import DtcCommand, InstrumentCommand1, InstrumentCommand2
from pixnev.control_command import ControlCommand, ControlCommandParams

sent = []
now = [0.0]
node = ControlCommand(
    publish=sent.append,
    params=ControlCommandParams.from_period(50.0),
    clock=lambda: now[0],
)
node.callback_instrument_command1(InstrumentCommand1(gear_shift_ctrl=1))
node.callback_instrument_command2(InstrumentCommand2(air_cod_temp_ctrl=22))
node.callback_dtc_command(DtcCommand())

now[0] = 0.2                       # 200 ms later
node.timer_callback()
node.delay("dtc_command")          # DelayRecording(count_error=0, count_warning=1)
node.last_message("dtc_command")   # the DtcCommand given above

status = node.on_delayed_alarm()
status.values["dtc_command count_warn"]   # "1"
```

`on_delayed_alarm()` returns a `DiagnosticStatus` at level
`DiagnosticStatus.OK`. Its `values` map has the keys `"<channel> count_eorro"`
and `"<channel> count_warn"`, each holding a count as a string.

## What the package does not do

`pixnev` does no input or output. It does not open a CAN interface or read
frames from a bus, and it does not run a timer. You call `timer_callback()`
yourself, for example every `params.period` seconds. There is also no class
that takes received frames and sends each one to the right feedback decoder,
so you match `frame.id` against `InstrumentFb1.ID` and `InstrumentFb2.ID`
yourself, as in the example above.