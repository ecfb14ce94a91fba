import pytest

from pixnev.commands import DtcCommand, InstrumentCommand1, InstrumentCommand2
from pixnev.control_command import (
    ERROR_THRESHOLD,
    WARNING_THRESHOLD,
    ControlCommand,
    ControlCommandParams,
    DelayRecording,
    DiagnosticStatus,
    TimeoutThresholdMs,
)
from pixnev.frame import Header


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def setup():
    clock = FakeClock()
    sent = []
    node = ControlCommand(sent.append, ControlCommandParams.from_period(50.0), clock)
    return node, clock, sent


def _feed_all(node):
    node.callback_instrument_command1(InstrumentCommand1())
    node.callback_instrument_command2(InstrumentCommand2())
    node.callback_dtc_command(DtcCommand())


def test_thresholds_from_period():
    params = ControlCommandParams.from_period(50.0)
    assert params.timeout_threshold_ms.error == 50 * ERROR_THRESHOLD
    assert params.timeout_threshold_ms.warning == 50 * WARNING_THRESHOLD
    assert params.base_frame_id == "base_link"
    assert params.period == pytest.approx(1 / params.loop_rate)


def test_threshold_out_of_byte_range():
    with pytest.raises(ValueError):
        TimeoutThresholdMs(error=300, warning=10)
    with pytest.raises(ValueError):
        ControlCommandParams.from_period(100.0)


def test_invalid_loop_rate():
    with pytest.raises(ValueError):
        ControlCommandParams(loop_rate=0.0)


def test_callback_publishes_encoded_frame(setup):
    node, _, sent = setup
    msg = InstrumentCommand1(gear_shift_ctrl=3, left_door_ctrl=True, header=Header(stamp=5.0))
    frame = node.callback_instrument_command1(msg)
    assert sent == [frame]
    assert frame.id == 0x28A
    assert frame.data == msg.encode()
    assert frame.dlc == 8
    assert frame.is_extended is False
    assert frame.header.stamp == 5.0
    assert node.last_message("instrument_command1") is msg


def test_other_callbacks_use_their_ids(setup):
    node, _, sent = setup
    node.callback_instrument_command2(InstrumentCommand2(air_cod_temp_ctrl=22))
    node.callback_dtc_command(DtcCommand(csc_flt_code1=7))
    assert [f.id for f in sent] == [0x28B, 0x28C]
    assert sent[1].data == DtcCommand(csc_flt_code1=7).encode()


def test_timer_waits_for_all_commands(setup):
    node, clock, _ = setup
    node.callback_instrument_command1(InstrumentCommand1())
    node.callback_instrument_command2(InstrumentCommand2())
    clock.now += 10.0
    node.timer_callback()
    assert node.delay("instrument_command1") == DelayRecording()


def test_timer_no_delay(setup):
    node, clock, _ = setup
    _feed_all(node)
    clock.now += 0.05
    node.timer_callback()
    for name in ("instrument_command1", "instrument_command2", "dtc_command"):
        assert node.delay(name) == DelayRecording()


def test_timer_warning_and_error(setup):
    node, clock, _ = setup
    _feed_all(node)
    clock.now += 0.2
    node.timer_callback()
    assert node.delay("dtc_command") == DelayRecording(count_error=0, count_warning=1)
    clock.now += 0.1
    node.timer_callback()
    assert node.delay("dtc_command") == DelayRecording(count_error=1, count_warning=1)


def test_fresh_message_resets_delay_window(setup):
    node, clock, _ = setup
    _feed_all(node)
    clock.now += 1.0
    node.callback_dtc_command(DtcCommand())
    node.timer_callback()
    assert node.delay("dtc_command").count_error == 0
    assert node.delay("instrument_command1").count_error == 1


def test_diagnostic_report(setup):
    node, clock, _ = setup
    _feed_all(node)
    clock.now += 1.0
    node.timer_callback()
    status = node.on_delayed_alarm()
    assert status.level == DiagnosticStatus.OK
    assert status.message == "[ReportConverter]: Timeout"
    assert status.hardware_id == "pix_nev_driver-ControlCommand"
    assert status.values["instrument_command1 count_eorro"] == "1"
    assert status.values["dtc_command count_warn"] == "0"
    assert len(status.values) == 6