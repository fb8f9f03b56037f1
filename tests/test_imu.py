import pytest

from carlink import registers as reg
from carlink.imu import ImuReading, UpdateFlag, UpdateTracker, classify_update


@pytest.mark.parametrize(
    "register, flag",
    [
        (reg.AZ, UpdateFlag.ACC),
        (reg.GZ, UpdateFlag.GYRO),
        (reg.HZ, UpdateFlag.MAG),
        (reg.YAW, UpdateFlag.ANGLE),
        (reg.AX, UpdateFlag.READ),
        (reg.TEMP, UpdateFlag.READ),
    ],
)
def test_classify_single_register(register, flag):
    assert classify_update(register, 1) == flag


def test_classify_range_covers_group_end():
    assert classify_update(reg.AX, 3) == UpdateFlag.ACC | UpdateFlag.READ


def test_classify_empty_range():
    assert classify_update(reg.AX, 0) == UpdateFlag(0)


def test_classify_full_sensor_block():
    flags = classify_update(reg.AX, reg.YAW - reg.AX + 1)
    expected = (
        UpdateFlag.ACC | UpdateFlag.GYRO | UpdateFlag.MAG
        | UpdateFlag.ANGLE | UpdateFlag.READ
    )
    assert flags == expected


def test_tracker_accumulates_and_take_clears():
    tracker = UpdateTracker()
    tracker(reg.AZ, 1)
    tracker(reg.GX, 3)
    assert tracker.flags == UpdateFlag.ACC | UpdateFlag.GYRO | UpdateFlag.READ
    taken = tracker.take()
    assert taken == UpdateFlag.ACC | UpdateFlag.GYRO | UpdateFlag.READ
    assert tracker.flags == UpdateFlag(0)
    assert tracker.take() == UpdateFlag(0)


def _registers(**values):
    registers = [0] * reg.REG_SIZE
    for name, value in values.items():
        registers[getattr(reg, name)] = value
    return registers


def test_reading_full_scale():
    registers = _registers(AX=-32768, GX=-32768, ROLL=-32768)
    reading = ImuReading.from_registers(registers)
    assert reading.acc[0] == pytest.approx(-16.0)
    assert reading.gyro[0] == pytest.approx(-2000.0)
    assert reading.angle[0] == pytest.approx(-180.0)
    assert reading.acc[1:] == (0.0, 0.0)


def test_reading_is_linear_in_raw_value():
    low = ImuReading.from_registers(_registers(AY=1000))
    high = ImuReading.from_registers(_registers(AY=2000))
    assert high.acc[1] == pytest.approx(2 * low.acc[1])


def test_report_lines_follow_flags_in_fixed_order():
    registers = _registers(HX=1, HY=2, HZ=3)
    reading = ImuReading.from_registers(registers)
    everything = UpdateFlag.MAG | UpdateFlag.ANGLE | UpdateFlag.GYRO | UpdateFlag.ACC
    lines = reading.report_lines(everything, registers)
    assert [line.split(":")[0] for line in lines] == ["acc", "gyro", "angle", "mag"]
    assert lines[-1] == "mag:1 2 3"


def test_report_lines_empty_without_flags():
    registers = _registers()
    reading = ImuReading.from_registers(registers)
    assert reading.report_lines(UpdateFlag(0), registers) == []
    assert reading.report_lines(UpdateFlag.READ, registers) == []


def test_report_line_has_three_decimals():
    registers = _registers()
    reading = ImuReading.from_registers(registers)
    (line,) = reading.report_lines(UpdateFlag.GYRO, registers)
    values = line.split(":")[1].split(" ")
    assert len(values) == 3
    assert all(len(v.split(".")[1]) == 3 for v in values)