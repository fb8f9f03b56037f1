import functools
import operator

import pytest

from carlink.chassis import (
    FRAME_SIZE,
    command_motion,
    motion_frame,
    pack_motion,
    parse_ble_command,
    power_frame,
    xor_checksum,
)


def test_motion_frame_header_and_layout():
    frame = motion_frame(-100, 0, 0)
    assert len(frame) == 12
    assert frame[:5] == bytes([0x0A, 0x0C, 0x06, 0x00, 0x02])
    assert frame[5:11] == pack_motion(-100, 0, 0)
    assert frame[11] == xor_checksum(6, 2, frame[5:11])


@pytest.mark.parametrize("values", [(0, 0, 0), (100, 0, 0), (0, 0, -200), (-1, 32767, -32768)])
def test_motion_frame_checksum_cancels(values):
    frame = motion_frame(*values)
    covered = [frame[2], frame[4], *frame[5:12]]
    assert functools.reduce(operator.xor, covered) == 0


@pytest.mark.parametrize("values", [(-100, 0, 0), (0, 0, 200), (1234, -5678, 300)])
def test_pack_motion_round_trip(values):
    packed = pack_motion(*values)
    decoded = tuple(
        int.from_bytes(packed[i : i + 2], "little", signed=True) for i in (0, 2, 4)
    )
    assert decoded == values


def test_pack_motion_little_endian():
    assert pack_motion(0x1234, 0, 0)[:2] == b"\x34\x12"


def test_pack_motion_truncates_to_16_bits():
    assert pack_motion(0x10000 + 5, 0, 0) == pack_motion(5, 0, 0)


def test_power_on_frame():
    frame = power_frame(True)
    assert len(frame) == FRAME_SIZE
    assert frame[:7] == bytes([0x0A, 0x0C, 0x01, 0x00, 0x01, 0x01, 0x01])
    assert frame[7:] == bytes(5)


def test_power_off_frame():
    frame = power_frame(False)
    assert frame[:7] == bytes([0x0A, 0x0C, 0x01, 0x00, 0x01, 0x00, 0x00])
    assert frame[7:] == bytes(5)


def test_parse_ble_command():
    assert parse_ble_command(b"fxyz") == "f"


def test_parse_ble_command_empty():
    with pytest.raises(ValueError):
        parse_ble_command(b"")


@pytest.mark.parametrize(
    "command, expected",
    [
        ("f", (100, 0, 0)),
        ("b", (-100, 0, 0)),
        ("l", (0, 0, -200)),
        ("r", (0, 0, 200)),
        ("x", (100, 0, 0)),
    ],
)
def test_command_motion(command, expected):
    assert command_motion(command) == expected