"""Frames of the chassis motor-controller serial protocol."""

HEADER = b"\x0a\x0c"
DATA_LENGTH = 0x06
RESPONSE_ID = 0x02
FRAME_SIZE = 12
FRAME_LEN_BLE = 1

_MOTIONS = {
    "f": (100, 0, 0),
    "b": (-100, 0, 0),
    "l": (0, 0, -200),
    "r": (0, 0, 200),
}
_DEFAULT_MOTION = (100, 0, 0)


def pack_motion(vel, yaw, ang):
    """Encode three values as little-endian 16-bit words, truncating to 16 bits."""
    return b"".join((v & 0xFFFF).to_bytes(2, "little") for v in (vel, yaw, ang))


def xor_checksum(data_length, response_id, payload):
    """XOR of the length, the response id and the first data_length payload bytes."""
    check = data_length ^ response_id
    for byte in bytes(payload)[:data_length]:
        check ^= byte
    return check & 0xFF


def motion_frame(vel, yaw, ang):
    """Build the 12-byte frame setting speed, yaw and spin rate."""
    payload = pack_motion(vel, yaw, ang)
    check = xor_checksum(DATA_LENGTH, RESPONSE_ID, payload)
    return HEADER + bytes((DATA_LENGTH, 0x00, RESPONSE_ID)) + payload + bytes((check,))


def power_frame(on):
    """Build the 12-byte frame switching motor power on or off."""
    state = 0x01 if on else 0x00
    body = HEADER + bytes((0x01, 0x00, 0x01, state, state))
    return body.ljust(FRAME_SIZE, b"\x00")


def parse_ble_command(frame):
    """Return the command character carried by a Bluetooth frame."""
    if not frame:
        raise ValueError("empty Bluetooth frame")
    return chr(frame[0])


def command_motion(command):
    """Map a Bluetooth command character to (vel, yaw, ang); unknown ones drive forward."""
    return _MOTIONS.get(command, _DEFAULT_MOTION)