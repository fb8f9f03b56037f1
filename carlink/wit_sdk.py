"""Register-level driver for the WIT inertial sensor family.

The sensor keeps a mirror of its register file in ``WitSensor.registers``.
Incoming bytes or CAN frames are decoded into that mirror, and every update
is reported through the ``on_update(register, count)`` callback.
"""

from enum import IntEnum

from . import registers as reg
from .registers import OutputHead

DATA_BUFFER_SIZE = 256

_NORMAL_HEADER = 0x55
_FUNC_WRITE = 0x06
_FUNC_READ = 0x03
_READ_ADDR_COMMAND = 0x27


class Protocol(IntEnum):
    """Transport used to talk to the sensor."""

    NORMAL = 0
    MODBUS = 1
    CAN = 2
    I2C = 3
    JY61 = 4
    MODBUS_905X = 5
    CAN_905X = 6


class WitError(Exception):
    """Base class of sensor driver errors."""


class WitInvalidArgument(WitError, ValueError):
    """An argument or the current protocol does not allow the request."""


class WitNotConfigured(WitError):
    """A required callback has not been supplied."""


class WitTransferError(WitError, OSError):
    """The underlying bus reported a failed transfer."""


def crc16(data):
    """Modbus CRC of data, with the first transmitted byte in the high half."""
    crc = 0xFFFF
    for byte in bytes(data):
        crc ^= byte
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ 0xA001
            else:
                crc >>= 1
    return ((crc & 0xFF) << 8) | (crc >> 8)


def checksum(data):
    """Sum of the bytes modulo 256."""
    return sum(bytes(data)) & 0xFF


def check_range(value, low, high):
    """True when low <= value <= high."""
    return low <= value <= high


def _to_int16(word):
    word &= 0xFFFF
    return word - 0x10000 if word & 0x8000 else word


def _le_word(low, high):
    return (high << 8) | low


class WitSensor:
    """A WIT sensor reached over one of the supported protocols."""

    def __init__(
        self,
        protocol=Protocol.NORMAL,
        address=0xFF,
        on_update=None,
        serial_writer=None,
        can_writer=None,
        i2c_writer=None,
        i2c_reader=None,
        delay=None,
    ):
        try:
            self.protocol = Protocol(protocol)
        except ValueError:
            raise WitInvalidArgument(f"unknown protocol {protocol!r}") from None
        self.address = address & 0xFF
        self.on_update = on_update
        self.serial_writer = serial_writer
        self.can_writer = can_writer
        self.i2c_writer = i2c_writer
        self.i2c_reader = i2c_reader
        self.delay = delay
        self.registers = [0] * reg.REG_SIZE
        self.read_index = 0
        self._buffer = bytearray()

    # -- incoming data -------------------------------------------------

    def feed(self, data):
        """Feed a sequence of received bytes."""
        for byte in bytes(data):
            self.feed_byte(byte)

    def feed_byte(self, byte):
        """Feed one received byte into the packet decoder."""
        if self.on_update is None:
            return
        buf = self._buffer
        buf.append(byte & 0xFF)
        if self.protocol in (Protocol.NORMAL, Protocol.JY61):
            self._decode_normal()
        elif self.protocol in (Protocol.MODBUS, Protocol.MODBUS_905X):
            self._decode_modbus()
        else:
            buf.clear()
        if len(buf) == DATA_BUFFER_SIZE:
            buf.clear()

    def _decode_normal(self):
        buf = self._buffer
        if buf[0] != _NORMAL_HEADER:
            del buf[0]
            return
        if len(buf) < 11:
            return
        if checksum(buf[:10]) != buf[10]:
            del buf[0]
            return
        words = [_le_word(buf[i], buf[i + 1]) for i in range(2, 10, 2)]
        head = buf[1]
        buf.clear()
        self._store_packet(head, words, 4)

    def _decode_modbus(self):
        buf = self._buffer
        if len(buf) <= 2:
            return
        if buf[1] != _FUNC_READ:
            del buf[0]
            return
        if len(buf) < buf[2] + 5:
            return
        received = (buf[-2] << 8) | buf[-1]
        if received != crc16(buf[:-2]):
            del buf[0]
            return
        count = buf[2] >> 1
        for i in range(count):
            index = self.read_index + i
            if index < reg.REG_SIZE:
                self.registers[index] = _to_int16(
                    (buf[3 + 2 * i] << 8) | buf[4 + 2 * i]
                )
        buf.clear()
        self.on_update(self.read_index, count)

    def feed_can(self, frame):
        """Decode one 8-byte CAN data frame."""
        if self.on_update is None:
            return
        frame = bytes(frame)
        if len(frame) < 8:
            return
        if self.protocol == Protocol.CAN_905X:
            if frame[0] != _NORMAL_HEADER:
                return
            if frame[1] == OutputHead.ANGLE:
                start = {1: reg.LROLL, 2: reg.LPITCH, 3: reg.LYAW}.get(frame[2])
                if start is None:
                    return
                self.registers[start] = _to_int16(_le_word(frame[4], frame[5]))
                self.registers[start + 1] = _to_int16(_le_word(frame[6], frame[7]))
                self.on_update(start, 2)
                return
        if self.protocol in (Protocol.CAN, Protocol.CAN_905X):
            if frame[0] != _NORMAL_HEADER:
                return
            words = [_le_word(frame[i], frame[i + 1]) for i in range(2, 8, 2)]
            self._store_packet(frame[1], words, 3)

    def _store_packet(self, head, words, length):
        first_len = 4
        second, second_len = 0, 0
        if head == OutputHead.ACC:
            first, first_len, second, second_len = reg.AX, 3, reg.TEMP, 1
        elif head == OutputHead.ANGLE:
            first, first_len, second, second_len = reg.ROLL, 3, reg.VERSION, 1
        elif head == OutputHead.TIME:
            first = reg.YYMM
        elif head == OutputHead.GYRO:
            first, length = reg.GX, 3
        elif head == OutputHead.MAGNETIC:
            first, length = reg.HX, 3
        elif head == OutputHead.DPORT:
            first = reg.D0STATUS
        elif head == OutputHead.PRESS:
            first = reg.PRESSUREL
        elif head == OutputHead.GPS:
            first = reg.LONL
        elif head == OutputHead.VELOCITY:
            first = reg.GPSHEIGHT
        elif head == OutputHead.QUATER:
            first = reg.Q0
        elif head == OutputHead.GSA:
            first = reg.SVNUM
        elif head == OutputHead.REGVALUE:
            first = self.read_index
        else:
            return
        if length == 3:
            first_len, second_len = 3, 0
        if first_len:
            self._store_words(first, words[:first_len])
            self.on_update(first, first_len)
        if second_len:
            self._store_words(second, words[3:3 + second_len])
            self.on_update(second, second_len)

    def _store_words(self, start, words):
        for offset, word in enumerate(words):
            index = start + offset
            if index < reg.REG_SIZE:
                self.registers[index] = _to_int16(word)

    # -- outgoing requests ---------------------------------------------

    def _require(self, func, name):
        if func is None:
            raise WitNotConfigured(f"no {name} registered")
        return func

    def write_register(self, register, value):
        """Write a 16-bit value to a sensor register."""
        if register >= reg.REG_SIZE:
            raise WitInvalidArgument(f"register {register:#x} out of range")
        value &= 0xFFFF
        low, high = value & 0xFF, value >> 8
        proto = self.protocol
        if proto == Protocol.JY61:
            raise WitInvalidArgument("register writes are not supported by JY61")
        if proto == Protocol.NORMAL:
            write = self._require(self.serial_writer, "serial writer")
            write(bytes((0xFF, 0xAA, register & 0xFF, low, high)))
        elif proto in (Protocol.MODBUS, Protocol.MODBUS_905X):
            write = self._require(self.serial_writer, "serial writer")
            body = bytes(
                (self.address, _FUNC_WRITE, register >> 8, register & 0xFF, high, low)
            )
            crc = crc16(body)
            write(body + bytes((crc >> 8, crc & 0xFF)))
        elif proto in (Protocol.CAN, Protocol.CAN_905X):
            write = self._require(self.can_writer, "CAN writer")
            write(self.address, bytes((0xFF, 0xAA, register & 0xFF, low, high)))
        elif proto == Protocol.I2C:
            write = self._require(self.i2c_writer, "I2C writer")
            if write((self.address << 1) & 0xFF, register, bytes((low, high))) != 1:
                raise WitTransferError("I2C write failed")

    def read_register(self, register, count):
        """Request count registers starting at register."""
        if register + count >= reg.REG_SIZE:
            raise WitInvalidArgument("register range out of bounds")
        proto = self.protocol
        if proto == Protocol.JY61:
            raise WitInvalidArgument("register reads are not supported by JY61")
        if proto == Protocol.NORMAL:
            if count > 4:
                raise WitInvalidArgument("at most 4 registers per read")
            write = self._require(self.serial_writer, "serial writer")
            write(bytes((0xFF, 0xAA, _READ_ADDR_COMMAND, register & 0xFF,
                         (register >> 8) & 0xFF)))
        elif proto in (Protocol.MODBUS, Protocol.MODBUS_905X):
            write = self._require(self.serial_writer, "serial writer")
            if count * 2 + 5 > DATA_BUFFER_SIZE:
                raise WitError("reply would not fit the receive buffer")
            body = bytes((
                self.address, _FUNC_READ, register >> 8, register & 0xFF,
                (count >> 8) & 0xFF, count & 0xFF,
            ))
            crc = crc16(body)
            write(body + bytes((crc >> 8, crc & 0xFF)))
        elif proto in (Protocol.CAN, Protocol.CAN_905X):
            if count > 3:
                raise WitInvalidArgument("at most 3 registers per read")
            write = self._require(self.can_writer, "CAN writer")
            write(self.address, bytes((0xFF, 0xAA, _READ_ADDR_COMMAND,
                                       register & 0xFF, (register >> 8) & 0xFF)))
        elif proto == Protocol.I2C:
            read = self._require(self.i2c_reader, "I2C reader")
            length = count * 2
            if length > DATA_BUFFER_SIZE:
                raise WitError("read would not fit the receive buffer")
            data = read((self.address << 1) & 0xFF, register, length)
            if data is not None:
                self._require(self.on_update, "update callback")
                data = bytes(data)
                words = [_le_word(data[2 * i], data[2 * i + 1]) for i in range(count)]
                self._store_words(register, words)
                self.on_update(register, count)
        self.read_index = register