"""Tracking of sensor register updates and conversion to physical units."""

import threading
from dataclasses import dataclass
from enum import IntFlag

from . import registers as reg

_RAW_FULL_SCALE = 32768.0
_ACC_RANGE_G = 16.0
_GYRO_RANGE_DPS = 2000.0
_ANGLE_RANGE_DEG = 180.0


class UpdateFlag(IntFlag):
    """Kinds of register groups that have received new values."""

    ACC = 0x01
    GYRO = 0x02
    ANGLE = 0x04
    MAG = 0x08
    READ = 0x80


# A group counts as updated when its last register is written.
_GROUP_ENDS = {
    reg.AZ: UpdateFlag.ACC,
    reg.GZ: UpdateFlag.GYRO,
    reg.HZ: UpdateFlag.MAG,
    reg.YAW: UpdateFlag.ANGLE,
}


def classify_update(register, count):
    """Return the flags raised by an update of count registers from register."""
    flags = UpdateFlag(0)
    for index in range(register, register + count):
        flags |= _GROUP_ENDS.get(index, UpdateFlag.READ)
    return flags


class UpdateTracker:
    """Update callback for a sensor that collects the flags it has seen."""

    def __init__(self):
        self._flags = UpdateFlag(0)
        self._lock = threading.Lock()

    def __call__(self, register, count):
        flags = classify_update(register, count)
        with self._lock:
            self._flags |= flags

    @property
    def flags(self):
        """Flags collected so far."""
        with self._lock:
            return self._flags

    def take(self):
        """Return the collected flags and clear them."""
        with self._lock:
            flags = self._flags
            self._flags = UpdateFlag(0)
        return flags


def _scaled(registers, start, full_scale):
    return tuple(
        registers[start + axis] / _RAW_FULL_SCALE * full_scale for axis in range(3)
    )


@dataclass(frozen=True)
class ImuReading:
    """Acceleration in g, angular rate in deg/s and attitude in degrees."""

    acc: tuple
    gyro: tuple
    angle: tuple

    @classmethod
    def from_registers(cls, registers):
        """Convert raw register values to physical units."""
        return cls(
            acc=_scaled(registers, reg.AX, _ACC_RANGE_G),
            gyro=_scaled(registers, reg.GX, _GYRO_RANGE_DPS),
            angle=_scaled(registers, reg.ROLL, _ANGLE_RANGE_DEG),
        )

    def report_lines(self, flags, registers):
        """Text lines describing the groups selected by flags."""
        lines = []
        if flags & UpdateFlag.ACC:
            lines.append("acc:{:.3f} {:.3f} {:.3f}".format(*self.acc))
        if flags & UpdateFlag.GYRO:
            lines.append("gyro:{:.3f} {:.3f} {:.3f}".format(*self.gyro))
        if flags & UpdateFlag.ANGLE:
            lines.append("angle:{:.3f} {:.3f} {:.3f}".format(*self.angle))
        if flags & UpdateFlag.MAG:
            lines.append(
                f"mag:{registers[reg.HX]} {registers[reg.HY]} {registers[reg.HZ]}"
            )
        return lines