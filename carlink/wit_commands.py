"""Configuration commands for a WIT sensor built on register writes.

Most commands unlock the sensor by writing ``KEY_UNLOCK`` to the ``KEY``
register, wait 20 ms through the sensor's ``delay`` callback and then write
the setting itself.
"""

from . import registers as reg
from .registers import Bandwidth, CalibrationMode, CanBaud, OutputRate, UartBaud
from .wit_sdk import Protocol, WitInvalidArgument, WitNotConfigured, check_range

_UNLOCK_DELAY_MS = 20

_JY61_ACC_CALIBRATION = 0x67
_JY61_BAUD_COMMANDS = {
    UartBaud.B115200: 0x63,
    UartBaud.B9600: 0x64,
}


def _wait(sensor):
    if sensor.delay is None:
        raise WitNotConfigured("no delay function registered")
    sensor.delay(_UNLOCK_DELAY_MS)


def _unlocked_write(sensor, register, value):
    sensor.write_register(reg.KEY, reg.KEY_UNLOCK)
    _wait(sensor)
    sensor.write_register(register, value)


def _reject_jy61(sensor):
    if sensor.protocol == Protocol.JY61:
        raise WitInvalidArgument("command not supported by JY61")


def _jy61_command(sensor, code):
    if sensor.serial_writer is None:
        raise WitNotConfigured("no serial writer registered")
    sensor.serial_writer(bytes((0xFF, 0xAA, code)))


def start_acc_calibration(sensor):
    """Start accelerometer and gyroscope calibration; keep the device level."""
    if sensor.protocol == Protocol.JY61:
        _jy61_command(sensor, _JY61_ACC_CALIBRATION)
        return
    _unlocked_write(sensor, reg.CALSW, CalibrationMode.GYRO_ACC)


def stop_acc_calibration(sensor):
    """Return from accelerometer calibration to normal operation."""
    _reject_jy61(sensor)
    _unlocked_write(sensor, reg.CALSW, CalibrationMode.NORMAL)


def start_mag_calibration(sensor):
    """Start magnetometer calibration."""
    _reject_jy61(sensor)
    _unlocked_write(sensor, reg.CALSW, CalibrationMode.MAG_MM)


def stop_mag_calibration(sensor):
    """Return from magnetometer calibration to normal operation."""
    _reject_jy61(sensor)
    _unlocked_write(sensor, reg.CALSW, CalibrationMode.NORMAL)


def set_uart_baud(sensor, index):
    """Select the serial baud rate by its ``UartBaud`` index."""
    if not check_range(index, UartBaud.B4800, UartBaud.B230400):
        raise WitInvalidArgument(f"baud index {index} out of range")
    if sensor.protocol == Protocol.JY61:
        code = _JY61_BAUD_COMMANDS.get(index)
        if code is None:
            raise WitInvalidArgument("JY61 supports only 9600 and 115200 baud")
        _jy61_command(sensor, code)
        return
    _unlocked_write(sensor, reg.BAUD, index)


def set_can_baud(sensor, index):
    """Select the CAN bus rate by its ``CanBaud`` index."""
    if sensor.protocol not in (Protocol.CAN, Protocol.CAN_905X):
        raise WitInvalidArgument("CAN baud rate needs a CAN protocol")
    if not check_range(index, CanBaud.B1000000, CanBaud.B3000):
        raise WitInvalidArgument(f"CAN baud index {index} out of range")
    _unlocked_write(sensor, reg.BAUD, index)


def set_bandwidth(sensor, bandwidth):
    """Set the sensor filter bandwidth; no unlock is written first."""
    _reject_jy61(sensor)
    if not check_range(bandwidth, Bandwidth.HZ_256, Bandwidth.HZ_5):
        raise WitInvalidArgument(f"bandwidth {bandwidth} out of range")
    _wait(sensor)
    sensor.write_register(reg.BANDWIDTH, bandwidth)


def set_output_rate(sensor, rate):
    """Set the packet output rate."""
    _reject_jy61(sensor)
    if not check_range(rate, OutputRate.HZ_0_2, OutputRate.NONE):
        raise WitInvalidArgument(f"output rate {rate} out of range")
    _unlocked_write(sensor, reg.RRATE, rate)


def set_content(sensor, content):
    """Choose which packets the sensor sends, as ``ContentFlag`` bits."""
    _reject_jy61(sensor)
    if not check_range(content, 0x01, reg.RSW_MASK):
        raise WitInvalidArgument(f"content mask {content:#x} out of range")
    _unlocked_write(sensor, reg.RSW, content)


def save_parameters(sensor):
    """Store the current configuration in the sensor's flash."""
    _reject_jy61(sensor)
    _unlocked_write(sensor, reg.SAVE, reg.SAVE_PARAM)


def software_reset(sensor):
    """Restart the sensor."""
    _reject_jy61(sensor)
    _unlocked_write(sensor, reg.SAVE, reg.SAVE_SWRST)


def calibrate_reference_angle(sensor):
    """Take the current attitude as the angle reference."""
    _reject_jy61(sensor)
    _unlocked_write(sensor, reg.CALSW, CalibrationMode.REF_ANGLE)