# carlink

Building blocks for a small robot car: the chassis motor-controller frames,
the WIT inertial sensor protocol, a heading PID controller and the
post-processing of a quantised YOLOv5-style detector.

## Modules

- **`carlink.chassis`**: builds the 12-byte motion frame (`motion_frame`,
  from `pack_motion` and `xor_checksum`) and the motor power frame
  (`power_frame`). `parse_ble_command` takes the command character from a
  Bluetooth frame and `command_motion` maps `f`, `b`, `l` and `r` to
  `(vel, yaw, ang)`; any other character drives forward.
- **`carlink.registers`**: register numbers of the sensor and the value
  enums `OutputHead`, `ContentFlag`, `OutputRate`, `UartBaud`, `CanBaud`,
  `Bandwidth`, `CalibrationMode` and `Orientation`.
- **`carlink.wit_sdk`**: `WitSensor` decodes the normal, Modbus and CAN
  framings into its `registers` list and calls `on_update(register, count)`
  for each update. `write_register` and `read_register` send requests through
  the writer or reader functions given to it. `crc16` and `checksum` are the
  frame checks; `Protocol` selects the transport.
- **`carlink.wit_commands`**: calibration, baud rate, CAN baud rate,
  bandwidth, output rate, content selection, saving, reset and reference
  angle commands for a `WitSensor`.
- **`carlink.imu`**: `UpdateTracker` is an update callback that collects
  `UpdateFlag`s; `ImuReading.from_registers` scales raw registers into
  acceleration (g), angular rate (deg/s) and angle (deg), and `report_lines`
  formats them.
- **`carlink.controller`**: `PidController` with output limiting, and
  `clamp`.
- **`carlink.letterbox`**: `letterbox` scales a NumPy image and pads it to a
  target size; `letterbox_pads` computes the padding.
- **`carlink.detection`**: `post_process` decodes three int8 output maps into
  at most 64 `Detection`s with per-class non-maximum suppression;
  `load_labels` reads class names from a text file.
- **`carlink.results`**: `format_results` encodes detections as
  `name&left&top&right&bottom&prop@` records; `send_frame` and
  `stream_frames` send length-prefixed frames over a socket.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Examples

Chassis frames are plain bytes, ready to write to whatever port reaches the
controller:

```python
from carlink.chassis import command_motion, motion_frame, power_frame

frames = [power_frame(True), motion_frame(*command_motion("f"))]
```

Decoding sensor data:

```python
from carlink.imu import ImuReading, UpdateTracker
from carlink.wit_sdk import Protocol, WitSensor, checksum

tracker = UpdateTracker()
sensor = WitSensor(Protocol.NORMAL, 0x50, tracker, serial_writer=sent.append)

packet = bytes([0x55, 0x51, 0x00, 0x08, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00])
sensor.feed(packet + bytes([checksum(packet)]))

flags = tracker.take()
reading = ImuReading.from_registers(sensor.registers)
for line in reading.report_lines(flags, sensor.registers):
    print(line)
```

(`sent` is any list collecting outgoing request frames.)

Errors from the sensor layer are raised as `WitError` subclasses:
`WitInvalidArgument` for values or protocols that do not apply,
`WitNotConfigured` when a needed writer, reader, delay function or update
callback is missing, and `WitTransferError` when an I2C write fails.

## What this package does not do

- It does not open or configure serial ports; bytes in and out are passed
  through the functions and callbacks you supply.
- It has no command or background loop that drives the car.
- It does not capture camera frames, run the neural network or serve
  video; `carlink.detection` and `carlink.results` only work on outputs and
  encoded frames handed to them.