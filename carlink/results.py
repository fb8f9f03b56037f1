"""Wire formats used by the camera server: detection strings and JPEG frames."""

import struct

from .detection import Detection

FIELD_SEPARATOR = "&"
RECORD_TERMINATOR = "@"
DISCONNECT_MESSAGE = b"Disconnected&0&100&0&100&0.9@"

_SIZE_FORMAT = struct.Struct("<i")


def _format_detection(detection: Detection) -> str:
    box = detection.box
    fields = (
        detection.name,
        str(box.left),
        str(box.top),
        str(box.right),
        str(box.bottom),
        f"{detection.prop:f}",
    )
    return FIELD_SEPARATOR.join(fields) + RECORD_TERMINATOR


def format_results(detections):
    """Encode detections as ``name&left&top&right&bottom&prop@`` records."""
    return "".join(_format_detection(d) for d in detections)


def frame_header(size):
    """Return the 4-byte little-endian signed length that precedes a frame."""
    if size < 0:
        raise ValueError("frame size cannot be negative")
    try:
        return _SIZE_FORMAT.pack(size)
    except struct.error:
        raise ValueError(f"frame size {size} does not fit the header") from None


def send_frame(sock, payload):
    """Send one length-prefixed frame over sock and return the payload size."""
    data = bytes(payload)
    sock.sendall(frame_header(len(data)))
    sock.sendall(data)
    return len(data)


def stream_frames(sock, frames):
    """Send encoded frames until they run out or sending fails.

    Afterwards the disconnect message is sent, as far as the socket still
    allows. Returns the number of frames delivered completely.
    """
    sent = 0
    try:
        for frame in frames:
            if not frame:
                break
            send_frame(sock, frame)
            sent += 1
    except OSError:
        pass
    try:
        sock.sendall(DISCONNECT_MESSAGE)
    except OSError:
        pass
    return sent