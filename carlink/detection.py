"""Decoding of quantised three-scale detector outputs into labelled boxes."""

import math
from dataclasses import dataclass, field

import numpy as np

OBJ_NAME_MAX_SIZE = 16
OBJ_NUMB_MAX_SIZE = 64
OBJ_CLASS_NUM = 80
NMS_THRESH = 0.45
BOX_THRESH = 0.25
PROP_BOX_SIZE = 5 + OBJ_CLASS_NUM

ANCHORS = (
    (10, 13, 16, 30, 33, 23),
    (30, 61, 62, 45, 59, 119),
    (116, 90, 156, 198, 373, 326),
)
STRIDES = (8, 16, 32)
_ANCHORS_PER_SCALE = 3


@dataclass
class BoxRect:
    """Pixel rectangle, or padding amounts on each side."""

    left: int = 0
    right: int = 0
    top: int = 0
    bottom: int = 0


@dataclass
class Detection:
    """One detected object."""

    name: str
    box: BoxRect = field(default_factory=BoxRect)
    prop: float = 0.0


def load_labels(path, limit=OBJ_CLASS_NUM):
    """Read at most limit class names, one per line, from a text file."""
    with open(path, encoding="utf-8", newline="") as handle:
        text = handle.read()
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines[:limit]


def calculate_overlap(xmin0, ymin0, xmax0, ymax0, xmin1, ymin1, xmax1, ymax1):
    """Intersection over union of two inclusive pixel boxes."""
    w = max(0.0, min(xmax0, xmax1) - max(xmin0, xmin1) + 1.0)
    h = max(0.0, min(ymax0, ymax1) - max(ymin0, ymin1) + 1.0)
    inter = w * h
    union = (
        (xmax0 - xmin0 + 1.0) * (ymax0 - ymin0 + 1.0)
        + (xmax1 - xmin1 + 1.0) * (ymax1 - ymin1 + 1.0)
        - inter
    )
    return 0.0 if union <= 0.0 else inter / union


def sigmoid(x):
    """Logistic function."""
    return 1.0 / (1.0 + math.exp(-x))


def unsigmoid(y):
    """Inverse of the logistic function."""
    return -1.0 * math.log((1.0 / y) - 1.0)


def quantize(value, zero_point, scale):
    """Affine-quantise a float to int8, clipping to [-128, 127]."""
    dst = value / scale + zero_point
    clipped = min(max(dst, -128.0), 127.0)
    return int(clipped)


def dequantize(value, zero_point, scale):
    """Convert an affine-quantised int8 value back to float."""
    return (float(value) - float(zero_point)) * scale


def process_feature_map(data, anchors, grid_h, grid_w, stride, threshold,
                        zero_point, scale):
    """Decode one output scale.

    Returns (boxes, probs, class_ids) where boxes are (x, y, w, h) tuples
    with (x, y) the top-left corner in model input pixels.
    """
    grid_len = grid_h * grid_w
    needed = _ANCHORS_PER_SCALE * PROP_BOX_SIZE * grid_len
    flat = np.asarray(data, dtype=np.int8).reshape(-1)
    if flat.size < needed:
        raise ValueError(f"feature map holds {flat.size} values, needs {needed}")
    grid = flat[:needed].reshape(_ANCHORS_PER_SCALE, PROP_BOX_SIZE, grid_h, grid_w)
    thres_i8 = quantize(threshold, zero_point, scale)

    boxes, probs, class_ids = [], [], []
    for a, cells in enumerate(grid):
        confidence = cells[4].astype(np.int32)
        for i, j in zip(*np.nonzero(confidence >= thres_i8)):
            i, j = int(i), int(j)
            box_confidence = int(cells[4, i, j])
            class_scores = cells[5:, i, j]
            max_class_id = int(np.argmax(class_scores))
            max_class_prob = int(class_scores[max_class_id])
            if max_class_prob <= thres_i8:
                continue
            box_x = dequantize(int(cells[0, i, j]), zero_point, scale) * 2.0 - 0.5
            box_y = dequantize(int(cells[1, i, j]), zero_point, scale) * 2.0 - 0.5
            box_w = dequantize(int(cells[2, i, j]), zero_point, scale) * 2.0
            box_h = dequantize(int(cells[3, i, j]), zero_point, scale) * 2.0
            box_x = (box_x + j) * float(stride)
            box_y = (box_y + i) * float(stride)
            box_w = box_w * box_w * float(anchors[a * 2])
            box_h = box_h * box_h * float(anchors[a * 2 + 1])
            box_x -= box_w / 2.0
            box_y -= box_h / 2.0
            probs.append(
                dequantize(max_class_prob, zero_point, scale)
                * dequantize(box_confidence, zero_point, scale)
            )
            class_ids.append(max_class_id)
            boxes.append((box_x, box_y, box_w, box_h))
    return boxes, probs, class_ids


def _box_corners(box):
    x, y, w, h = box
    return x, y, x + w, y + h


def nms(boxes, class_ids, order, filter_id, threshold):
    """Suppress overlapping candidates and return the updated order.

    order lists candidate indices by descending score, with None marking
    suppressed ones. The candidate at position i takes part when
    class_ids[i] equals filter_id; it suppresses every later candidate
    whose box overlaps it by more than threshold.
    """
    order = list(order)
    count = len(order)
    for i in range(count):
        n = order[i]
        if n is None or class_ids[i] != filter_id:
            continue
        first = _box_corners(boxes[n])
        for j in range(i + 1, count):
            m = order[j]
            if m is None:
                continue
            if calculate_overlap(*first, *_box_corners(boxes[m])) > threshold:
                order[j] = None
    return order


def _sort_descending(values):
    """Partition sort by descending value, returning (values, original indices)."""
    values = list(values)
    indices = list(range(len(values)))
    pending = [(0, len(values) - 1)]
    while pending:
        left, right = pending.pop()
        if left >= right:
            continue
        key, key_index = values[left], indices[left]
        low, high = left, right
        while low < high:
            while low < high and values[high] <= key:
                high -= 1
            values[low], indices[low] = values[high], indices[high]
            while low < high and values[low] >= key:
                low += 1
            values[high], indices[high] = values[low], indices[low]
        values[low], indices[low] = key, key_index
        pending.append((low + 1, right))
        pending.append((left, low - 1))
    return values, indices


def _clamp(value, low, high):
    if value > low:
        return int(value) if value < high else high
    return low


def post_process(outputs, model_height, model_width, conf_threshold=BOX_THRESH,
                 nms_threshold=NMS_THRESH, pads=None, scale_w=1.0, scale_h=1.0,
                 zero_points=(0, 0, 0), scales=(1.0, 1.0, 1.0), labels=()):
    """Turn the three quantised output maps into at most 64 detections."""
    if len(outputs) < len(STRIDES):
        raise ValueError("three output maps are required")
    if pads is None:
        pads = BoxRect()

    boxes, probs, class_ids = [], [], []
    for data, anchors, stride, zp, scale in zip(
        outputs, ANCHORS, STRIDES, zero_points, scales
    ):
        found_boxes, found_probs, found_ids = process_feature_map(
            data, anchors, model_height // stride, model_width // stride,
            stride, conf_threshold, zp, scale,
        )
        boxes.extend(found_boxes)
        probs.extend(found_probs)
        class_ids.extend(found_ids)

    if not boxes:
        return []

    sorted_probs, order = _sort_descending(probs)
    for class_id in sorted(set(class_ids)):
        order = nms(boxes, class_ids, order, class_id, nms_threshold)

    detections = []
    for position, n in enumerate(order):
        if n is None or len(detections) >= OBJ_NUMB_MAX_SIZE:
            continue
        x, y, w, h = boxes[n]
        x1 = x - pads.left
        y1 = y - pads.top
        x2 = x1 + w
        y2 = y1 + h
        class_id = class_ids[n]
        name = labels[class_id] if class_id < len(labels) else ""
        detections.append(Detection(
            name=name[:OBJ_NAME_MAX_SIZE],
            box=BoxRect(
                left=int(_clamp(x1, 0, model_width) / scale_w),
                right=int(_clamp(x2, 0, model_width) / scale_w),
                top=int(_clamp(y1, 0, model_height) / scale_h),
                bottom=int(_clamp(y2, 0, model_height) / scale_h),
            ),
            prop=sorted_probs[position],
        ))
    return detections