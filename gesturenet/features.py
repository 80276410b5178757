"""Joint-distance features for skeletal gesture recognition.

A frame arrives as 24 floats: the planar ``(x, y)`` position of each joint in
:data:`JOINTS`, in that order. :func:`measure_inputs` turns one frame into the
18 distances the gesture network is trained on. The order of
:data:`MEASUREMENTS` is part of the trained model; reordering it silently
breaks every existing network.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from .core.numeric import safe_cast
from .core.types import Array

JOINTS: Tuple[str, ...] = (
    "head",
    "shoulder_left",
    "shoulder_right",
    "elbow_left",
    "elbow_right",
    "wrist_left",
    "wrist_right",
    "hand_left",
    "hand_right",
    "spine",
    "knee_left",
    "knee_right",
)

MEASUREMENTS: Tuple[Tuple[str, str], ...] = (
    ("head", "hand_left"),
    ("head", "wrist_left"),
    ("head", "elbow_left"),
    ("head", "elbow_right"),
    ("head", "wrist_right"),
    ("head", "hand_right"),
    ("hand_left", "shoulder_left"),
    ("wrist_left", "shoulder_left"),
    ("hand_right", "shoulder_right"),
    ("wrist_right", "shoulder_right"),
    ("spine", "hand_left"),
    ("spine", "hand_right"),
    ("hand_left", "hand_right"),
    ("elbow_left", "elbow_right"),
    ("shoulder_left", "hand_right"),
    ("shoulder_right", "hand_left"),
    ("hand_left", "knee_left"),
    ("hand_right", "knee_right"),
)

FRAME_SIZE = 2 * len(JOINTS)
FEATURE_SIZE = len(MEASUREMENTS)

_INDEX = {name: i for i, name in enumerate(JOINTS)}
_PAIRS = np.array([(_INDEX[a], _INDEX[b]) for a, b in MEASUREMENTS], dtype=np.intp)


def measure_inputs(joints: Sequence[float] | Array) -> Array:
    """Return the 18 planar Euclidean distances for one frame as ``float32``.

    Distances use the coordinate difference of each joint pair. Networks
    trained on the earlier recogniser's features, which added the
    coordinates instead, do not transfer to these inputs.
    """

    frame = np.asarray(joints, dtype=np.float64).reshape(-1)
    if frame.shape[0] != FRAME_SIZE:
        raise ValueError(f"Expected {FRAME_SIZE} joint coordinates, got {frame.shape[0]}")
    points = frame.reshape(len(JOINTS), 2)
    with np.errstate(over="ignore"):
        diff = points[_PAIRS[:, 0]] - points[_PAIRS[:, 1]]
        distances = np.hypot(diff[:, 0], diff[:, 1])
    return safe_cast(distances, np.float32)


__all__ = ["FEATURE_SIZE", "FRAME_SIZE", "JOINTS", "MEASUREMENTS", "measure_inputs"]
