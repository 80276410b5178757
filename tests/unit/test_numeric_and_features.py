import numpy as np
import pytest

from gesturenet.core.numeric import safe_cast, safe_cast_count
from gesturenet.features import FEATURE_SIZE, FRAME_SIZE, JOINTS, MEASUREMENTS, measure_inputs


def test_safe_cast_replaces_infinities():
    out = safe_cast([np.inf, -np.inf, 1.5])
    info = np.finfo(np.float64)
    assert out.tolist() == [info.max, info.min, 1.5]


def test_safe_cast_clamps_narrowing_overflow():
    out, clamped = safe_cast_count([1e39, -1e39, 2.0], np.float32)
    info = np.finfo(np.float32)
    assert out.dtype == np.float32
    assert out[0] == info.max
    assert out[1] == info.min
    assert out[2] == np.float32(2.0)
    assert clamped == 2


def test_safe_cast_leaves_finite_values_alone():
    values = np.array([0.0, -3.25, 1e300])
    out, clamped = safe_cast_count(values)
    assert clamped == 0
    assert np.array_equal(out, values)


def _frame(**points):
    frame = np.zeros(FRAME_SIZE)
    for name, (x, y) in points.items():
        idx = JOINTS.index(name)
        frame[2 * idx] = x
        frame[2 * idx + 1] = y
    return frame


def test_measurement_table_shape():
    assert FEATURE_SIZE == 18
    assert FRAME_SIZE == 24
    assert len(set(MEASUREMENTS)) == len(MEASUREMENTS)


def test_measure_inputs_planar_distances():
    frame = _frame(head=(0.0, 0.0), hand_left=(3.0, 4.0), hand_right=(-3.0, 4.0))
    features = measure_inputs(frame)
    assert features.dtype == np.float32
    assert features.shape == (18,)
    assert features[0] == pytest.approx(5.0)  # head -> left hand
    assert features[5] == pytest.approx(5.0)  # head -> right hand
    assert features[12] == pytest.approx(6.0)  # left hand -> right hand
    assert features[13] == pytest.approx(0.0)  # both elbows at the origin


def test_measure_inputs_clamps_overflow_to_float32():
    frame = _frame(head=(1e300, 0.0))
    features = measure_inputs(frame)
    assert np.all(np.isfinite(features))
    assert features[0] == np.finfo(np.float32).max


def test_measure_inputs_rejects_wrong_frame_size():
    with pytest.raises(ValueError):
        measure_inputs(np.zeros(FRAME_SIZE - 1))


# Joint indices into the 12-joint frame, in feature order.
_FEATURE_JOINTS = [
    (0, 7), (0, 5), (0, 3), (0, 4), (0, 6), (0, 8),
    (7, 1), (5, 1), (8, 2), (6, 2), (9, 7), (9, 8),
    (7, 8), (3, 4), (1, 8), (2, 7), (7, 10), (8, 11),
]


def test_measure_inputs_follows_fixed_joint_order():
    # every joint sits at a distinct point so a swapped pair changes the value
    points = np.array([(float(i), float(i * i)) for i in range(len(JOINTS))])
    features = measure_inputs(points.reshape(-1))

    expected = [np.hypot(*(points[a] - points[b])) for a, b in _FEATURE_JOINTS]
    assert np.allclose(features, np.asarray(expected, dtype=np.float32))
    assert features[0] == pytest.approx(np.hypot(7.0, 49.0))  # head -> left hand
    assert features[17] == pytest.approx(np.hypot(3.0, 121.0 - 64.0))  # right hand -> right knee
    assert len(set(np.round(features, 4).tolist())) == FEATURE_SIZE
