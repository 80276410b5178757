"""Row validation and sample construction."""

from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from ..core.errors import MalformedRow
from ..core.types import Array, Sample


def one_hot(labels: Sequence[int] | Array, num_classes: int) -> Array:
    labels = np.asarray(labels, dtype=np.int64).reshape(-1)
    if labels.size and (labels.min() < 0 or labels.max() >= num_classes):
        raise ValueError(f"labels must lie in [0, {num_classes})")
    out = np.zeros((labels.shape[0], num_classes), dtype=np.float64)
    out[np.arange(labels.shape[0]), labels] = 1.0
    return out


def split_row(row: Sequence[float] | Array, input_size: int, output_size: int, *, index: int = 0) -> Sample:
    """Split a flat ``features + targets`` row into a :class:`Sample`."""

    values = np.asarray(row, dtype=np.float64).reshape(-1)
    expected = input_size + output_size
    if values.shape[0] != expected:
        raise MalformedRow(index, int(values.shape[0]), expected)
    return Sample(inputs=values[:input_size], targets=values[input_size:])


def check_sample(sample: Sample, input_size: int, output_size: int, *, index: int = 0) -> Sample:
    length = sample.inputs.shape[0] + sample.targets.shape[0]
    if sample.inputs.shape[0] != input_size or sample.targets.shape[0] != output_size:
        raise MalformedRow(index, length, input_size + output_size)
    return sample


def to_samples(
    rows: Iterable[Sequence[float] | Array | Sample],
    input_size: int,
    output_size: int,
) -> List[Sample]:
    """Validate every row up front and return fixed-shape samples."""

    samples: List[Sample] = []
    for index, row in enumerate(rows):
        if isinstance(row, Sample):
            samples.append(check_sample(row, input_size, output_size, index=index))
        else:
            samples.append(split_row(row, input_size, output_size, index=index))
    return samples


__all__ = ["check_sample", "one_hot", "split_row", "to_samples"]
