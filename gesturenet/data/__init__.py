"""Dataset registry and sample helpers."""

# Ensure built-in datasets register themselves when the package is imported.
from . import synthetic as _synthetic  # noqa: F401
from .registry import DatasetSpec, available_datasets, get_dataset, register_dataset
from .samples import one_hot, split_row, to_samples

__all__ = [
    "DatasetSpec",
    "available_datasets",
    "get_dataset",
    "one_hot",
    "register_dataset",
    "split_row",
    "to_samples",
]
