"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, MutableMapping

from ..core.types import Sample


@dataclass(frozen=True)
class DatasetSpec:
    """Train/test samples plus reproducibility metadata.

    Attributes
    ----------
    name:
        Registry key the dataset was built from.
    input_size, output_size:
        Shape every sample in both splits conforms to.
    train, test:
        Validated samples. The core never mutates them.
    provenance:
        Options used to build the dataset so runs can be reproduced.
    """

    name: str
    input_size: int
    output_size: int
    train: List[Sample]
    test: List[Sample]
    provenance: Dict[str, Any] = field(default_factory=dict)

    @property
    def splits(self) -> Dict[str, int]:
        return {"train": len(self.train), "test": len(self.test)}


DatasetFactory = Callable[..., DatasetSpec]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory, directly or as a decorator."""

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    return _decorator


def get_dataset(dataset: str, /, **options: Any) -> DatasetSpec:
    """Return the :class:`DatasetSpec` for ``dataset``."""

    if dataset not in _REGISTRY:
        raise KeyError(f"Unknown dataset: {dataset}")
    spec = _REGISTRY[dataset](**options)
    _validate_spec(spec)
    return spec


def available_datasets() -> Iterable[str]:
    return sorted(_REGISTRY)


def _validate_spec(spec: DatasetSpec) -> None:
    if spec.input_size <= 0 or spec.output_size <= 0:
        raise ValueError(f"Dataset {spec.name!r} declares a non-positive shape")
    if not spec.train:
        raise ValueError(f"Dataset {spec.name!r} has an empty train split")


__all__ = ["DatasetSpec", "available_datasets", "get_dataset", "register_dataset"]
