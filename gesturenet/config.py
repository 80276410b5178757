"""Network configuration and built-in presets."""

from __future__ import annotations

import json
from copy import deepcopy
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Sequence, Tuple

from .core.errors import InvalidTopology

GESTURE_LABELS: Tuple[str, ...] = ("PLAY", "PAUSE", "SKIP", "BACK", "VUP", "VDOWN", "MUTE")


@dataclass(frozen=True)
class NetworkConfig:
    """Everything needed to build, train and query a network.

    Attributes
    ----------
    input_size, output_size, hidden_sizes:
        Topology. ``hidden_sizes`` may be empty.
    learning_rate, momentum:
        Backpropagation hyperparameters.
    confidence_threshold:
        Strict lower bound a winning activation must exceed before the
        classifier reports a label.
    epochs:
        Number of full passes over the training set.
    seed:
        Seed for weight initialisation and optional shuffling.
    labels:
        Class names in output-neuron order. Empty means unlabeled.
    shuffle:
        Permute the training order every epoch.
    """

    input_size: int
    output_size: int
    hidden_sizes: Tuple[int, ...]
    learning_rate: float
    momentum: float
    confidence_threshold: float = 0.95
    epochs: int = 1
    seed: int | None = 0
    labels: Tuple[str, ...] = field(default_factory=tuple)
    shuffle: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "hidden_sizes", tuple(int(h) for h in self.hidden_sizes))
        object.__setattr__(self, "labels", tuple(str(label) for label in self.labels))
        if self.input_size <= 0 or self.output_size <= 0:
            raise InvalidTopology("input_size and output_size must be positive")
        if any(h <= 0 for h in self.hidden_sizes):
            raise InvalidTopology(f"hidden sizes must be positive, got {list(self.hidden_sizes)}")
        if not 0.0 < self.learning_rate <= 1.0:
            raise InvalidTopology(f"learning_rate must be in (0, 1], got {self.learning_rate}")
        if not 0.0 <= self.momentum < 1.0:
            raise InvalidTopology(f"momentum must be in [0, 1), got {self.momentum}")
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError("confidence_threshold must be in [0, 1]")
        if self.epochs < 1:
            raise ValueError("epochs must be at least 1")
        if self.labels and len(self.labels) != self.output_size:
            raise ValueError(
                f"{len(self.labels)} labels given for {self.output_size} outputs"
            )

    @property
    def row_length(self) -> int:
        return self.input_size + self.output_size

    def to_dict(self) -> Dict[str, object]:
        payload = asdict(self)
        payload["hidden_sizes"] = list(self.hidden_sizes)
        payload["labels"] = list(self.labels)
        return payload

    @classmethod
    def from_mapping(cls, model: Mapping[str, object], train: Mapping[str, object] | None = None) -> "NetworkConfig":
        """Build from the ``model`` and ``train`` sections of a pipeline config."""

        train = train or {}
        missing = [key for key in ("d_in", "d_out", "hidden") if key not in model]
        missing += [key for key in ("lr", "momentum") if key not in train]
        if missing:
            raise KeyError(f"Config is missing required keys: {missing}")
        hidden: Sequence[int] = model["hidden"]  # type: ignore[assignment]
        seed = train.get("seed", 0)
        return cls(
            input_size=int(model["d_in"]),
            output_size=int(model["d_out"]),
            hidden_sizes=tuple(int(h) for h in hidden),
            learning_rate=float(train["lr"]),  # type: ignore[arg-type]
            momentum=float(train["momentum"]),  # type: ignore[arg-type]
            confidence_threshold=float(model.get("threshold", 0.95)),
            epochs=int(train.get("epochs", 1)),
            seed=None if seed is None else int(seed),
            labels=tuple(model.get("labels", ())),  # type: ignore[arg-type]
            shuffle=bool(train.get("shuffle", False)),
        )


_PRESETS: Dict[str, Mapping[str, object]] = {
    "kinect-media": {
        "data": {
            "name": "gesture_clusters",
            "options": {"n_per_class": 40, "spread": 0.05, "seed": 0},
        },
        "model": {
            "d_in": 18,
            "d_out": 7,
            "hidden": [18],
            "threshold": 0.95,
            "labels": list(GESTURE_LABELS),
        },
        "train": {
            "epochs": 200,
            "seed": 7,
            "lr": 0.02,
            "momentum": 0.0,
            "run_dir": "runs/kinect-media",
            "enable_plots": False,
        },
    },
    "separable-min": {
        "data": {"name": "separable", "options": {"repeats": 4}},
        "model": {"d_in": 2, "d_out": 2, "hidden": [4], "threshold": 0.95},
        "train": {
            "epochs": 400,
            "seed": 3,
            "lr": 0.5,
            "momentum": 0.5,
            "run_dir": "runs/separable-min",
            "enable_plots": False,
        },
    },
    "logistic-min": {
        "data": {"name": "separable", "options": {"repeats": 4}},
        "model": {"d_in": 2, "d_out": 2, "hidden": [], "threshold": 0.95},
        "train": {
            "epochs": 200,
            "seed": 5,
            "lr": 0.5,
            "momentum": 0.0,
            "run_dir": "runs/logistic-min",
            "enable_plots": False,
        },
    },
}


def read_config_file(path: str | Path) -> Mapping[str, object]:
    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Dict[str, object]:
    try:
        return deepcopy(dict(_PRESETS[name]))
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def merge(base: dict, override: Mapping[str, object]) -> dict:
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = merge(dict(base[key]), value)
        else:
            base[key] = value
    return base


__all__ = [
    "GESTURE_LABELS",
    "NetworkConfig",
    "load_preset",
    "merge",
    "presets",
    "read_config_file",
]
