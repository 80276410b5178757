"""GestureNet public API."""

from .classifier import GestureClassifier
from .config import GESTURE_LABELS, NetworkConfig, load_preset, presets
from .core import activations, types  # noqa: F401
from .core.errors import GestureNetError, InvalidTopology, MalformedRow
from .core.network import Network
from .core.numeric import safe_cast
from .core.types import Sample, TestResult, TrainingResult
from .features import measure_inputs
from .training.pipelines import run_pipeline
from .training.trainer import Trainer

__all__ = [
    "GESTURE_LABELS",
    "GestureClassifier",
    "GestureNetError",
    "InvalidTopology",
    "MalformedRow",
    "Network",
    "NetworkConfig",
    "Sample",
    "TestResult",
    "Trainer",
    "TrainingResult",
    "activations",
    "load_preset",
    "measure_inputs",
    "presets",
    "run_pipeline",
    "safe_cast",
    "types",
]
