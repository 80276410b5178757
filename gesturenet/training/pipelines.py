"""Pipeline assembly: dataset, network, trainer and run artifacts."""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Mapping, Sequence

import numpy as np

from ..config import NetworkConfig, load_preset, presets
from ..core.network import Network
from ..core.types import RunResult
from ..data import registry
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter
from ..reporting.summary import write_summary
from .trainer import Trainer


class _MetricsCapture:
    def __init__(self) -> None:
        self.history: list[tuple[int, Mapping[str, float]]] = []
        self.last: Mapping[str, float] = {}

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        payload = {k: float(v) for k, v in metrics.items()}
        self.history.append((int(epoch), payload))
        self.last = payload


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    """Train a network described by a ``data`` / ``model`` / ``train`` config."""

    data_cfg = dict(config["data"])  # type: ignore[arg-type]
    model_cfg = dict(config["model"])  # type: ignore[arg-type]
    train_cfg = dict(config["train"])  # type: ignore[arg-type]

    dataset = registry.get_dataset(str(data_cfg["name"]), **dict(data_cfg.get("options", {})))
    model_cfg.setdefault("d_in", dataset.input_size)
    model_cfg.setdefault("d_out", dataset.output_size)
    net_config = NetworkConfig.from_mapping(model_cfg, train_cfg)
    if net_config.input_size != dataset.input_size:
        raise ValueError(
            f"Configured d_in={net_config.input_size} but dataset has {dataset.input_size}"
        )
    if net_config.output_size != dataset.output_size:
        raise ValueError(
            f"Configured d_out={net_config.output_size} but dataset has {dataset.output_size}"
        )

    run_dir = _resolve_run_dir(train_cfg, dataset.name)
    run_dir.mkdir(parents=True, exist_ok=True)

    network = Network.from_config(net_config)
    _print_startup_summary(
        dataset_name=dataset.name,
        dims=network.layer_dims,
        learning_rate=net_config.learning_rate,
        momentum=net_config.momentum,
        epochs=net_config.epochs,
        param_count=network.parameter_count(),
    )

    seed = net_config.seed
    train_jsonl = JsonlSink(run_dir / "metrics_train.jsonl", split="train", seed=seed)
    train_csv = CsvSink(run_dir / "metrics_train.csv", split="train")
    test_jsonl = JsonlSink(run_dir / "metrics_test.jsonl", split="test", seed=seed)
    test_csv = CsvSink(run_dir / "metrics_test.csv", split="test")
    plots = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))
    capture_test = _MetricsCapture()

    trainer = Trainer(network, shuffle=net_config.shuffle, seed=seed)
    final = trainer.run(
        dataset.train,
        net_config.epochs,
        test=dataset.test,
        split_loggers={
            "train": [train_jsonl, train_csv, plots],
            "test": [test_jsonl, test_csv, capture_test, plots.on_test_epoch],
        },
    )
    plots.close()

    (run_dir / "metrics_test.json").write_text(json.dumps(capture_test.last, indent=2))
    (run_dir / "config.json").write_text(json.dumps(_safe_config(config, net_config), indent=2))
    summary_path = write_summary(
        train_jsonl.path, run_dir / "summary.json", tail=int(train_cfg.get("summary_tail", 10))
    )
    checkpoint = run_dir / "network.npz"
    save_checkpoint(checkpoint, network)

    return RunResult(
        epochs=len(trainer.history),
        accuracy=final.accuracy if final is not None else 0.0,
        metrics_path=str(train_jsonl.path),
        summary_path=summary_path,
        checkpoint_path=str(checkpoint),
    )


def save_checkpoint(path: str | Path, network: Network) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as handle:
        np.savez_compressed(handle, **network.state_dict())


def load_checkpoint(path: str | Path, network: Network) -> Network:
    with np.load(Path(path)) as payload:
        network.load_state_dict({name: payload[name] for name in payload.files})
    return network


def _resolve_run_dir(train_cfg: Mapping[str, object], dataset: str) -> Path:
    if "run_dir" in train_cfg:
        return Path(str(train_cfg["run_dir"]))
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / dataset


def _safe_config(config: Mapping[str, object], net_config: NetworkConfig) -> Mapping[str, object]:
    copied = json.loads(json.dumps(config))
    copied["network"] = net_config.to_dict()
    return copied


def _print_startup_summary(
    *,
    dataset_name: str,
    dims: Sequence[int],
    learning_rate: float,
    momentum: float,
    epochs: int,
    param_count: int,
) -> None:
    print("=== GestureNet run ===")
    print(f"Dataset       : {dataset_name}")
    print(f"Dimensions    : {list(dims)}")
    print(f"Learning rate : {learning_rate}")
    print(f"Momentum      : {momentum}")
    print(f"Epochs        : {epochs}")
    print(f"Parameters    : {param_count}")
    print("======================")


__all__ = ["load_checkpoint", "load_preset", "presets", "run_pipeline", "save_checkpoint"]
