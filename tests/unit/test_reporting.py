import csv
import json

import numpy as np
import pytest

from gesturenet.reporting.metrics import CsvSink, JsonlSink
from gesturenet.reporting.plots import PlotAdapter
from gesturenet.reporting.summary import build_summary, write_summary
from gesturenet.training.metrics import compute_metrics


def test_jsonl_and_csv_sinks(tmp_path):
    jsonl = JsonlSink(tmp_path / "m.jsonl", split="test", seed=3, sha="abc")
    sink = CsvSink(tmp_path / "m.csv", split="test")
    for epoch in (1, 2):
        jsonl.on_epoch(epoch, {"loss": 0.5 / epoch, "accuracy": 0.5})
        sink.on_epoch(epoch, {"loss": 0.5 / epoch, "accuracy": 0.5})

    records = [json.loads(line) for line in (tmp_path / "m.jsonl").read_text().splitlines()]
    assert records[1] == {"epoch": 2, "split": "test", "seed": 3, "sha": "abc", "loss": 0.25, "accuracy": 0.5}
    with (tmp_path / "m.csv").open() as handle:
        reader = csv.DictReader(handle)
        rows = list(reader)
    assert reader.fieldnames == ["epoch", "split", "loss", "accuracy"]
    assert [row["epoch"] for row in rows] == ["1", "2"]
    assert rows[1]["loss"] == "0.25"


def test_csv_sink_rejects_metrics_outside_header(tmp_path):
    sink = CsvSink(tmp_path / "m.csv")
    sink(1, {"loss": 1.0})
    with pytest.raises(ValueError):
        sink(2, {"loss": 0.5, "macro_f1": 0.3})
    assert len((tmp_path / "m.csv").read_text().splitlines()) == 2


def test_summary_statistics(tmp_path):
    records = [{"epoch": i, "loss": float(4 - i), "split": "train"} for i in range(4)]
    summary = build_summary(records, tail=2)
    assert summary["records"] == 4
    assert summary["metrics"]["loss"] == {
        "min": 1.0,
        "max": 4.0,
        "mean": 2.5,
        "last": 1.0,
        "tail_mean": 1.5,
    }
    path = tmp_path / "m.jsonl"
    path.write_text("\n".join(json.dumps(r) for r in records))
    out = write_summary(path, tmp_path / "summary.json", tail=2)
    assert json.loads(open(out).read())["tail_window"] == 2


def test_compute_metrics():
    preds = np.array([[0.9, 0.1], [0.2, 0.8], [0.6, 0.4]])
    targs = np.array([[1.0, 0.0], [0.0, 1.0], [0.0, 1.0]])
    metrics = compute_metrics(["accuracy", "mse", "macro_f1"], preds, targs)
    assert metrics["accuracy"] == pytest.approx(2 / 3)
    assert metrics["mse"] == pytest.approx(np.mean((targs - preds) ** 2))
    # F1 is 2/3 for each class
    assert metrics["macro_f1"] == pytest.approx(2 / 3)
    with pytest.raises(KeyError):
        compute_metrics(["nope"], preds, targs)
    with pytest.raises(ValueError):
        compute_metrics(["mse"], preds, targs[:, :1])


def test_macro_f1_counts_unpredicted_classes_as_zero():
    targs = np.eye(3)
    preds = np.array([[0.9, 0.1, 0.0], [0.1, 0.9, 0.0], [0.8, 0.1, 0.1]])
    # class 0: 2*1/(1+2); class 1: 1.0; class 2: never predicted
    assert compute_metrics(["macro_f1"], preds, targs)["macro_f1"] == pytest.approx((2 / 3 + 1.0) / 3)


def test_plot_adapter_draws_train_and_test_curves(tmp_path):
    pytest.importorskip("matplotlib")
    adapter = PlotAdapter(tmp_path / "run", enable_plots=True)
    for epoch, loss in ((1, 0.3), (2, 0.2)):
        adapter.on_epoch(epoch, {"loss": loss, "accuracy": 0.5})
        adapter.on_test_epoch(epoch, {"loss": loss + 0.05, "accuracy": 0.6, "macro_f1": 0.55})
    assert adapter.close() == tmp_path / "run" / "curves.png"
    assert (tmp_path / "run" / "curves.png").stat().st_size > 0


def test_plot_adapter_disabled_is_noop(tmp_path):
    adapter = PlotAdapter(tmp_path / "plots", enable_plots=False)
    adapter.on_epoch(1, {"loss": 1.0})
    adapter.on_test_epoch(1, {"accuracy": 1.0})
    assert adapter.close() is None
    assert not (tmp_path / "plots").exists()
