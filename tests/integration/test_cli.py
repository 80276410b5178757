import json
from pathlib import Path

import pytest

from cli.main import main


def test_cli_separable_preset(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    main(["--preset", "separable-min", "--epochs", "50"])
    run_dir = Path("runs/separable-min")
    assert (run_dir / "metrics_train.jsonl").exists()
    assert (run_dir / "summary.json").exists()
    assert (run_dir / "network.npz").exists()
    payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert payload["epochs"] == 50
    assert 0.0 <= payload["accuracy"] <= 1.0


def test_cli_config_override_and_dump(tmp_path, capsys):
    override = tmp_path / "override.json"
    override.write_text(json.dumps({"train": {"epochs": 3, "momentum": 0.2}}))
    dump = tmp_path / "resolved.json"
    main(
        [
            "--preset",
            "logistic-min",
            "--config",
            str(override),
            "--run-dir",
            str(tmp_path / "run"),
            "--dump-config",
            str(dump),
        ]
    )
    resolved = json.loads(dump.read_text())
    assert resolved["train"]["epochs"] == 3
    assert resolved["train"]["momentum"] == 0.2
    assert resolved["model"]["hidden"] == []
    assert (tmp_path / "run" / "config.json").exists()


def test_cli_lists_presets(capsys):
    with pytest.raises(SystemExit) as info:
        main(["--list-presets"])
    assert info.value.code == 0
    names = capsys.readouterr().out.split()
    assert {"kinect-media", "separable-min", "logistic-min"} <= set(names)
