import json

import pytest

import app
from config.config_loader import DEFAULT_CONFIG


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "runtime_config.json"
    config = dict(DEFAULT_CONFIG, output_directory=str(tmp_path / "logs"), max_steps=20,
                  image_width=40, image_height=30, image_directory=str(tmp_path / "images"))
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def test_cli_export(config_path, capsys):
    app.main(["--config", str(config_path), "--machine", "1RB1LB_1LA1RZ", "--export"])
    out = capsys.readouterr().out
    assert out.startswith("blank: '0'\nstart state: A\ntable:\n")
    assert "0: {write: 1, L: A}" in out


def test_cli_trace_logs_run(config_path, tmp_path, capsys):
    app.main(["--config", str(config_path), "--machine", "mAQACAQECAAAAAAAA"])
    out = capsys.readouterr().out
    assert "A00" in out
    assert "1 steps" in out

    logs = list((tmp_path / "logs").glob("bbtrace_*.jsonl"))
    assert len(logs) == 1
    entry = json.loads(logs[0].read_text(encoding="utf-8").splitlines()[0])
    assert entry["halted"] is True
    assert entry["steps"] == 1


def test_cli_image(config_path, tmp_path):
    image = tmp_path / "trace.png"
    app.main(["--config", str(config_path), "--machine", "1RB1LB_1LA1RZ", "--image", str(image)])
    assert image.read_bytes().startswith(b"\x89PNG")


def test_missing_config_exits(tmp_path):
    with pytest.raises(SystemExit):
        app.main(["--config", str(tmp_path / "missing.json"), "--machine", "1RB1LB_1LA1RZ"])
