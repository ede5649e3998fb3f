from __future__ import annotations

import json
import time
from pathlib import Path

import pytest

from timerkit.cli import main


def _snapshot(path: Path) -> dict:
    return json.loads(path.read_text())


def test_cli_drives_timer_through_state_file(tmp_path: Path, capsys):
    state = tmp_path / "t.json"
    assert main(["--state", str(state), "start", "--label", "job"]) == 0
    snap = _snapshot(state)
    assert snap["label"] == "job"
    assert snap["startTimestamp"] == snap["currentStartTimestamp"]
    assert capsys.readouterr().out.startswith("job: 0 d")

    time.sleep(0.01)
    assert main(["--state", str(state), "pause"]) == 0
    snap = _snapshot(state)
    assert snap["pauseCount"] == 1
    assert "currentStartTimestamp" not in snap

    time.sleep(0.01)
    assert main(["--state", str(state), "resume"]) == 0
    time.sleep(0.01)
    assert main(["--state", str(state), "stop"]) == 0
    capsys.readouterr()

    assert main(["--state", str(state), "show", "--json"]) == 0
    shown = json.loads(capsys.readouterr().out)
    assert shown["state"] == "stopped"
    assert shown["ms"] > 0
    assert shown["pauseMs"] > 0

    assert main(["--state", str(state), "show", "--template", "%label|%d"]) == 0
    assert capsys.readouterr().out.strip() == "job: |0"

    assert main(["--state", str(state), "clear"]) == 0
    assert _snapshot(state) == {"accumulatedMs": 0, "pauseCount": 0, "label": "job"}


def test_cli_show_without_state_file(tmp_path: Path, capsys):
    assert main(["--state", str(tmp_path / "missing.json"), "show"]) == 0
    assert capsys.readouterr().out.strip() == "0 d, 0 h, 0 m, 0 s, 0 ms"


def test_cli_reports_corrupt_state(tmp_path: Path, capsys):
    state = tmp_path / "bad.json"
    state.write_text("{not json")
    assert main(["--state", str(state), "pause"]) == 1
    assert "invalid timer snapshot" in capsys.readouterr().err


def test_cli_bench(tmp_path: Path, capsys):
    assert main(["--state", str(tmp_path / "s.json"), "bench", "time:perf_counter", "--repeat", "2"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 2
    assert all(line.startswith("perf_counter: ") for line in lines)


def test_cli_bench_rejects_bad_targets(tmp_path: Path, capsys):
    assert main(["bench", "math:pi"]) == 1
    assert "expects a callable" in capsys.readouterr().err
    assert main(["bench", "no-colon"]) == 1
    assert main(["bench", "math:nope"]) == 1


def test_cli_reports_deeply_nested_state(tmp_path: Path, capsys):
    state = tmp_path / "nested.json"
    state.write_text("[" * 100_000 + "]" * 100_000)
    assert main(["--state", str(state), "pause"]) == 1
    assert "invalid timer snapshot" in capsys.readouterr().err


def test_cli_does_not_mask_errors_outside_target_resolution(tmp_path: Path, monkeypatch):
    from timerkit.timer import Timer

    def broken(self):
        raise AttributeError("bug")

    monkeypatch.setattr(Timer, "pause", broken)
    with pytest.raises(AttributeError):
        main(["--state", str(tmp_path / "s.json"), "pause"])
