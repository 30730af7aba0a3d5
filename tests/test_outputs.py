import json
import subprocess

from pylaunchpad import outputs

SWAY_OUTPUTS = json.dumps([
    {"name": "eDP-1", "rect": {"x": 0, "y": 0, "width": 1920, "height": 1080}},
    {"name": "DP-1", "rect": {"x": 1920, "y": 0, "width": 2560, "height": 1440}},
    {"rect": {"x": 5000, "y": 0}},
])


def test_parse_sway_outputs():
    assert outputs.parse_sway_outputs(SWAY_OUTPUTS) == {"eDP-1": (0, 0), "DP-1": (1920, 0)}


def test_map_outputs_by_position():
    monitors = [("left", 0, 0), ("right", 1920, 0), ("other", 0, 1080)]
    result = outputs.map_outputs({"eDP-1": (0, 0), "DP-1": (1920, 0)}, monitors)
    assert result == {"eDP-1": "left", "DP-1": "right"}


def test_sway_outputs_runs_swaymsg(monkeypatch):
    seen = {}

    def fake_run(args, **kwargs):
        seen["args"] = args
        seen["timeout"] = kwargs["timeout"]
        return subprocess.CompletedProcess(args, 0, stdout=SWAY_OUTPUTS, stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert outputs.sway_outputs()["DP-1"] == (1920, 0)
    assert seen["args"] == ["swaymsg", "-t", "get_outputs", "-r"]
    assert seen["timeout"] == outputs.QUERY_TIMEOUT


def test_sway_outputs_failure_is_empty(monkeypatch):
    def timeout(args, **kwargs):
        raise subprocess.TimeoutExpired(args, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", timeout)
    assert outputs.sway_outputs() == {}


def test_missing_swaymsg_is_empty(monkeypatch):
    def missing(args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", args[0])

    monkeypatch.setattr(subprocess, "run", missing)
    assert outputs.sway_outputs() == {}


def test_garbage_output_is_empty(monkeypatch):
    monkeypatch.setattr(subprocess, "run",
                        lambda args, **kw: subprocess.CompletedProcess(args, 0, stdout="nope"))
    assert outputs.sway_outputs() == {}
