"""
Tests for the conductor command group.

- Use run_cli(...) from tests/cli/utils.py to invoke the real CLI command.
"""

from __future__ import annotations

import json

import pytest

from tests.cli.utils import run_cli


@pytest.fixture(autouse=True)
def _logging(restore_logging):
    yield


def test_modes_json_lists_all_modes():
    exit_code, stdout = run_cli(["conductor", "modes", "--json"])

    assert exit_code == 0
    payload = json.loads(stdout)
    assert payload["status"] == "ok"
    assert [mode["key"] for mode in payload["modes"]] == ["fixed", "realtime", "LAD"]


def test_modes_human_output():
    exit_code, stdout = run_cli(["conductor", "modes"])

    assert exit_code == 0
    assert "Real-time Mode" in stdout
    assert "LAD Mode" in stdout


def test_simulate_realtime_applies_default_deltas():
    exit_code, stdout = run_cli(
        ["conductor", "simulate", "--mode", "realtime", "--ticks", "3", "--json"]
    )

    assert exit_code == 0
    payload = json.loads(stdout)
    assert payload["mode"] == "realtime"
    assert payload["time_system"] == "utc"
    assert payload["follow"] is True
    assert payload["deltas"] == {"start": 900_000, "end": 0}
    assert payload["bounds"][-1] == {"tick": 3, "start": -897_000, "end": 3_000}


def test_simulate_with_delta_override():
    exit_code, stdout = run_cli(
        [
            "conductor",
            "simulate",
            "--mode",
            "LAD",
            "--ticks",
            "1",
            "--delta-start",
            "5000",
            "--delta-end",
            "1000",
            "--json",
        ]
    )

    assert exit_code == 0
    payload = json.loads(stdout)
    assert payload["deltas"] == {"start": 5000, "end": 1000}
    assert payload["bounds"] == [{"tick": 1, "start": -4000, "end": 2000}]


def test_simulate_fixed_does_not_advance():
    exit_code, stdout = run_cli(["conductor", "simulate", "--mode", "fixed", "--ticks", "2"])

    assert exit_code == 0
    assert "follow=False" in stdout
    assert "tick 2: start=-1800000.0 end=0.0" in stdout


def test_simulate_unknown_mode_fails():
    exit_code, stdout = run_cli(["conductor", "simulate", "--mode", "bogus", "--json"])

    assert exit_code == 1
    payload = json.loads(stdout)
    assert payload["status"] == "error"
    assert "bogus" in payload["errors"][0]


def test_simulate_fixed_rejects_deltas():
    exit_code, stdout = run_cli(
        ["conductor", "simulate", "--mode", "fixed", "--delta-start", "10", "--json"]
    )

    assert exit_code == 1
    assert json.loads(stdout)["status"] == "error"
