from __future__ import annotations

import json
import sys

import pytest
from typer.testing import CliRunner

from option_strategy_engine.cli import main as cli_main
from option_strategy_engine.cli.main import app
from option_strategy_engine.cli.validation import validate_analyze_inputs
from option_strategy_engine.exceptions import ConfigValidationError

runner = CliRunner()


def test_analyze_demo_json():
    result = runner.invoke(app, ["analyze", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["family"] == "single_call"
    assert len(payload["all"]) == 5
    assert payload["inputs"]["spotPrice"] == "25.50"
    assert payload["inputs"]["impliedVol"] == "35.0"


def test_analyze_explicit_market_and_ladder(tmp_path):
    ladder = tmp_path / "ladder.csv"
    ladder.write_text("strike,call,put\n95,7.0,1.0\n100,3.5,2.6\n105,1.2,5.4\n")
    output = tmp_path / "out" / "result.json"

    result = runner.invoke(
        app,
        [
            "analyze",
            "--family", "bull_call_spread",
            "--spot", "100",
            "--vol", "25",
            "--days", "45",
            "--symbol", "xyz",
            "--ladder", str(ladder),
            "--output", str(output),
            "--json",
        ],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(output.read_text())
    assert payload["inputs"]["symbol"] == "XYZ"
    assert payload["inputs"]["daysToExpiration"] == 45
    assert [row["description"] for row in payload["all"]][0] == "Buy 95 / Sell 100 Call"


def test_analyze_renders_tables():
    result = runner.invoke(app, ["analyze", "--family", "straddle", "--top", "2"])

    assert result.exit_code == 0, result.output
    assert "Top 2 by reward" in result.stdout


def test_insufficient_strikes_exit_code(tmp_path):
    ladder = tmp_path / "ladder.csv"
    ladder.write_text("strike,call_premium,put_premium\n20,5.8,0.1\n25,1.8,1.5\n")

    result = runner.invoke(app, ["analyze", "--family", "iron_condor", "--ladder", str(ladder), "--json"])

    assert result.exit_code == 3
    assert "needs at least 4 strikes" in json.loads(result.stdout)["error"]


def test_partial_market_inputs_rejected():
    result = runner.invoke(app, ["analyze", "--spot", "25"])

    assert isinstance(result.exception, ConfigValidationError)


def test_families_command():
    result = runner.invoke(app, ["families"])

    assert result.exit_code == 0, result.output
    assert "9 families available" in result.stdout


@pytest.mark.parametrize(
    "kwargs",
    [
        {"spot": 25.0, "vol": None, "days": None, "top": 3},
        {"spot": 25.0, "vol": 0.0, "days": 30, "top": 3},
        {"spot": 25.0, "vol": 600.0, "days": 30, "top": 3},
        {"spot": -1.0, "vol": 35.0, "days": 30, "top": 3},
        {"spot": None, "vol": None, "days": None, "top": 0},
    ],
)
def test_validate_analyze_inputs(kwargs):
    with pytest.raises(ConfigValidationError):
        validate_analyze_inputs(**kwargs)


def test_main_maps_validation_errors_to_exit_code(monkeypatch):
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: None)
    monkeypatch.setattr(sys, "argv", ["ose", "analyze", "--spot", "25"])

    with pytest.raises(SystemExit) as exc:
        cli_main.main()

    assert exc.value.code == 1
