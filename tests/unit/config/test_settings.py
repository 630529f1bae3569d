from __future__ import annotations

import json

import pytest

from option_strategy_engine.config.settings import EngineConfig, TruncationCaps, default_caps, load_config
from option_strategy_engine.exceptions import ConfigValidationError
from option_strategy_engine.models.strategy import StrategyFamily


def test_defaults():
    config = load_config(None)

    assert config.risk_free_rate == 0.05
    assert config.days_per_year == 365
    assert config.revaluation_fraction == 0.5
    assert config.caps == default_caps()
    assert config.caps_for(StrategyFamily.STRANGLE) == TruncationCaps(15, 5)
    assert config.caps_for(StrategyFamily.SINGLE_CALL) == TruncationCaps()


def test_yaml_overrides_merge_with_default_caps(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text(
        "engine:\n"
        "  risk_free_rate: 0.03\n"
        "  caps:\n"
        "    iron_condor:\n"
        "      all_limit: 10\n"
        "      ranked_limit: 3\n"
    )

    config = load_config(path)

    assert config.risk_free_rate == 0.03
    assert config.caps[StrategyFamily.IRON_CONDOR] == TruncationCaps(10, 3)
    assert config.caps[StrategyFamily.STRANGLE] == TruncationCaps(15, 5)


def test_json_config(tmp_path):
    path = tmp_path / "engine.json"
    path.write_text(json.dumps({"days_per_year": 252, "pricer": "bs"}))

    config = load_config(path)

    assert config.days_per_year == 252
    assert config.pricer == "bs"


def test_unknown_key_rejected(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("seed: 42\n")

    with pytest.raises(ConfigValidationError, match="Unknown config keys"):
        load_config(path)


def test_unknown_family_in_caps_rejected():
    with pytest.raises(ConfigValidationError):
        EngineConfig.from_dict({"caps": {"calendar": {"all_limit": 5}}})


@pytest.mark.parametrize("caps", [{"all_limit": 0}, {"ranked_limit": -1}, {"ranked_limit": 2.5}, {"top": 3}])
def test_invalid_caps_rejected(caps):
    with pytest.raises(ConfigValidationError):
        EngineConfig.from_dict({"caps": {"strangle": caps}})


def test_null_caps_mean_uncapped():
    config = EngineConfig.from_dict({"caps": {"iron_condor": None}})

    assert config.caps_for(StrategyFamily.IRON_CONDOR) == TruncationCaps()


@pytest.mark.parametrize(
    "kwargs",
    [{"risk_free_rate": 2.0}, {"days_per_year": 0}, {"revaluation_fraction": 0.0}, {"butterfly_tolerance": -1.0}],
)
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ConfigValidationError):
        EngineConfig(**kwargs)


def test_missing_file_and_bad_suffix(tmp_path):
    with pytest.raises(ConfigValidationError):
        load_config(tmp_path / "absent.yaml")
    path = tmp_path / "engine.toml"
    path.write_text("risk_free_rate = 0.05\n")
    with pytest.raises(ConfigValidationError):
        load_config(path)


def test_round_trip_dict():
    config = EngineConfig()

    assert EngineConfig.from_dict(config.to_dict()).to_dict() == config.to_dict()


def test_constructor_caps_merge_over_defaults():
    config = EngineConfig(caps={"single_call": {"all_limit": 2, "ranked_limit": 1}})

    assert config.caps_for(StrategyFamily.SINGLE_CALL) == TruncationCaps(2, 1)
    assert config.caps_for(StrategyFamily.IRON_CONDOR) == TruncationCaps(20, 5)
    assert config.caps_for(StrategyFamily.STRANGLE) == TruncationCaps(15, 5)
