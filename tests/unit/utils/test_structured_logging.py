import io
import json
import logging

from option_strategy_engine.utils.logging import configure_logging, get_logger


def test_json_lines_carry_context(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    stream = io.StringIO()
    configure_logging(run_id="run-1", component="analysis", stream=stream)

    get_logger("ose.test").info("done", extra={"family": "straddle", "candidates": 5})

    record = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert record["message"] == "done"
    assert record["run_id"] == "run-1"
    assert record["component"] == "analysis"
    assert record["family"] == "straddle"
    assert record["candidates"] == 5
    assert record["level"] == "INFO"


def test_logger_component_default_not_overridden(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    stream = io.StringIO()
    configure_logging(component="cli", stream=stream)

    get_logger("ose.test.data", component="data").warning("dropped rows")

    record = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert record["component"] == "data"
