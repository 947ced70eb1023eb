import logging

import pytest

from charges_fields import Bounds, TracerConfig
from charges_fields.logging_config import setup_logging


def test_defaults():
    cfg = TracerConfig()
    assert cfg.step == 0.01
    assert cfg.max_steps == 5000
    assert cfg.close_tolerance == cfg.step
    assert cfg.bounds == Bounds(-5.0, -5.0, 5.0, 5.0)
    assert cfg.method == "rk4"


@pytest.mark.parametrize("kwargs", [
    {"step": 0.0},
    {"max_steps": 0},
    {"capture_radius": -1.0},
    {"arrow_every": 10, "arrow_offset": 10},
    {"method": "midpoint"},
    {"bounds": (1, 0, 0, 1)},
])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        TracerConfig(**kwargs)


def test_from_dict_ignores_unknown_keys():
    cfg = TracerConfig.from_dict({"step": 0.05, "bounds": [0, 0, 2, 2], "colour": "red"})
    assert cfg.step == 0.05
    assert cfg.bounds.contains((1.0, 1.0))
    assert cfg.to_dict()["bounds"] == [0.0, 0.0, 2.0, 2.0]


def test_from_env(monkeypatch):
    monkeypatch.setenv("CHARGES_FIELDS_STEP", "0.02")
    monkeypatch.setenv("CHARGES_FIELDS_METHOD", "euler")
    cfg = TracerConfig.from_env(max_steps=10)
    assert cfg.step == 0.02
    assert cfg.method == "euler"
    assert cfg.max_steps == 10


def test_from_env_override_wins(monkeypatch):
    monkeypatch.setenv("CHARGES_FIELDS_MAX_STEPS", "100")
    assert TracerConfig.from_env(max_steps=7).max_steps == 7


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "run.log"
    logger = setup_logging(logging.DEBUG, str(log_file))
    try:
        logging.getLogger("charges_fields.tracker").debug("queue rebuilt")
        for h in logger.handlers:
            h.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "Logging initialized." in text
        assert "charges_fields.tracker - DEBUG - queue rebuilt" in text
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)


def test_setup_logging_console_only():
    logger = setup_logging(logging.WARNING, log_file=None)
    try:
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)
        assert logger.level == logging.WARNING
    finally:
        for h in list(logger.handlers):
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)
