"""Tests for settings and conversion config."""

import logging

import pytest

from pathnorm import config as config_module
from pathnorm.config import ConversionConfig, Settings, configure_logging


def test_fixed_steps():
    config = ConversionConfig(bezier_steps=4)
    assert not config.uses_tolerance


def test_tolerance():
    config = ConversionConfig(tolerance=0.1)
    assert config.uses_tolerance


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"bezier_steps": 4, "tolerance": 0.1},
        {"bezier_steps": 0},
        {"bezier_steps": -2},
        {"tolerance": 0.0},
        {"tolerance": -1.0},
        {"tolerance": float("nan")},
    ],
)
def test_invalid_configs(kwargs):
    with pytest.raises(ValueError):
        ConversionConfig(**kwargs)


def test_default_uses_settings(monkeypatch):
    monkeypatch.setattr(config_module.settings, "bezier_steps", 12)
    assert ConversionConfig.default() == ConversionConfig(bezier_steps=12)


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("PATHNORM_BEZIER_STEPS", "5")
    monkeypatch.setenv("PATHNORM_LOG_LEVEL", "info")
    s = Settings()
    assert s.bezier_steps == 5
    assert s.log_level == "info"


def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("PATHNORM_BEZIER_STEPS", raising=False)
    monkeypatch.delenv("PATHNORM_LOG_LEVEL", raising=False)
    s = Settings(_env_file=None)
    assert s.bezier_steps == 8
    assert s.log_level == "warning"


def test_configure_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    configure_logging("debug")
    configure_logging("not-a-level")
    assert calls[0]["level"] == logging.DEBUG
    assert calls[1]["level"] == logging.WARNING
    assert calls[0]["format"] == config_module.LOG_FORMAT
