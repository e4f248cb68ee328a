"""Tests for environment configuration."""

import logging

from circular_analyzer.config import Config


def test_defaults(monkeypatch):
    for key in ("CIRCULAR_MAX_DEPTH", "CIRCULAR_TOP_N", "CIRCULAR_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    config = Config.from_env()
    assert config.MAX_DEPTH == 20
    assert config.TOP_N == 25
    assert config.LOG_LEVEL == "INFO"


def test_from_env(monkeypatch):
    monkeypatch.setenv("CIRCULAR_MAX_DEPTH", "7")
    monkeypatch.setenv("CIRCULAR_TOP_N", "10")
    monkeypatch.setenv("CIRCULAR_LOG_LEVEL", "debug")
    config = Config.from_env()
    assert config.MAX_DEPTH == 7
    assert config.TOP_N == 10
    assert config.LOG_LEVEL == "DEBUG"


def test_invalid_integer_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("CIRCULAR_MAX_DEPTH", "deep")
    with caplog.at_level(logging.WARNING, logger="circular_analyzer.config"):
        config = Config.from_env()
    assert config.MAX_DEPTH == 20
    assert "CIRCULAR_MAX_DEPTH" in caplog.text
