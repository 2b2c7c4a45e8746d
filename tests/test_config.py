from __future__ import annotations

import pytest

from swms_risk.config import (
    DEFAULT_GENERATION_MODEL,
    DEFAULT_MIN_CALL_INTERVAL,
    load_engine_config,
    log_active_config,
)

_KEYS = [
    "OPENAI_API_KEY",
    "SWMS_AUGMENTATION_ENABLED",
    "SWMS_GENERATION_MODEL",
    "SWMS_GENERATION_TIMEOUT",
    "SWMS_MIN_CALL_INTERVAL",
    "SWMS_BATCH_DEADLINE",
    "SWMS_KNOWLEDGE_DIR",
    "SWMS_GENERATION_TEMPERATURE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_credentials():
    cfg = load_engine_config()
    assert cfg.augmentation_enabled is False
    assert cfg.generation_model == DEFAULT_GENERATION_MODEL
    assert cfg.min_call_interval_seconds == DEFAULT_MIN_CALL_INTERVAL
    assert cfg.batch_deadline_seconds is None
    assert cfg.knowledge_dir is None


def test_credentials_enable_augmentation(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    assert load_engine_config().augmentation_enabled is True
    monkeypatch.setenv("SWMS_AUGMENTATION_ENABLED", "false")
    assert load_engine_config().augmentation_enabled is False


def test_numeric_overrides_and_bad_values(monkeypatch):
    monkeypatch.setenv("SWMS_MIN_CALL_INTERVAL", "1.5")
    monkeypatch.setenv("SWMS_BATCH_DEADLINE", "120")
    monkeypatch.setenv("SWMS_GENERATION_TIMEOUT", "soon")
    cfg = load_engine_config()
    assert cfg.min_call_interval_seconds == 1.5
    assert cfg.batch_deadline_seconds == 120.0
    assert cfg.generation_timeout_seconds == 30.0


def test_log_never_prints_the_key(monkeypatch, capsys):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-secret-value")
    log_active_config()
    out = capsys.readouterr().out
    assert "sk-secret-value" not in out
    assert "credentials=set" in out
    assert out.startswith("[config]")
