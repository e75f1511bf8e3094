"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

from repairflow.core.config import AppSettings, CheckpointSettings, PolicySettings


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.checkpoint.granularity == "every_step"
    assert settings.checkpoint.backend == "memory"


def test_policy_defaults_are_reference_values():
    config = PolicySettings()
    assert config.classify_modulus == 4
    assert config.recover_threshold == 1000
    assert config.enqueue_modulus == 3
    assert config.print_modulus == 2


def test_env_override(monkeypatch):
    monkeypatch.setenv("REPAIRFLOW_CHECKPOINT_GRANULARITY", "start_end")
    monkeypatch.setenv("REPAIRFLOW_POLICY_RECOVER_THRESHOLD", "10")
    assert CheckpointSettings().granularity == "start_end"
    assert PolicySettings().recover_threshold == 10
