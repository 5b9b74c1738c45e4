from __future__ import annotations

from pathlib import Path

import pytest

from flash_stats.config.constants import DEFAULT_INST_STATS_PERIOD
from flash_stats.errors import ConfigurationError
from flash_stats.settings import Settings, get_settings


def test_defaults(monkeypatch) -> None:
    for var in ("INST_STATS_PERIOD", "STRICT_METRICS", "RETAIN_ERASED_KEYS", "LOG_DIR"):
        monkeypatch.delenv(f"FLASH_STATS_{var}", raising=False)

    settings = Settings()

    assert settings.inst_stats_period == DEFAULT_INST_STATS_PERIOD
    assert settings.strict_metrics is False
    assert settings.retain_erased_keys is False
    assert settings.classify_misses is True
    assert settings.log_dir is None


def test_environment_overrides(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("FLASH_STATS_INST_STATS_PERIOD", "500")
    monkeypatch.setenv("FLASH_STATS_STRICT_METRICS", "true")
    monkeypatch.setenv("FLASH_STATS_LOG_DIR", str(tmp_path))

    settings = get_settings()

    assert settings.inst_stats_period == 500
    assert settings.strict_metrics is True
    assert settings.log_dir == Path(tmp_path)
    assert get_settings() is settings


def test_env_file(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("FLASH_STATS_INST_STATS_PERIOD", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("FLASH_STATS_INST_STATS_PERIOD=64\n", encoding="utf-8")

    settings = get_settings((str(env_file),))

    assert settings.inst_stats_period == 64


def test_invalid_period_is_configuration_error(monkeypatch) -> None:
    monkeypatch.setenv("FLASH_STATS_INST_STATS_PERIOD", "0")

    with pytest.raises(ConfigurationError) as excinfo:
        get_settings()

    assert excinfo.value.context["config_key"] == "inst_stats_period"
    assert not excinfo.value.recoverable
