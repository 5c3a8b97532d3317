r"""
Tests for micro_bench.config module.
"""

import pytest

from micro_bench.config import (
    DEFAULT_TIME_BUDGET_MS,
    ENV_PREFIX,
    ESTIMATE_THRESHOLD_MS,
    RunnerConfig,
    get_env,
    get_time_budget,
)


class TestDefaults:
    def test_default_budget(self):
        assert DEFAULT_TIME_BUDGET_MS == 1000

    def test_estimate_threshold(self):
        assert ESTIMATE_THRESHOLD_MS == 10_000

    def test_default_config(self):
        config = RunnerConfig()
        assert config.time_budget_ms == DEFAULT_TIME_BUDGET_MS
        assert config.estimate_threshold_ms == ESTIMATE_THRESHOLD_MS
        assert config.verbose is False


class TestGetEnv:
    def test_get_env_not_set(self, monkeypatch):
        monkeypatch.delenv(f"{ENV_PREFIX}TEST_NOT_SET", raising=False)
        assert get_env("TEST_NOT_SET") is None

    def test_get_env_with_default(self, monkeypatch):
        monkeypatch.delenv(f"{ENV_PREFIX}TEST_NOT_SET", raising=False)
        assert get_env("TEST_NOT_SET", default="default_value") == "default_value"

    def test_get_env_set(self, monkeypatch):
        monkeypatch.setenv(f"{ENV_PREFIX}TEST_VAR", "test_value")
        assert get_env("TEST_VAR") == "test_value"

    def test_env_prefix(self):
        assert ENV_PREFIX == "MICRO_BENCH_"


class TestTimeBudget:
    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("MICRO_BENCH_TIME_BUDGET", raising=False)
        assert get_time_budget() == DEFAULT_TIME_BUDGET_MS

    def test_override(self, monkeypatch):
        monkeypatch.setenv("MICRO_BENCH_TIME_BUDGET", "250")
        assert get_time_budget() == 250.0

    @pytest.mark.parametrize("raw", ["fast", "0", "-5"])
    def test_invalid_override(self, monkeypatch, raw):
        monkeypatch.setenv("MICRO_BENCH_TIME_BUDGET", raw)
        with pytest.raises(ValueError, match="MICRO_BENCH_TIME_BUDGET"):
            get_time_budget()

    def test_config_from_env(self, monkeypatch):
        monkeypatch.setenv("MICRO_BENCH_TIME_BUDGET", "40")
        config = RunnerConfig.from_env(verbose=True)
        assert config.time_budget_ms == 40.0
        assert config.verbose is True
