# path: tests/config/test_config_surface.py
from __future__ import annotations

from config.loader import _map_yaml_to_env_keys
from config.models import ConnectionRetryStrategy
from config.settings import Settings, settings
from reconnect.backoff import BackoffPlan


def test_shipped_defaults_match_backoff_constants():
    strategy = settings.retry_strategy
    assert isinstance(strategy, ConnectionRetryStrategy)
    assert BackoffPlan.from_strategy(strategy) == BackoffPlan.from_strategy(None)


def test_flat_keys_build_strategy():
    s = Settings(BACKOFF_EXPONENT_BASE=3, BACKOFF_FACTOR_MS=25, BACKOFF_RETRIES=4)
    assert s.retry_strategy == ConnectionRetryStrategy(exponent_base=3, factor=25, number_of_retries=4)


def test_nested_section_wins_over_flat_keys():
    s = Settings(
        BACKOFF_FACTOR_MS=25,
        connection_retry={"exponent_base": 1, "factor": 300, "number_of_retries": 2},
    )
    assert s.retry_strategy.factor == 300
    plan = BackoffPlan.from_strategy(s.retry_strategy)
    assert (plan.base, plan.factor, plan.attempts) == (1, 300, 2)


def test_nested_overrides_env(monkeypatch):
    monkeypatch.setenv("CONNECTION_RETRY__FACTOR", "250")
    s = Settings()
    assert s.retry_strategy.factor == 250
    assert s.retry_strategy.exponent_base == 2


def test_yaml_mapping():
    out = _map_yaml_to_env_keys(
        {
            "backoff": {"exponent_base": "3", "factor_ms": 50, "retries": 6},
            "logging": {"level": "warning"},
            "env": "Prod",
            "connection_retry": {"factor": 10},
        }
    )
    assert out == {
        "connection_retry": {"factor": 10},
        "BACKOFF_EXPONENT_BASE": "3",
        "BACKOFF_FACTOR_MS": 50,
        "BACKOFF_RETRIES": 6,
        "LOG_LEVEL": "warning",
        "ENV": "prod",
    }


def test_blank_strategy_values_defer_to_plan_defaults():
    strategy = ConnectionRetryStrategy(exponent_base=None, factor="", number_of_retries=3)
    assert (strategy.exponent_base, strategy.factor) == (0, 0)
    plan = BackoffPlan.from_strategy(strategy)
    assert (plan.base, plan.factor, plan.attempts) == (2, 100, 3)


def test_yaml_mapping_ignores_wrong_shapes():
    out = _map_yaml_to_env_keys({"backoff": 5, "logging": "debug", "env": 5, "connection_retry": [1, 2]})
    assert out == {}
