from __future__ import annotations

import pytest

from pixiu.core import config
from pixiu.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_float,
    get_config,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("true", True), ("Yes", True), ("on", True), ("0", False), ("off", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("PIXIU_FLAG", raw)
    assert env_bool("PIXIU_FLAG") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("PIXIU_FLAG", raising=False)
    assert env_bool("PIXIU_FLAG", True) is True


def test_env_float(monkeypatch):
    monkeypatch.setenv("PIXIU_SECONDS", "2.5")
    assert env_float("PIXIU_SECONDS") == 2.5
    monkeypatch.setenv("PIXIU_SECONDS", "  ")
    assert env_float("PIXIU_SECONDS", 1.0) == 1.0


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("development", DevelopmentConfig),
        ("testing", TestingConfig),
        ("PRODUCTION", ProductionConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config(monkeypatch, name, expected):
    monkeypatch.setenv(config.ENV_VAR, name)
    assert get_config() is expected


def test_testing_config_disables_auth():
    assert TestingConfig.TESTING is True
    assert TestingConfig.AUTH_REQUIRED is False
    assert TestingConfig.API_BASE_PREFIX == "/pixiu"


def test_app_uses_config(app):
    assert app.config["TESTING"] is True
    assert app.config["PROPAGATE_EXCEPTIONS"] is False
