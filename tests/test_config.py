from __future__ import annotations

from pathlib import Path

import pytest

from core.config import DEFAULT_LOG_DIR, load_config
from core.errors import ConfigError

CREDENTIALS = {
    "API_KEY": "key",
    "API_SECRET_KEY": "secret",
    "ACCESS_TOKEN": "token",
    "ACCESS_TOKEN_SECRET": "token-secret",
}


def test_loads_all_credentials() -> None:
    config = load_config(CREDENTIALS)
    assert config.api_key == "key"
    assert config.access_token_secret == "token-secret"
    assert config.log_dir == DEFAULT_LOG_DIR
    assert config.rate_limit is None


def test_missing_credentials_are_all_listed() -> None:
    env = {"API_KEY": "key", "ACCESS_TOKEN": "   "}
    with pytest.raises(ConfigError) as info:
        load_config(env)
    message = str(info.value)
    for name in ("API_SECRET_KEY", "ACCESS_TOKEN", "ACCESS_TOKEN_SECRET"):
        assert name in message
    assert "API_KEY," not in message


def test_optional_settings(tmp_path) -> None:
    env = dict(CREDENTIALS,
               TWITTER_MCP_LOG_DIR=str(tmp_path),
               TWITTER_MCP_LOG_LEVEL="debug",
               TWITTER_RATE_LIMIT_PER_WINDOW="50")
    config = load_config(env)
    assert config.log_dir == Path(tmp_path)
    assert config.log_level == "DEBUG"
    assert config.rate_limit == 50
    assert config.rate_limit_window_seconds == 900


@pytest.mark.parametrize("value", ["lots", "0", "-3"])
def test_bad_rate_limit_is_config_error(value) -> None:
    with pytest.raises(ConfigError):
        load_config(dict(CREDENTIALS, TWITTER_RATE_LIMIT_PER_WINDOW=value))


def test_repr_hides_secrets() -> None:
    assert "secret" not in repr(load_config(CREDENTIALS))
