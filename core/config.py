# =============================================================================
# core/config.py  —  Startup Configuration
# =============================================================================
#
# All configuration comes from the process environment.  main.py calls
# python-dotenv's load_dotenv() first, so a local .env file works too.
#
# The four Twitter credentials are REQUIRED.  If any is missing we fail at
# startup with every missing name listed, instead of failing on the first
# tool call.
# =============================================================================

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from core.errors import ConfigError

REQUIRED_VARS = ("API_KEY", "API_SECRET_KEY", "ACCESS_TOKEN", "ACCESS_TOKEN_SECRET")

DEFAULT_LOG_DIR = Path.home() / ".twitter-mcp"
DEFAULT_RATE_LIMIT_WINDOW_SECONDS = 900.0   # Twitter's 15-minute window


@dataclass(frozen=True)
class Config:
    api_key: str
    api_secret_key: str
    access_token: str
    access_token_secret: str

    log_dir: Path = DEFAULT_LOG_DIR
    log_level: str = "INFO"

    # Client-side rate limiting is off unless a limit is configured.
    rate_limit: Optional[int] = None
    rate_limit_window_seconds: float = DEFAULT_RATE_LIMIT_WINDOW_SECONDS

    def __repr__(self) -> str:
        # Never print the secrets.
        return (f"Config(log_dir={str(self.log_dir)!r}, log_level={self.log_level!r}, "
                f"rate_limit={self.rate_limit!r})")


def _parse_positive(env: Mapping[str, str], name: str, cast):
    raw = env.get(name, "").strip()
    if not raw:
        return None
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """Build a Config from `env` (defaults to os.environ).

    Raises:
        ConfigError: a required credential is missing/blank or an optional
            setting is malformed.
    """
    env = os.environ if env is None else env

    missing = [name for name in REQUIRED_VARS if not env.get(name, "").strip()]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    log_dir = env.get("TWITTER_MCP_LOG_DIR", "").strip()
    window = _parse_positive(env, "TWITTER_RATE_LIMIT_WINDOW_SECONDS", float)

    return Config(
        api_key=env["API_KEY"].strip(),
        api_secret_key=env["API_SECRET_KEY"].strip(),
        access_token=env["ACCESS_TOKEN"].strip(),
        access_token_secret=env["ACCESS_TOKEN_SECRET"].strip(),
        log_dir=Path(log_dir).expanduser() if log_dir else DEFAULT_LOG_DIR,
        log_level=env.get("TWITTER_MCP_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        rate_limit=_parse_positive(env, "TWITTER_RATE_LIMIT_PER_WINDOW", int),
        rate_limit_window_seconds=window or DEFAULT_RATE_LIMIT_WINDOW_SECONDS,
    )
