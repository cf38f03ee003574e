"""Runtime settings read from the environment (and an optional .env file)."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv


DEFAULT_ACCOUNT = "RicardoLinck"
DEFAULT_API_URL = "https://api.github.com"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Configuration for a single crawl.

    ``request_timeout`` and ``max_concurrency`` are disabled when 0.
    """
    account: str = DEFAULT_ACCOUNT
    api_url: str = DEFAULT_API_URL
    request_timeout: float = 0.0
    max_concurrency: int = 0
    sort_results: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Build settings from environment variables.

        Args:
            env: Mapping to read from, ``os.environ`` when omitted

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        if env is None:
            env = os.environ

        account = env.get("GITHUB_ACCOUNT", DEFAULT_ACCOUNT).strip()
        if not account:
            raise ValueError("GITHUB_ACCOUNT must not be empty")

        return cls(
            account=account,
            api_url=env.get("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/"),
            request_timeout=_get_float(env, "REQUEST_TIMEOUT", 0.0),
            max_concurrency=_get_int(env, "MAX_CONCURRENCY", 0),
            sort_results=env.get("SORT_RESULTS", "false").strip().lower() in _TRUE_VALUES,
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )


def load_settings() -> Settings:
    """Load .env (or env) into the process environment, then read settings."""
    load_dotenv('.env') or load_dotenv('env')
    return Settings.from_env()
