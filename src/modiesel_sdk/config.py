from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

PREFIX = "MODIESEL_"
_TRUTHY = {"1", "true", "yes", "on"}

N = TypeVar("N", int, float)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 0
    retry_backoff_seconds: float = 0.3
    max_connections: int = 10
    cache_ttl_seconds: float = 3.0
    verify_ssl: bool = True

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def _env(name: str) -> str | None:
    value = os.getenv(PREFIX + name)
    if value is None:
        return None
    return value.strip() or None


def _number(name: str, default: N, cast: Callable[[str], N], *, minimum: N, inclusive: bool = True) -> N:
    key = PREFIX + name
    raw = _env(name)
    if raw is None:
        value = default
    else:
        try:
            value = cast(raw)
        except ValueError as exc:
            kind = "an integer" if cast is int else "a number"
            raise ConfigError(f"Invalid {key}: expected {kind}, got {raw!r}") from exc
    ok = value >= minimum if inclusive else value > minimum
    if not ok:
        op = ">=" if inclusive else ">"
        raise ConfigError(f"Invalid {key}: expected {op} {minimum}, got {value}")
    return value


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build a :class:`ClientConfig` from ``MODIESEL_*`` variables.

    ``MODIESEL_ENV`` selects a profile; ``MODIESEL_API_BASE_URL_<ENV>`` wins
    over the plain ``MODIESEL_API_BASE_URL``. A ``.env`` file, when given or
    found, is loaded first without overriding the real environment.
    """
    load_dotenv(env_file)

    env_name = _env("ENV") or "dev"
    api_base_url = _env(f"API_BASE_URL_{env_name.upper()}") or _env("API_BASE_URL")
    if not api_base_url:
        raise ConfigError(f"Missing required config values: {PREFIX}API_BASE_URL")

    timeout = _number("TIMEOUT_SECONDS", 10.0, float, minimum=0.0, inclusive=False)
    connect_timeout = _number("CONNECT_TIMEOUT_SECONDS", min(timeout, 5.0), float, minimum=0.0, inclusive=False)
    read_timeout = _number(
        "READ_TIMEOUT_SECONDS",
        max(timeout, connect_timeout),
        float,
        minimum=0.0,
        inclusive=False,
    )

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout,
        read_timeout_seconds=read_timeout,
        retries=_number("RETRIES", 0, int, minimum=0),
        retry_backoff_seconds=_number("RETRY_BACKOFF_SECONDS", 0.3, float, minimum=0.0),
        max_connections=_number("MAX_CONNECTIONS", 10, int, minimum=1),
        cache_ttl_seconds=_number("CACHE_TTL_SECONDS", 3.0, float, minimum=0.0),
        verify_ssl=(_env("VERIFY_SSL") or "true").lower() in _TRUTHY,
    )
