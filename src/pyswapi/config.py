"""Client configuration for pyswapi."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyswapi._constants import BASE_URL, USER_AGENT
from pyswapi.exceptions import SwapiConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class PyswapiConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        API root the default character menu is built under. Everything
        past the menu is navigated by the absolute URLs the API returns.
    request_timeout : float
        Total timeout in seconds for a single GET.
    user_agent : str
        ``User-Agent`` header sent with every request.
    force_https : bool
        Rewrite every outgoing URL to ``https`` before sending it. Cache
        keys are normalized independently and are not affected.
    dedupe_inflight : bool
        Share one network request between concurrent fetches of the same
        resource. When disabled, each concurrent fetch issues its own
        request and records its own result.
    """

    base_url: str = BASE_URL
    request_timeout: float = 30.0
    user_agent: str = USER_AGENT
    force_https: bool = True
    dedupe_inflight: bool = True

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise SwapiConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if not self.base_url.strip():
            raise SwapiConfigError("base_url must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> PyswapiConfig:
        """Create configuration from ``SWAPI_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("SWAPI_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url.rstrip("/")

        user_agent = env.get("SWAPI_USER_AGENT")
        if user_agent is not None:
            config_kwargs["user_agent"] = user_agent

        timeout_env = env.get("SWAPI_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise SwapiConfigError(f"SWAPI_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "force_https" not in overrides:
            config_kwargs["force_https"] = _env_bool(env.get("SWAPI_FORCE_HTTPS"), True)

        if "dedupe_inflight" not in overrides:
            config_kwargs["dedupe_inflight"] = _env_bool(env.get("SWAPI_DEDUPE_INFLIGHT"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
