"""Zotero Web API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, ResponseHook

ZOTERO_BASE_URL = "https://api.zotero.org"
ZOTERO_API_VERSION = "3"
ZOTERO_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class ZoteroConfig:
    """Holds Zotero API credentials and client settings."""

    api_key: str
    resilience: ResilienceConfig
    user_id: int | None = None


def zotero_resilience_config(
    api_key: str,
    *,
    base_url: str = ZOTERO_BASE_URL,
    response_hooks: tuple[ResponseHook, ...] = (),
) -> ResilienceConfig:
    return ResilienceConfig(
        name="zotero",
        base_url=base_url,
        timeout_seconds=ZOTERO_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        cache=CacheConfig(backend="memory"),
        response_hooks=response_hooks,
        default_headers={
            "Zotero-API-Key": api_key,
            "Zotero-API-Version": ZOTERO_API_VERSION,
        },
    )


def get_zotero_config(*, resilience: ResilienceConfig | None = None) -> ZoteroConfig:
    values = require_env_vars(("ZOTERO_API_KEY",))
    api_key = values["ZOTERO_API_KEY"]

    user_id: int | None = None
    raw_user_id = optional_env_var("ZOTERO_USER_ID")
    if raw_user_id is not None:
        try:
            user_id = int(raw_user_id)
        except ValueError as exc:
            raise ConfigurationError(
                f"ZOTERO_USER_ID must be numeric, got {raw_user_id!r}"
            ) from exc

    base_url = optional_env_var("ZOTERO_BASE_URL") or ZOTERO_BASE_URL
    return ZoteroConfig(
        api_key=api_key,
        user_id=user_id,
        resilience=resilience or zotero_resilience_config(api_key, base_url=base_url),
    )
