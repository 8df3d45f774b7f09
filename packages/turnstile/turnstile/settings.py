"""Settings — build a SemaphoreConfig from environment variables."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from turnstile.core.errors import ConfigError
from turnstile.schemas.semaphore import OverReleasePolicy, SemaphoreConfig

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "TURNSTILE_"


class SemaphoreSettings(BaseSettings):
    """Environment-backed semaphore settings.

    Environment Variables:
        TURNSTILE_CAPACITY: Maximum concurrently granted slots (default 1)
        TURNSTILE_NAME: Label used in logs and events
        TURNSTILE_OVER_RELEASE: ``raise`` or ``ignore``
        TURNSTILE_DEFAULT_TIMEOUT: Seconds a queued acquire waits by default

    Empty variables are treated as unset.
    """

    model_config = SettingsConfigDict(
        env_prefix=DEFAULT_PREFIX,
        env_ignore_empty=True,
        case_sensitive=False,
        str_strip_whitespace=True,
    )

    capacity: int = Field(default=1, gt=0)
    name: str | None = None
    over_release: OverReleasePolicy = OverReleasePolicy.RAISE
    default_timeout: float | None = Field(default=None, gt=0)

    @field_validator("over_release", mode="before")
    @classmethod
    def _normalize_policy(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    def to_config(self) -> SemaphoreConfig:
        return SemaphoreConfig.model_validate(self.model_dump())


def load_config(prefix: str = DEFAULT_PREFIX) -> SemaphoreConfig:
    """Read ``<prefix>CAPACITY``, ``<prefix>NAME``, ``<prefix>OVER_RELEASE``
    and ``<prefix>DEFAULT_TIMEOUT`` from the environment.

    Values that fail validation raise ConfigError.
    """
    try:
        config = SemaphoreSettings(_env_prefix=prefix).to_config()
    except ValidationError as exc:
        raise ConfigError(f"Invalid semaphore configuration under '{prefix}*': {exc}") from exc

    logger.debug("Loaded semaphore config from env prefix %s: %s", prefix, config.model_dump())
    return config
