"""turnstile core — identifiers and the error hierarchy."""

from turnstile.core.errors import (
    AcquireTimeoutError,
    ConfigError,
    InvalidCapacityError,
    InvalidTimeoutError,
    OverReleaseError,
    TurnstileError,
)
from turnstile.core.identifiers import WaiterId, generate_id, generate_waiter_id

__all__ = [
    "AcquireTimeoutError",
    "ConfigError",
    "InvalidCapacityError",
    "InvalidTimeoutError",
    "OverReleaseError",
    "TurnstileError",
    "WaiterId",
    "generate_id",
    "generate_waiter_id",
]
