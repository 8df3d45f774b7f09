"""Core error hierarchy for turnstile."""

from __future__ import annotations


class TurnstileError(Exception):
    """Base exception for all turnstile errors."""


class InvalidCapacityError(TurnstileError, ValueError):
    """Raised when a semaphore is constructed with a non-positive capacity."""


class OverReleaseError(TurnstileError, RuntimeError):
    """Raised when release() is called with no outstanding grant."""


class InvalidTimeoutError(TurnstileError, ValueError):
    """Raised when a timeout is negative, or a default timeout is not positive."""


class AcquireTimeoutError(TurnstileError, TimeoutError):
    """Raised when a queued acquisition is not granted before its timeout."""


class ConfigError(TurnstileError):
    """Raised when semaphore configuration cannot be loaded or validated."""
