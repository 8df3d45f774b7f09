"""Core identifier types for turnstile."""

from __future__ import annotations

import uuid
from typing import NewType

WaiterId = NewType("WaiterId", str)


def generate_id() -> str:
    """Generate a unique identifier (UUID4)."""
    return str(uuid.uuid4())


def generate_waiter_id() -> WaiterId:
    """Generate a new WaiterId."""
    return WaiterId(generate_id())
