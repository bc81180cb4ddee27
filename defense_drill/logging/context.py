"""Context binding utilities for structured logging.

Alarm callbacks run in worker threads and asyncio tasks, so the attack
cycle id is propagated with contextvars and bound into every record the
coordinator emits.

Rules Applied:
    - #15 Logging Standards: Context binding with logger.bind()
    - #10 Python Standards: contextvars for async safety
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

current_cycle_id: ContextVar[str | None] = ContextVar("cycle_id", default=None)
current_policy: ContextVar[str | None] = ContextVar("policy", default=None)


def get_drill_logger(
    *,
    cycle_id: str | None = None,
    policy: str | None = None,
    drill_id: int | None = None,
    **extra: str,
) -> Logger:
    """Get a logger with simulated-attack context bound.

    Args:
        cycle_id: Attack cycle identifier (one per fire/schedule round)
        policy: Name of the weekly policy in effect
        drill_id: Drill being surfaced
        **extra: Additional context key-value pairs

    Returns:
        Logger instance with context bound

    Example:
        >>> log = get_drill_logger(cycle_id="atk_1a2b3c4d", drill_id=7)
        >>> log.info("Simulated attack sent")
    """
    ctx: dict[str, object] = {}

    if cycle_id:
        ctx["cycle_id"] = cycle_id
        current_cycle_id.set(cycle_id)
    if policy:
        ctx["policy"] = policy
        current_policy.set(policy)
    if drill_id is not None:
        ctx["drill_id"] = drill_id

    ctx.update(extra)

    return logger.bind(**ctx)


def generate_cycle_id(prefix: str = "atk") -> str:
    """Generate a unique attack cycle ID (e.g., "atk_a1b2c3d4")."""
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def get_current_context() -> dict[str, str | None]:
    """Get all current context values."""
    return {
        "cycle_id": current_cycle_id.get(),
        "policy": current_policy.get(),
    }


def clear_context() -> None:
    """Reset all context variables (테스트용)."""
    current_cycle_id.set(None)
    current_policy.set(None)
