"""Core module - exceptions and logger setup shared by every layer."""

from defense_drill.core.exceptions import (
    DefenseDrillError,
    DrillNotFoundError,
    InvariantViolationError,
    PolicyNotFoundError,
    PolicyValidationError,
    StoreError,
)

__all__ = [
    "DefenseDrillError",
    "DrillNotFoundError",
    "InvariantViolationError",
    "PolicyNotFoundError",
    "PolicyValidationError",
    "StoreError",
]
