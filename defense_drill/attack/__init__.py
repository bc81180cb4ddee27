"""Simulated attack orchestration."""

from defense_drill.attack.coordinator import ALARM_TOKEN, AttackCoordinator

__all__ = ["ALARM_TOKEN", "AttackCoordinator"]
