"""Notification module for simulated attack alerts.

Rules Applied:
    - #22 Notification Standards: Rich rendering, single alert callback
"""

from defense_drill.notification.console import ConsoleAlertChannel
from defense_drill.notification.formatters import format_alarm_time, format_attack_panel
from defense_drill.notification.models import AttackAlert

__all__ = [
    "AttackAlert",
    "ConsoleAlertChannel",
    "format_alarm_time",
    "format_attack_panel",
]
