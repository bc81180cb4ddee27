"""Rich formatters for simulated attack alerts and schedule previews."""

from __future__ import annotations

from datetime import datetime, tzinfo

from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from defense_drill.models.drill import Confidence
from defense_drill.notification.models import AttackAlert

_CONFIDENCE_COLORS: dict[Confidence, str] = {
    Confidence.HIGH: "green",
    Confidence.MEDIUM: "yellow",
    Confidence.LOW: "red",
}


def confidence_markup(confidence: Confidence) -> str:
    color = _CONFIDENCE_COLORS.get(confidence, "white")
    return f"[{color}]{confidence.name}[/{color}]"


def format_attack_panel(alert: AttackAlert) -> Panel:
    """Simulated attack 알림 Panel."""
    body = Text.from_markup(
        f"[bold]{escape(alert.drill_name)}[/bold]\n"
        f"Confidence: {confidence_markup(alert.confidence)}\n"
        f"Issued: {alert.issued_at:%Y-%m-%d %H:%M:%S %Z}"
    )
    if alert.is_new_drill:
        body.append("\nNew drill", style="bold cyan")
    return Panel(body, title="Simulated Attack!", border_style="red", expand=False)


def format_alarm_time(at_millis: int | None, tz: tzinfo | None = None) -> str:
    """다음 알람 시각 문자열 (None이면 안내 문구)."""
    if at_millis is None:
        return "No active policies - simulated attacks are idle"
    moment = datetime.fromtimestamp(at_millis / 1000, tz=tz)
    return moment.strftime("%a %Y-%m-%d %H:%M:%S")
