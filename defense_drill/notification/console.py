"""ConsoleAlertChannel — rich 콘솔로 simulated attack 표시.

AttackCoordinator의 alert 콜백 (``Callable[[Drill], None]``) 구현체입니다.
실제 push 알림 전달은 범위 밖이며, 콘솔 렌더링만 담당합니다.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from loguru import logger
from rich.console import Console

from defense_drill.notification.formatters import format_attack_panel
from defense_drill.notification.models import AttackAlert

if TYPE_CHECKING:
    from defense_drill.models.drill import Drill


class ConsoleAlertChannel:
    """Simulated attack를 콘솔 Panel로 출력.

    Args:
        console: rich Console (None이면 기본 stdout Console)
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()
        self._lock = threading.Lock()
        self._history: list[AttackAlert] = []

    @property
    def history(self) -> list[AttackAlert]:
        with self._lock:
            return list(self._history)

    def __call__(self, drill: Drill) -> None:
        alert = AttackAlert.from_drill(drill)
        with self._lock:
            self._history.append(alert)
            self._console.print(format_attack_panel(alert))
        logger.info("Simulated attack shown: #{} {}", alert.drill_id, alert.drill_name)
