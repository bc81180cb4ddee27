"""Alarm timer — 절대 시각 알람 arm / cancel.

AttackCoordinator가 사용하는 외부 타이머 프리미티브입니다.
AsyncioAlarmTimer는 토큰마다 asyncio task 하나를 유지하며, 같은 토큰으로
다시 arm하면 기존 task를 취소합니다. 콜백은 worker 스레드에서 실행되어
저장소 I/O가 이벤트 루프를 막지 않습니다.

Rules Applied:
    - EDA 패턴: asyncio task lifecycle
    - #10 Python Standards: Async patterns, type hints
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from typing import TYPE_CHECKING, Protocol

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Callable


def system_clock_millis() -> int:
    """현재 시각 (epoch millis)."""
    return int(time.time() * 1000)


class AlarmTimer(Protocol):
    """Protocol for an absolute-time alarm primitive."""

    def arm_absolute(self, at_millis: int, token: str, callback: Callable[[], object]) -> None:
        """Run ``callback`` at ``at_millis`` (epoch millis)."""
        ...

    def cancel(self, token: str) -> None:
        """Cancel the pending alarm for ``token`` (no-op when none)."""
        ...


class AsyncioAlarmTimer:
    """asyncio 기반 AlarmTimer.

    Args:
        loop: 알람 task를 생성할 이벤트 루프 (None이면 arm 시점의 running loop)
        clock: epoch millis 반환 함수
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        clock: Callable[[], int] = system_clock_millis,
    ) -> None:
        self._loop = loop
        self._clock = clock
        self._tasks: dict[str, asyncio.Task[None]] = {}

    def pending(self, token: str) -> bool:
        task = self._tasks.get(token)
        return task is not None and not task.done()

    def arm_absolute(self, at_millis: int, token: str, callback: Callable[[], object]) -> None:
        """알람 arm. 콜백이 worker 스레드에서 실행 중 재호출될 수 있으므로 thread-safe."""
        loop = self._loop or asyncio.get_running_loop()
        if _in_loop_thread(loop):
            self._arm(at_millis, token, callback)
        else:
            loop.call_soon_threadsafe(self._arm, at_millis, token, callback)

    def cancel(self, token: str) -> None:
        loop = self._loop
        if loop is None or _in_loop_thread(loop):
            self._cancel(token)
        else:
            loop.call_soon_threadsafe(self._cancel, token)

    async def shutdown(self) -> None:
        """모든 pending 알람 취소 후 종료 대기."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        logger.info("AsyncioAlarmTimer stopped ({} alarms cancelled)", len(tasks))

    def _arm(self, at_millis: int, token: str, callback: Callable[[], object]) -> None:
        self._cancel(token)
        delay = max(0.0, (at_millis - self._clock()) / 1000)
        loop = self._loop or asyncio.get_running_loop()
        self._tasks[token] = loop.create_task(self._wait_and_fire(delay, token, callback))
        logger.debug("Alarm '{}' armed in {:.1f}s", token, delay)

    def _cancel(self, token: str) -> None:
        task = self._tasks.pop(token, None)
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
            logger.debug("Alarm '{}' cancelled", token)

    async def _wait_and_fire(
        self, delay: float, token: str, callback: Callable[[], object]
    ) -> None:
        await asyncio.sleep(delay)
        # 콜백이 같은 토큰을 다시 arm할 수 있으므로 먼저 자신을 제거
        if self._tasks.get(token) is asyncio.current_task():
            del self._tasks[token]
        try:
            await asyncio.to_thread(callback)
        except Exception:
            logger.exception("Alarm '{}' callback failed", token)


def _in_loop_thread(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False
