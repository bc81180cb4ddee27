"""Custom exception hierarchy for the defense drill client.

Exceptions are categorized by their nature and expected handling behavior.
Empty results (no eligible drills, no active policies) are NOT exceptions;
they are represented by ``None`` and treated as steady-state outcomes.

Exception Categories:
    - Unrecoverable (Fail Fast): invariant violations in scheduling logic
    - User input (Report): store validation failures

Rules Applied:
    - #23 Exception Handling: Domain-driven hierarchy, add_note()
"""


class DefenseDrillError(Exception):
    """모든 defense drill 관련 예외의 기본 클래스.

    이 예외를 직접 발생시키지 말고, 하위 클래스를 사용하세요.

    Attributes:
        message: 에러 메시지
        context: 추가 컨텍스트 정보 (디버깅용)
    """

    def __init__(
        self, message: str, *, context: dict[str, object] | None = None
    ) -> None:
        """DefenseDrillError 초기화.

        Args:
            message: 에러 메시지
            context: 추가 컨텍스트 정보 (선택)
        """
        super().__init__(message)
        self.message = message
        self.context: dict[str, object] = context or {}

    def __str__(self) -> str:
        """에러 메시지와 컨텍스트를 포함한 문자열 반환."""
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


# =============================================================================
# Invariant Violations (Unrecoverable - Abort the scheduling attempt)
# =============================================================================


class InvariantViolationError(DefenseDrillError):
    """로직 결함을 나타내는 치명적 오류.

    weekly hour가 0-167 범위를 벗어나거나 요일 매핑이 실패한 경우 발생합니다.
    잘못된 입력이 아닌 프로그래밍 오류이므로 재시도하지 않습니다.

    Example:
        >>> raise InvariantViolationError(
        ...     "Weekly hour out of range",
        ...     context={"weekly_hour": 168}
        ... )
    """


# =============================================================================
# Store Errors (User input - Report and keep going)
# =============================================================================


class StoreError(DefenseDrillError):
    """데이터 저장소 관련 오류의 기본 클래스."""


class PolicyValidationError(StoreError):
    """정책 그룹 저장 시 검증 실패 (이름 누락, 시간 충돌, 최소 시간 미달)."""


class PolicyNotFoundError(StoreError):
    """수정 대상 정책 이름이 존재하지 않음."""


class DrillNotFoundError(StoreError):
    """Drill ID가 저장소에 존재하지 않음."""


# =============================================================================
# Utility Functions
# =============================================================================


def add_context_note(exc: Exception, note: str) -> None:
    """예외에 컨텍스트 노트 추가 (Python 3.11+ add_note).

    원본 Traceback을 보존하면서 디버깅 정보를 추가합니다.

    Args:
        exc: 예외 객체
        note: 추가할 노트 문자열
    """
    exc.add_note(note)
