"""Pydantic Settings for configuration management.

This module provides centralized configuration management using
pydantic-settings. All settings are loaded from environment variables
and/or .env files with type validation.

Features:
    - Data file path for the YAML drill/policy store
    - Simulated attack toggle and self-defense category name
    - Optional RNG seed and IANA timezone for reproducible scheduling

Rules Applied:
    - #11 Pydantic Modeling: BaseSettings, field_validator
"""

from datetime import tzinfo
from functools import lru_cache
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# 서버와 동일해야 하는 self defense 카테고리 이름
CATEGORY_NAME_SELF_DEFENSE = "Self Defense"


class DefenseDrillSettings(BaseSettings):
    """Defense drill 클라이언트 설정.

    환경 변수 (DRILL_ prefix) 또는 .env 파일에서 설정을 로드합니다.

    Environment Variables:
        - DRILL_DATA_FILE: drill/policy YAML 경로 (기본: data/defense_drill.yaml)
        - DRILL_SELF_DEFENSE_CATEGORY: simulated attack 대상 카테고리
        - DRILL_SIMULATED_ATTACKS_ENABLED: 알림 활성화 여부
        - DRILL_RANDOM_SEED: 난수 시드 (None이면 비결정적)
        - DRILL_TIMEZONE: IANA 타임존 (None이면 시스템 로컬)

    Example:
        >>> settings = get_settings()
        >>> settings.data_file
        PosixPath('data/defense_drill.yaml')
    """

    model_config = SettingsConfigDict(
        env_prefix="DRILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_file: Path = Field(
        default=Path("data/defense_drill.yaml"),
        description="Drill / weekly policy YAML 저장 경로",
    )
    self_defense_category: str = Field(
        default=CATEGORY_NAME_SELF_DEFENSE,
        min_length=1,
        description="Simulated attack drill을 고르는 카테고리 이름",
    )
    simulated_attacks_enabled: bool = Field(
        default=True,
        description="Simulated attack 알림 활성화 여부",
    )
    random_seed: int | None = Field(
        default=None,
        description="Drill 선택 / 알람 시각 난수 시드",
    )
    timezone: str | None = Field(
        default=None,
        description="Weekly hour 계산용 IANA 타임존 (예: Asia/Seoul)",
    )

    @field_validator("data_file", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """문자열을 Path 객체로 변환."""
        return Path(v) if isinstance(v, str) else v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        """존재하지 않는 타임존 이름은 로드 시점에 거부."""
        if v is None:
            return None
        try:
            ZoneInfo(v)
        except ZoneInfoNotFoundError as exc:
            msg = f"Unknown timezone: {v}"
            raise ValueError(msg) from exc
        return v

    def get_tzinfo(self) -> tzinfo | None:
        """설정된 타임존 반환 (None이면 시스템 로컬 시간 사용)."""
        return ZoneInfo(self.timezone) if self.timezone else None


@lru_cache
def get_settings() -> DefenseDrillSettings:
    """설정 싱글톤 인스턴스 반환.

    Returns:
        DefenseDrillSettings 인스턴스
    """
    return DefenseDrillSettings()


def clear_settings_cache() -> None:
    """설정 캐시 초기화 (테스트용)."""
    get_settings.cache_clear()
