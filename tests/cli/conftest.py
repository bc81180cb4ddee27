"""CLI 테스트 공용 픽스처."""

from __future__ import annotations

import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _restore_logger():
    """명령이 설치한 sink (CliRunner stderr 포함) 제거 후 기본 sink 복원."""
    yield
    logger.remove()
    logger.add(sys.stderr)
