# app/core/logging.py
# -----------------------------------------------------------------------------
# Loguru 기반 로깅 설정
# - 회전/백트레이스/레벨 지정
# - 콘솔(stderr) + 파일 두 군데로 출력
# -----------------------------------------------------------------------------
import sys
from pathlib import Path

from loguru import logger

from app.core.config import settings

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(exist_ok=True, parents=True)

logger.remove()  # 기본 핸들러 제거
logger.add(sys.stderr, level=settings.LOG_LEVEL)
logger.add(
    LOG_DIR / "app.log",
    rotation="10 MB",
    retention=10,  # 최근 10개 파일 보관
    enqueue=True,  # 멀티프로세스 안전
    backtrace=True,
    diagnose=True,
    level=settings.LOG_LEVEL,
)
