# app/core/config.py
# -----------------------------------------------------------------------------
# 전역 설정 관리 (pydantic-settings v2)
# - .env 파일과 OS 환경변수를 읽어 Settings 객체로 제공
# - 외부 API 키/페이지네이션/로그 설정을 한곳에서 관리
# -----------------------------------------------------------------------------
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # 기본
    APP_NAME: str = "Bizscope District"
    ENV: str = "dev"
    DATABASE_URL: str = "sqlite+aiosqlite:///./reports.db"

    # 외부 API 키들
    KAKAO_API_KEY: str | None = None  # Kakao REST API Key (지오코딩)
    STORE_API_KEY: str | None = None  # 소상공인시장진흥공단 상가업소 API

    # 상가업소 반경 조회
    STORE_API_URL: str = (
        "http://apis.data.go.kr/B553077/api/open/sdsc2/storeListInRadius"
    )
    STORE_PAGE_SIZE: int = 1000
    STORE_MAX_PAGES: int = 20
    STORE_PAGE_DELAY: float = 0.2  # API 과부하 방지 (초)

    # 로그
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore"  # .env에 추가 필드 무시
    )


settings = Settings()
