# app/main.py
# -----------------------------------------------------------------------------
# FastAPI 엔트리포인트
# - 서버 기동 시 테이블 생성
# -----------------------------------------------------------------------------
from datetime import datetime, timezone

from fastapi import FastAPI

from app.core import logging as app_logging  # noqa: F401  (loguru 싱크 등록)
from app.core.config import settings
from app.db import models  # noqa: F401  (테이블 메타데이터 등록)
from app.db.session import Base, engine
from app.routers import analysis, reports

app = FastAPI(title=settings.APP_NAME)


@app.on_event("startup")
async def on_startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


app.include_router(analysis.router)
app.include_router(reports.router)


@app.get("/health")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
