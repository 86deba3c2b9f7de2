# app/db/models.py
# -----------------------------------------------------------------------------
# ORM 모델 정의
# - Report: 공유 링크로 다시 열어볼 수 있는 분석 리포트
# -----------------------------------------------------------------------------
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String

from app.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Report(Base):
    __tablename__ = "reports"

    id = Column(String(8), primary_key=True)  # 공유 ID
    type = Column(String, index=True)  # "single" | "compare"
    data = Column(JSON, nullable=False)  # 분석 결과 원본(JSON)
    address1 = Column(String)
    address2 = Column(String)
    target_category = Column(String)
    radius = Column(Integer)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
