# app/schemas/report.py
# -----------------------------------------------------------------------------
# 리포트 공유용 스키마
# -----------------------------------------------------------------------------
from datetime import datetime
from typing import Any, Dict, Literal, Optional

from app.schemas.analysis import CamelModel


class ReportCreate(CamelModel):
    type: Literal["single", "compare"]
    data: Dict[str, Any]
    address1: Optional[str] = None
    address2: Optional[str] = None
    target_category: Optional[str] = None
    radius: Optional[int] = None


class ReportCreated(CamelModel):
    success: bool = True
    id: str


class ReportOut(ReportCreate):
    id: str
    created_at: Optional[datetime] = None
