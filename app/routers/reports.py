# app/routers/reports.py
# -----------------------------------------------------------------------------
# 리포트 저장 후 공유 ID 발급 / 공유 ID로 조회
# -----------------------------------------------------------------------------
from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.db.session import get_session
from app.schemas.report import ReportCreate, ReportCreated, ReportOut

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=ReportCreated)
async def create_report(req: ReportCreate, db: AsyncSession = Depends(get_session)):
    try:
        report = await crud.save_report(db, **req.model_dump())
    except Exception as e:
        logger.error(f"[Reports] 리포트 저장 오류: {e}")
        raise HTTPException(500, detail="리포트 저장 중 오류가 발생했습니다.")

    logger.info(f"[Reports] 리포트 저장: {report.id} ({report.type})")
    return ReportCreated(id=report.id)


@router.get("/{report_id}", response_model=ReportOut)
async def read_report(report_id: str, db: AsyncSession = Depends(get_session)):
    report = await crud.get_report(db, report_id)
    if report is None:
        raise HTTPException(
            404, detail="리포트를 찾을 수 없습니다. 링크가 만료되었거나 잘못되었습니다."
        )
    return ReportOut(
        id=report.id,
        type=report.type,
        data=report.data,
        address1=report.address1,
        address2=report.address2,
        target_category=report.target_category,
        radius=report.radius,
        created_at=report.created_at,
    )
