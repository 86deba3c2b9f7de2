# app/db/crud.py
# -----------------------------------------------------------------------------
# 리포트 저장/조회
# -----------------------------------------------------------------------------
import secrets

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import Report

# 혼동되는 문자(0/O, 1/l/I) 제외
ID_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789"
ID_LENGTH = 8


def generate_report_id() -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


async def get_report(db: AsyncSession, report_id: str) -> Report | None:
    res = await db.execute(select(Report).where(Report.id == report_id))
    return res.scalar_one_or_none()


async def save_report(db: AsyncSession, **fields) -> Report:
    """새 공유 ID로 저장. ID 충돌 시 다시 뽑는다."""
    report_id = generate_report_id()
    while await get_report(db, report_id) is not None:
        report_id = generate_report_id()

    report = Report(id=report_id, **fields)
    db.add(report)
    await db.commit()
    return report
