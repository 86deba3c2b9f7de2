# app/routers/analysis.py
# -----------------------------------------------------------------------------
# /analysis/single  : 단일 상권 분석
# /analysis/compare : 두 상권 비교 분석 (지오코딩/업소 조회는 병렬)
# -----------------------------------------------------------------------------
import asyncio
import traceback
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException
from loguru import logger

from app.schemas.analysis import (
    AreaResult,
    CompareAnalysisRequest,
    CompareAnalysisResponse,
    SingleAnalysisRequest,
    SingleAnalysisResponse,
)
from app.services.analyzer import analyze_district
from app.services.compare import compare_districts
from app.services.kakao import GeocodeError, geocode_address
from app.services.store_api import get_stores_in_radius

router = APIRouter(prefix="/analysis", tags=["analysis"])


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _gather_both(first, second):
    """두 작업을 끝까지 기다린 뒤, 실패가 있으면 첫 번째 예외를 올림."""
    results = await asyncio.gather(first, second, return_exceptions=True)
    for res in results:
        if isinstance(res, BaseException):
            raise res
    return results


@router.post("/single", response_model=SingleAnalysisResponse)
async def analyze_single(req: SingleAnalysisRequest):
    try:
        logger.info(f"[Analysis] 단일 상권 분석 시작: {req.address} (반경 {req.radius}m)")

        # 1) 주소 → 좌표
        location = await geocode_address(req.address)

        # 2) 반경 내 상가업소
        stores = await get_stores_in_radius(
            location.latitude, location.longitude, req.radius
        )
        logger.info(f"[Analysis] 업소 수: {len(stores)}개")

        # 3) 분석
        analysis = analyze_district(stores, req.target_category, req.radius)

        return SingleAnalysisResponse(
            location=location,
            radius=req.radius,
            analysis=analysis,
            generated_at=_now_iso(),
        )
    except GeocodeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"[Analysis] 단일 분석 오류: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail=str(e) or "분석 중 오류가 발생했습니다.")


@router.post("/compare", response_model=CompareAnalysisResponse)
async def analyze_compare(req: CompareAnalysisRequest):
    try:
        logger.info(f"[Analysis] 비교 분석 시작: {req.address1} vs {req.address2}")

        location1, location2 = await _gather_both(
            geocode_address(req.address1), geocode_address(req.address2)
        )
        stores1, stores2 = await _gather_both(
            get_stores_in_radius(location1.latitude, location1.longitude, req.radius),
            get_stores_in_radius(location2.latitude, location2.longitude, req.radius),
        )
        logger.info(f"[Analysis] 업소 수: {len(stores1)}개 / {len(stores2)}개")

        analysis1 = analyze_district(stores1, req.target_category, req.radius)
        analysis2 = analyze_district(stores2, req.target_category, req.radius)

        return CompareAnalysisResponse(
            area1=AreaResult(location=location1, analysis=analysis1),
            area2=AreaResult(location=location2, analysis=analysis2),
            comparison=compare_districts(analysis1, analysis2),
            radius=req.radius,
            generated_at=_now_iso(),
        )
    except GeocodeError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"[Analysis] 비교 분석 오류: {e}\n{traceback.format_exc()}")
        raise HTTPException(
            status_code=500, detail=str(e) or "비교 분석 중 오류가 발생했습니다."
        )
