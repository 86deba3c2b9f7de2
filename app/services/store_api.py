# app/services/store_api.py
# -----------------------------------------------------------------------------
# 소상공인시장진흥공단 상가업소 반경 조회
# - 페이지네이션 (totalCount 도달 / 빈 페이지 / 최대 페이지 수)
# - 중간 페이지 실패 시 그때까지 모은 데이터만 사용
# - 원본 item → Listing 정규화
# -----------------------------------------------------------------------------
from __future__ import annotations

import asyncio
from typing import List

import httpx
from loguru import logger

from app.core.config import settings
from app.schemas.analysis import OTHER_CATEGORY, Listing


def _to_float(v) -> float:
    try:
        return float(v)
    except (TypeError, ValueError):
        return 0.0


def to_listing(item: dict) -> Listing:
    """
    상가업소 API item → Listing.
    업종명이 비어 있으면 '기타', 좌표를 못 읽으면 0 (지도 표시 불가).
    """
    return Listing(
        id=str(item.get("bizesId") or ""),
        name=str(item.get("bizesNm") or "이름 없음"),
        category_l=str(item.get("indsLclsNm") or OTHER_CATEGORY),
        category_m=str(item.get("indsMclsNm") or OTHER_CATEGORY),
        category_s=str(item.get("indsSclsNm") or OTHER_CATEGORY),
        category_l_code=str(item.get("indsLclsCd") or ""),
        category_m_code=str(item.get("indsMclsCd") or ""),
        category_s_code=str(item.get("indsSclsCd") or ""),
        lat=_to_float(item.get("lat")),
        lng=_to_float(item.get("lon")),
        road_address=str(item.get("rdnmAdr") or ""),
        jibun_address=str(item.get("lnoAdr") or ""),
        floor_info=str(item.get("flrNo") or ""),
        dong=str(item.get("adongNm") or ""),
    )


def process_store_data(items: List[dict]) -> List[Listing]:
    return [to_listing(it) for it in items or []]


async def get_stores_in_radius(
    lat: float,
    lon: float,
    radius: int = 500,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> List[Listing]:
    """
    반경(m) 내 상가업소 전체 조회.
    transport 는 테스트에서 httpx.MockTransport 주입용.
    """
    if not settings.STORE_API_KEY:
        raise RuntimeError("STORE_API_KEY가 설정되어 있지 않습니다. .env 파일을 확인하세요.")

    all_items: List[dict] = []
    page = 1
    total_count = 0

    async with httpx.AsyncClient(timeout=20, transport=transport) as client:
        while True:
            params = {
                "serviceKey": settings.STORE_API_KEY,
                "pageNo": str(page),
                "numOfRows": str(settings.STORE_PAGE_SIZE),
                "radius": str(radius),
                "cx": str(lon),
                "cy": str(lat),
                "type": "json",
            }
            try:
                r = await client.get(settings.STORE_API_URL, params=params)
                r.raise_for_status()
                data = r.json()
            except httpx.HTTPError as e:
                logger.error(f"[StoreAPI] 페이지 {page} 조회 오류: {e}")
                break
            except ValueError as e:  # JSON 파싱 실패
                logger.error(f"[StoreAPI] JSON 파싱 오류 (페이지 {page}): {e}")
                break

            body = data.get("body") if isinstance(data, dict) else None
            if not isinstance(body, dict):
                logger.error(f"[StoreAPI] 응답 형식 오류 (페이지 {page}): body 없음")
                break
            items = body.get("items")
            if not isinstance(items, list) or not items:
                logger.info(f"[StoreAPI] 데이터 없음, 페이지: {page}")
                break

            total_count = int(body.get("totalCount") or 0)
            all_items.extend(items)
            page += 1

            if len(all_items) >= total_count or page > settings.STORE_MAX_PAGES:
                break
            await asyncio.sleep(settings.STORE_PAGE_DELAY)

    if total_count and len(all_items) < total_count:
        logger.warning(
            f"[StoreAPI] 일부만 조회됨: {len(all_items)}/{total_count} (page={page - 1})"
        )
    return process_store_data(all_items)
