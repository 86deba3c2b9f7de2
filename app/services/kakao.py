# app/services/kakao.py
# -----------------------------------------------------------------------------
# 카카오 Geocoding
# - 주소 → 좌표(위도/경도) + 행정구역(시/구/동)
# - 주소 검색 실패 시 키워드 검색으로 재시도
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Dict, Optional

import httpx
from loguru import logger

from app.core.config import settings
from app.schemas.analysis import Location

KAKAO_ADDRESS_URL = "https://dapi.kakao.com/v2/local/search/address.json"
KAKAO_KEYWORD_URL = "https://dapi.kakao.com/v2/local/search/keyword.json"

TIMEOUT = httpx.Timeout(connect=6.0, read=10.0, write=10.0, pool=6.0)


class GeocodeError(Exception):
    """주소를 좌표로 바꾸지 못함 (입력 주소 문제)."""


def _auth_headers() -> Dict[str, str]:
    key = settings.KAKAO_API_KEY
    if not key:
        raise RuntimeError("KAKAO_API_KEY가 설정되어 있지 않습니다.")
    return {"Authorization": f"KakaoAK {key}"}


def parse_address_doc(doc: dict, query: str) -> Location:
    """
    주소 검색 문서 1건 → Location.
    행정구역은 지번 주소(address) 우선, 없으면 도로명 주소(road_address).
    """
    road = doc.get("road_address") or None
    region_src = doc.get("address") or road or {}
    return Location(
        address=doc.get("address_name") or query,
        road_address=road.get("address_name") if road else None,
        latitude=float(doc.get("y")),
        longitude=float(doc.get("x")),
        region1=region_src.get("region_1depth_name") or "",
        region2=region_src.get("region_2depth_name") or "",
        region3=region_src.get("region_3depth_name") or "",
    )


def parse_keyword_doc(doc: dict, query: str) -> Location:
    """키워드 검색 문서는 행정구역을 주지 않으므로 빈 값."""
    return Location(
        address=doc.get("address_name") or query,
        road_address=doc.get("road_address_name") or None,
        latitude=float(doc.get("y")),
        longitude=float(doc.get("x")),
        place_name=doc.get("place_name") or "",
    )


async def _search(
    client: httpx.AsyncClient, url: str, params: dict, label: str
) -> Optional[dict]:
    r = await client.get(url, params=params, headers=_auth_headers())
    if r.is_error:
        raise RuntimeError(f"카카오 {label} API 오류: {r.status_code}")
    docs = r.json().get("documents") or []
    return docs[0] if docs else None


async def geocode_address(
    address: str, *, transport: httpx.AsyncBaseTransport | None = None
) -> Location:
    async with httpx.AsyncClient(timeout=TIMEOUT, transport=transport) as client:
        doc = await _search(
            client,
            KAKAO_ADDRESS_URL,
            {"query": address, "analyze_type": "similar"},
            "Geocoding",
        )
        if doc is not None:
            return parse_address_doc(doc, address)

        logger.info(f"[Kakao] 주소 검색 결과 없음, 키워드 검색 시도: {address}")
        doc = await _search(client, KAKAO_KEYWORD_URL, {"query": address}, "키워드 검색")
        if doc is not None:
            return parse_keyword_doc(doc, address)

    raise GeocodeError(
        "해당 주소를 찾을 수 없습니다. 정확한 도로명 또는 지번 주소를 입력해주세요."
    )
