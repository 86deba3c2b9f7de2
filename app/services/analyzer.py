# app/services/analyzer.py
# -----------------------------------------------------------------------------
# 종합 상권 분석 실행
# 업소 목록 → 업종/프랜차이즈 집계 → 6대 지표 → 종합 점수/등급
#          → (선택) 타겟 업종 분석 → 히트맵 레이어
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Iterable, Optional

from loguru import logger

from app.schemas.analysis import DistrictAnalysis, Listing
from app.services.heatmap import generate_multi_heatmaps
from app.services.indicators import build_indicator_set
from app.services.scoring import calculate_overall_score, get_grade
from app.services.store_summary import (
    analyze_franchises,
    as_listing_list,
    build_category_heatmap,
    get_category_summary,
    group_by_category,
)
from app.services.target import analyze_target_category


def analyze_district(
    listings: Iterable[Listing],
    target_category: Optional[str] = None,
    radius_m: Optional[int] = None,
) -> DistrictAnalysis:
    """
    반경 내 업소 목록으로 상권 분석 결과를 만든다.
    radius_m 은 계산에 쓰지 않고 결과에 그대로 실어 보낸다.
    """
    stores = as_listing_list(listings)
    total = len(stores)

    category_summary = get_category_summary(stores)
    franchise = analyze_franchises(stores)

    indicators = build_indicator_set(category_summary, total, franchise.franchise_ratio)
    overall = calculate_overall_score(indicators, franchise.franchise_ratio)

    target = None
    if target_category and target_category.strip():
        target = analyze_target_category(
            stores, category_summary, target_category.strip()
        )

    result = DistrictAnalysis(
        total_stores=total,
        category_summary=category_summary,
        franchise_analysis=franchise,
        indicators=indicators,
        overall_score=overall,
        grade=get_grade(overall),
        target_analysis=target,
        multi_heatmaps=generate_multi_heatmaps(stores, category_summary),
        category_heatmap=build_category_heatmap(group_by_category(stores)),
        radius_m=radius_m,
    )
    logger.debug(
        f"[Analyzer] stores={total} categories={len(category_summary)} "
        f"score={overall} grade={result.grade.grade}"
    )
    return result
