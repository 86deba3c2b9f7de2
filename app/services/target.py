# app/services/target.py
# -----------------------------------------------------------------------------
# 희망 업종(타겟) 경쟁 분석
# - 업종명 부분 문자열 양방향 매칭으로 경쟁 업소 추정
# - 경쟁 업소 수로 포화 단계 판정
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Sequence

from app.schemas.analysis import (
    CategorySummaryEntry,
    Listing,
    SaturationLevel,
    TargetAnalysis,
)
from app.services.rounding import round1

COMPETITOR_SAMPLE_LIMIT = 20
NEARBY_CATEGORY_LIMIT = 5

# (경쟁 업소 수 상한, 단계, 색상, 조언) - 마지막 항목은 상한 없음
SATURATION_TIERS = (
    (5, "미진입", "#22c55e", "경쟁자가 거의 없는 블루오션입니다."),
    (20, "적정", "#3b82f6", "적당한 경쟁이 형성된 건강한 시장입니다."),
    (50, "경쟁", "#f59e0b", "경쟁이 심한 시장이므로 차별화 전략이 필수입니다."),
    (None, "포화", "#ef4444", "이미 포화 상태입니다. 강력한 차별화 없이는 성공이 어렵습니다."),
)


def is_competitor(store: Listing, target: str) -> bool:
    """타겟이 업종명에 포함되거나, 업종명이 타겟에 포함되면 경쟁 업소."""
    for name in (store.major, store.category_m, store.category_s):
        if not name:
            continue
        if target in name or name in target:
            return True
    return False


def saturation_level(competitor_count: int) -> SaturationLevel:
    for upper, level, color, advice in SATURATION_TIERS:
        if upper is None or competitor_count <= upper:
            break
    return SaturationLevel(level=level, color=color, advice=advice)


def analyze_target_category(
    stores: Sequence[Listing],
    category_summary: Sequence[CategorySummaryEntry],
    target_category: str,
) -> TargetAnalysis:
    total = len(stores)
    competitors = [s for s in stores if is_competitor(s, target_category)]
    count = len(competitors)

    return TargetAnalysis(
        target_category=target_category,
        competitor_count=count,
        market_share=round1(count / total * 100) if total > 0 else 0.0,
        saturation_level=saturation_level(count),
        competitors=competitors[:COMPETITOR_SAMPLE_LIMIT],
        nearby_categories=list(category_summary[:NEARBY_CATEGORY_LIMIT]),
    )
