# app/services/indicators.py
# -----------------------------------------------------------------------------
# 6대 상권 지표 (0~100 정수)
# - Shannon 다양성, 상위업종 포화도, HHI 경쟁 균형도, 독립 상점 비율,
#   업소 밀도, 생활밀착 업종 안정성
# - 곡선형 지표는 '적정 구간'에서 100점, 양쪽 극단은 감점
# -----------------------------------------------------------------------------
from __future__ import annotations

import math
from typing import Sequence

from app.schemas.analysis import CategorySummaryEntry, Indicator, IndicatorSet
from app.services.rounding import clamp, round_half_up

# 안정 업종(생활밀착형) 판별 토큰
STABLE_CATEGORIES = ("보건의료", "교육", "부동산", "시설관리·임대", "공공기관")

# 지표 표시 정보 (label, description)
INDICATOR_META = {
    "diversity_index": ("업종 다양성", "다양한 업종이 골고루 분포할수록 높음"),
    "saturation_score": ("상권 밀집도", "업소 밀집 정도 (적정 수준이 좋음)"),
    "competition_intensity": ("경쟁 균형도", "특정 업종 쏠림 없이 균형잡힐수록 높음"),
    "franchise_score": ("독립 상점 비율", "독립 상점 비율이 높을수록 진입 기회 많음"),
    "density_score": ("상권 활성도", "적정 수준의 업소 밀도일수록 높음"),
    "stability_score": ("업종 안정성", "안정적인 업종(의료, 교육 등) 비율"),
}


def diversity_index(categories: Sequence[CategorySummaryEntry], total: int) -> int:
    """
    Shannon Diversity Index 기반 균등도.
    H = -Σ(pi * ln(pi)), Hmax = ln(업종 수) 로 나눠 0~100 으로 정규화.
    """
    if total == 0 or not categories:
        return 0

    h = 0.0
    for cat in categories:
        p = cat.count / total
        if p > 0:
            h -= p * math.log(p)

    h_max = math.log(len(categories))
    evenness = h / h_max if h_max > 0 else 0.0
    return clamp(round_half_up(evenness * 100))


def saturation_score(categories: Sequence[CategorySummaryEntry], total: int) -> int:
    """
    상위 3개 업종 점유율 기반 포화도 (역 U자 곡선).
    50~65% 구간이 100점, 과도한 집중은 300배, 과도한 분산은 200배로 감점.
    """
    if total == 0:
        return 0

    top_ratio = sum(c.count for c in categories[:3]) / total
    if 0.50 <= top_ratio <= 0.65:
        return 100
    if top_ratio > 0.65:
        return clamp(round_half_up(100 - (top_ratio - 0.65) * 300))
    return clamp(round_half_up(100 - (0.50 - top_ratio) * 200))


def competition_balance(categories: Sequence[CategorySummaryEntry], total: int) -> int:
    """
    HHI(Herfindahl-Hirschman Index)의 역지표.
    HHI 범위 10000/N ~ 10000 을 1 ~ 0 으로 뒤집어 균형잡힐수록 높은 점수.
    """
    if total == 0:
        return 0

    hhi = 0.0
    for cat in categories:
        share = cat.count / total * 100
        hhi += share * share

    n = len(categories)
    min_hhi = 10000 / n if n > 0 else 10000
    max_hhi = 10000
    if max_hhi == min_hhi:
        # 업종 1개 = 독점
        return 0

    normalized = 1 - (hhi - min_hhi) / (max_hhi - min_hhi)
    return clamp(round_half_up(normalized * 100))


def density_score(total: int) -> int:
    """반경 내 적정 업소 수 300~2000개를 100점으로 보는 고원형 곡선."""
    if 300 <= total <= 2000:
        return 100
    if total < 300:
        return max(20, round_half_up(total / 300 * 100))
    return max(40, round_half_up(100 - (total - 2000) / 5000 * 60))


def stability_score(categories: Sequence[CategorySummaryEntry]) -> int:
    """생활밀착 업종(의료·교육·부동산 등) 비율. 10~25% 가 적정."""
    total = sum(c.count for c in categories)
    if total == 0:
        return 0

    stable = sum(
        c.count for c in categories if any(sc in c.name for sc in STABLE_CATEGORIES)
    )
    ratio = stable / total
    if 0.10 <= ratio <= 0.25:
        return 100
    if ratio < 0.10:
        return clamp(round_half_up(ratio * 1000))
    return clamp(max(50, round_half_up(100 - (ratio - 0.25) * 200)))


def franchise_score(franchise_ratio: float) -> int:
    """독립 상점 비율 표시값. 종합 점수에는 원본 비율이 따로 들어감."""
    return clamp(round_half_up(100 - franchise_ratio))


def _indicator(key: str, value: int) -> Indicator:
    label, description = INDICATOR_META[key]
    return Indicator(value=value, label=label, description=description)


def build_indicator_set(
    categories: Sequence[CategorySummaryEntry], total: int, franchise_ratio: float
) -> IndicatorSet:
    return IndicatorSet(
        diversity_index=_indicator("diversity_index", diversity_index(categories, total)),
        saturation_score=_indicator(
            "saturation_score", saturation_score(categories, total)
        ),
        competition_intensity=_indicator(
            "competition_intensity", competition_balance(categories, total)
        ),
        franchise_score=_indicator("franchise_score", franchise_score(franchise_ratio)),
        density_score=_indicator("density_score", density_score(total)),
        stability_score=_indicator("stability_score", stability_score(categories)),
    )
