# app/services/compare.py
# -----------------------------------------------------------------------------
# 두 상권 비교 분석
# - 지표별 승패/차이, 5점 초과 우위 항목, 10점 초과 종합 추천
# - 업종 분포 합집합 비교
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Sequence

from pydantic.alias_generators import to_camel

from app.schemas.analysis import (
    INDICATOR_KEYS,
    Advantages,
    AreaSummary,
    CategoryComparison,
    CategorySummaryEntry,
    ComparisonResult,
    ComparisonSummary,
    DistrictAnalysis,
    IndicatorComparison,
    IndicatorSet,
)

ADVANTAGE_MARGIN = 5
RECOMMEND_MARGIN = 10


def _summary(a: DistrictAnalysis) -> AreaSummary:
    return AreaSummary(total_stores=a.total_stores, score=a.overall_score, grade=a.grade)


def compare_indicators(
    first: IndicatorSet, second: IndicatorSet
) -> tuple[list[IndicatorComparison], Advantages]:
    rows: list[IndicatorComparison] = []
    advantages = Advantages()
    for key in INDICATOR_KEYS:
        ind1 = getattr(first, key)
        ind2 = getattr(second, key)
        v1, v2 = ind1.value, ind2.value
        if v1 > v2:
            winner = "first"
        elif v1 < v2:
            winner = "second"
        else:
            winner = "tie"
        rows.append(
            IndicatorComparison(
                key=to_camel(key),
                label=ind1.label,
                first=v1,
                second=v2,
                winner=winner,
                diff=abs(v1 - v2),
            )
        )
        if v1 > v2 + ADVANTAGE_MARGIN:
            advantages.first.append(ind1.label)
        if v2 > v1 + ADVANTAGE_MARGIN:
            advantages.second.append(ind2.label)
    return rows, advantages


def recommend(first_score: int, second_score: int) -> str:
    if first_score > second_score + RECOMMEND_MARGIN:
        return "first"
    if second_score > first_score + RECOMMEND_MARGIN:
        return "second"
    return "similar"


def compare_category_distribution(
    cats1: Sequence[CategorySummaryEntry], cats2: Sequence[CategorySummaryEntry]
) -> list[CategoryComparison]:
    by_name1 = {c.name: c for c in cats1}
    by_name2 = {c.name: c for c in cats2}
    # 첫 번째 상권 업종 → 두 번째 상권에만 있는 업종 순으로 합집합
    names = list(by_name1) + [n for n in by_name2 if n not in by_name1]

    rows = []
    for name in names:
        c1 = by_name1.get(name)
        c2 = by_name2.get(name)
        rows.append(
            CategoryComparison(
                category=name,
                first_count=c1.count if c1 else 0,
                first_pct=c1.percentage if c1 else 0.0,
                second_count=c2.count if c2 else 0,
                second_pct=c2.percentage if c2 else 0.0,
            )
        )
    return sorted(rows, key=lambda r: r.first_count + r.second_count, reverse=True)


def compare_districts(first: DistrictAnalysis, second: DistrictAnalysis) -> ComparisonResult:
    indicator_rows, advantages = compare_indicators(first.indicators, second.indicators)
    return ComparisonResult(
        summary=ComparisonSummary(first=_summary(first), second=_summary(second)),
        indicator_comparison=indicator_rows,
        advantages=advantages,
        category_comparison=compare_category_distribution(
            first.category_summary, second.category_summary
        ),
        recommendation=recommend(first.overall_score, second.overall_score),
    )
