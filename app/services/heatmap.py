# app/services/heatmap.py
# -----------------------------------------------------------------------------
# 4종 다중 히트맵 레이어
# (1) 전체 업소 밀집도
# (2) 상위 3개 업종별 분포
# (3) 소비 활성화 지수 (유동인구 + 소비 + 생활인프라)
# (4) 야간 경제 활성도
# - 좌표 없는 업소(lat/lng == 0)는 전 레이어에서 제외
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Iterable, Sequence

from app.schemas.analysis import (
    CategoryLayer,
    CategorySummaryEntry,
    HeatmapLayers,
    HeatPoint,
    Listing,
    PointLayer,
    Top3Layer,
)

TOP3_COLORS = ("#6366f1", "#f59e0b", "#06b6d4")

SPENDING_KEYWORDS = (
    # 유동인구 관련 (편의점·카페·패스트푸드)
    "CU", "GS25", "세븐일레븐", "이마트24", "미니스톱",
    "스타벅스", "투썸", "이디야", "메가", "백다방", "컴포즈",
    "맥도날드", "버거킹", "롯데리아", "맘스터치", "KFC",
    # 소비 활성 (브랜드·소매)
    "올리브영", "다이소", "파리바게뜨", "뚜레쥬르", "ABC마트",
    "이마트", "홈플러스", "롯데마트", "쿠팡",
    # 생활 인프라 (필수 시설)
    "은행", "약국", "병원", "의원", "치과", "안과", "내과", "정형외과",
    "어린이집", "유치원", "학원", "학교",
    "우체국", "주민센터", "파출소",
)
SPENDING_CATEGORIES = ("소매", "음식", "보건의료", "교육", "부동산·시설관리")

NIGHTLIFE_KEYWORDS = (
    # 주점·바
    "호프", "맥주", "포차", "이자카야", "바", "BAR", "bar", "술집",
    "와인", "칵테일", "소주방", "막걸리",
    # 오락·여가
    "노래방", "노래연습", "코인노래", "PC방", "PC룸", "피씨방",
    "당구", "볼링", "오락실", "VR", "방탈출", "보드게임",
    # 심야 편의시설
    "CU", "GS25", "세븐일레븐", "이마트24", "미니스톱",
    # 심야 음식
    "치킨", "피자", "족발", "보쌈", "야식", "포장마차", "곱창", "삼겹",
    "라멘", "라면",
)
NIGHTLIFE_CATEGORIES = ("숙박", "음식")
NIGHTLIFE_SUBCATEGORIES = ("주점", "유흥", "오락", "스포츠·여가")


def _contains_any(text: str, needles: Iterable[str]) -> bool:
    return any(n in text for n in needles)


def spending_intensity(store: Listing) -> float:
    if _contains_any(store.name, SPENDING_KEYWORDS):
        return 1.0
    if _contains_any(store.major, SPENDING_CATEGORIES):
        return 0.6
    return 0.1


def nightlife_intensity(store: Listing) -> float:
    """0 이면 야간 레이어에서 제외."""
    if _contains_any(store.name, NIGHTLIFE_KEYWORDS):
        return 1.0
    if _contains_any(store.mid, NIGHTLIFE_SUBCATEGORIES):
        return 0.9
    if _contains_any(store.major, NIGHTLIFE_CATEGORIES):
        return 0.2
    return 0.0


def _point(store: Listing, intensity: float, category: str) -> HeatPoint:
    return HeatPoint(
        lat=store.lat,
        lng=store.lng,
        intensity=intensity,
        name=store.name,
        category=category,
    )


def generate_multi_heatmaps(
    stores: Iterable[Listing], category_summary: Sequence[CategorySummaryEntry]
) -> HeatmapLayers:
    valid = [s for s in stores if s.has_coords]

    all_points = [_point(s, 1, s.major) for s in valid]

    top3_names = [c.name for c in category_summary[:3]]
    top3_layers = []
    for idx, cat_name in enumerate(top3_names):
        points = [_point(s, 1, s.mid) for s in valid if s.major == cat_name]
        top3_layers.append(
            CategoryLayer(
                category=cat_name,
                color=TOP3_COLORS[idx],
                count=len(points),
                points=points,
            )
        )

    spending_points = [_point(s, spending_intensity(s), s.major) for s in valid]

    nightlife_points = []
    for s in valid:
        intensity = nightlife_intensity(s)
        if intensity > 0:
            nightlife_points.append(_point(s, intensity, s.mid))

    return HeatmapLayers(
        all=PointLayer(
            label="전체 업소 밀집도",
            description="모든 업소의 공간 분포",
            color_scheme="heat",
            points=all_points,
        ),
        top3=Top3Layer(
            label="상위 업종별 분포",
            description=f"상위 3개 업종: {', '.join(top3_names)}",
            categories=top3_layers,
        ),
        spending=PointLayer(
            label="소비 활성화",
            description="소매·음식·생활인프라(의료·교육·금융) 종합 밀집도",
            color_scheme="warm",
            points=spending_points,
        ),
        nightlife=PointLayer(
            label="야간 경제",
            description="주점·오락·심야 편의시설 등 야간 운영 업종 밀집도",
            color_scheme="cool",
            points=nightlife_points,
        ),
    )
