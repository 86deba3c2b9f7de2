# app/services/store_summary.py
# -----------------------------------------------------------------------------
# 상가업소 목록 1차 집계
# (1) 업종 대분류별 그룹핑/요약 (중분류 건수 포함)
# (2) 프랜차이즈/개인 업소 분류 (상호명 기반 추정)
# (3) 업종별 좌표 묶음 (지도 레이어용)
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Iterable

from app.schemas.analysis import (
    CategoryPoint,
    CategorySummaryEntry,
    FranchiseAnalysis,
    FranchiseBrand,
    Listing,
    SubCategoryCount,
)
from app.services.rounding import round1

# 분석에 사용할 주요 프랜차이즈 브랜드 목록 (앞쪽 항목이 우선 매칭됨)
KNOWN_FRANCHISES = (
    "CU", "GS25", "세븐일레븐", "이마트24", "미니스톱",
    "스타벅스", "투썸플레이스", "이디야", "메가커피", "컴포즈커피", "빽다방", "할리스",
    "BBQ", "BHC", "교촌치킨", "네네치킨", "굽네치킨", "푸라닭",
    "맥도날드", "버거킹", "롯데리아", "맘스터치", "KFC",
    "올리브영", "다이소", "ABC마트",
    "파리바게뜨", "뚜레쥬르", "성심당",
    "이디야커피", "카페베네", "엔젤리너스",
    "도미노피자", "피자헛", "미스터피자", "파파존스",
    "본죽", "죽이야기",
    "교보문고", "알라딘", "영풍문고",
    "피자알볼로", "청기와",
    "CJ올리브마켓", "홈플러스", "이마트", "롯데마트",
    "신한은행", "국민은행", "KB", "NH", "우리은행", "하나은행", "IBK",
    "SK텔레콤", "KT", "LG유플러스",
)

TOP_BRANDS_LIMIT = 10


def as_listing_list(listings: Iterable[Listing]) -> list[Listing]:
    """
    분석 입력을 리스트로 고정. 순회 불가능한 값이면 TypeError.
    """
    if isinstance(listings, (str, bytes)) or not hasattr(listings, "__iter__"):
        raise TypeError(
            f"listings must be an iterable of Listing, got {type(listings).__name__}"
        )
    return list(listings)


# ── (1) 업종 대분류 요약 ──────────────────────────────────────────────────────
def group_by_category(listings: Iterable[Listing]) -> dict[str, list[Listing]]:
    """대분류 표시명 기준 그룹핑. 처음 등장한 순서를 유지."""
    groups: dict[str, list[Listing]] = {}
    for store in as_listing_list(listings):
        groups.setdefault(store.major, []).append(store)
    return groups


def get_category_summary(listings: Iterable[Listing]) -> list[CategorySummaryEntry]:
    """
    대분류별 업소 수/비율/중분류 분포.
    - 업소 수 내림차순, 동률이면 먼저 등장한 업종이 앞 (stable sort)
    - 중분류는 원본 중분류명 기준으로 별도 집계
    """
    stores = as_listing_list(listings)
    total = len(stores)
    groups = group_by_category(stores)

    entries: list[CategorySummaryEntry] = []
    for name, members in groups.items():
        sub_counts: dict[str, int] = {}
        for s in members:
            sub_counts[s.mid] = sub_counts.get(s.mid, 0) + 1
        subs = sorted(
            (SubCategoryCount(name=k, count=v) for k, v in sub_counts.items()),
            key=lambda x: x.count,
            reverse=True,
        )
        entries.append(
            CategorySummaryEntry(
                name=name,
                count=len(members),
                percentage=round1(len(members) / total * 100),
                sub_categories=subs,
                stores=members,
            )
        )

    # sorted(reverse=True)도 동률 순서를 보존함
    return sorted(entries, key=lambda e: e.count, reverse=True)


# ── (2) 프랜차이즈 분석 ───────────────────────────────────────────────────────
def match_franchise(name: str) -> str | None:
    """상호명에 포함된 첫 번째 브랜드 (대소문자 무시)."""
    upper = (name or "").upper()
    for brand in KNOWN_FRANCHISES:
        if brand.upper() in upper:
            return brand
    return None


def analyze_franchises(listings: Iterable[Listing]) -> FranchiseAnalysis:
    stores = as_listing_list(listings)

    franchise_count = 0
    brand_counts: dict[str, int] = {}
    brand_category: dict[str, str] = {}  # 브랜드가 처음 잡힌 업소의 대분류
    for store in stores:
        brand = match_franchise(store.name)
        if brand is None:
            continue
        franchise_count += 1
        brand_counts[brand] = brand_counts.get(brand, 0) + 1
        brand_category.setdefault(brand, store.major)

    brands = sorted(
        (
            FranchiseBrand(name=b, count=n, category=brand_category[b])
            for b, n in brand_counts.items()
        ),
        key=lambda b: b.count,
        reverse=True,
    )
    ratio = round1(franchise_count / len(stores) * 100) if stores else 0.0

    return FranchiseAnalysis(
        total_franchise=franchise_count,
        total_independent=len(stores) - franchise_count,
        franchise_ratio=ratio,
        brands=brands,
        top_brands=brands[:TOP_BRANDS_LIMIT],
    )


# ── (3) 업종별 좌표 묶음 ──────────────────────────────────────────────────────
def build_category_heatmap(
    groups: dict[str, list[Listing]],
) -> dict[str, list[CategoryPoint]]:
    out: dict[str, list[CategoryPoint]] = {}
    for name, members in groups.items():
        points = [
            CategoryPoint(lat=s.lat, lng=s.lng, name=s.name, category=s.mid)
            for s in members
            if s.has_coords
        ]
        if points:
            out[name] = points
    return out
