# app/schemas/analysis.py
# -----------------------------------------------------------------------------
# 상권 분석 엔진 입출력 스키마
# - 내부 필드는 snake_case, JSON 직렬화는 camelCase(alias)
# - 분석 결과는 한 번 생성되면 수정하지 않음
# -----------------------------------------------------------------------------
from types import MappingProxyType
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

OTHER_CATEGORY = "기타"

# 공공데이터 API의 대분류명 → 사용자 친화적 표시명
CATEGORY_DISPLAY_MAP = MappingProxyType(
    {
        "과학·기술": "일반사업·사무",
        "시설관리·임대": "부동산·시설관리",
        "수리·개인": "생활서비스",
    }
)


def display_category_name(name: str | None) -> str:
    name = name or OTHER_CATEGORY
    return CATEGORY_DISPLAY_MAP.get(name, name)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


# ── 입력: 상가업소 ─────────────────────────────────────────────────────────────
class Listing(CamelModel):
    """
    상가업소 1건.
    - 업종명이 null 이면 빈 문자열로 받아 '기타'로 분류
    - lat/lng 가 null 또는 0 이면 지도에 표시할 수 없는 업소
    """

    id: str = ""
    name: str = ""
    category_l: str = ""
    category_m: str = ""
    category_s: str = ""
    category_l_code: str = ""
    category_m_code: str = ""
    category_s_code: str = ""
    lat: float = 0.0
    lng: float = 0.0
    road_address: str = ""
    jibun_address: str = ""
    floor_info: str = ""
    dong: str = ""

    @field_validator(
        "id", "name",
        "category_l", "category_m", "category_s",
        "category_l_code", "category_m_code", "category_s_code",
        "road_address", "jibun_address", "floor_info", "dong",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def _none_to_zero(cls, v):
        return 0.0 if v is None else v

    @property
    def major(self) -> str:
        return display_category_name(self.category_l)

    @property
    def mid(self) -> str:
        return self.category_m or OTHER_CATEGORY

    @property
    def minor(self) -> str:
        return self.category_s or OTHER_CATEGORY

    @property
    def has_coords(self) -> bool:
        return bool(self.lat) and bool(self.lng)


# ── 업종/프랜차이즈 집계 ────────────────────────────────────────────────────────
class SubCategoryCount(CamelModel):
    name: str
    count: int


class CategorySummaryEntry(CamelModel):
    name: str
    count: int
    percentage: float  # 소수 첫째 자리
    sub_categories: List[SubCategoryCount] = Field(default_factory=list)
    stores: List[Listing] = Field(default_factory=list)


class FranchiseBrand(CamelModel):
    name: str
    count: int
    category: str


class FranchiseAnalysis(CamelModel):
    total_franchise: int
    total_independent: int
    franchise_ratio: float
    brands: List[FranchiseBrand] = Field(default_factory=list)
    top_brands: List[FranchiseBrand] = Field(default_factory=list)


# ── 지표/등급 ──────────────────────────────────────────────────────────────────
class Indicator(CamelModel):
    value: int = Field(ge=0, le=100)
    label: str
    description: str
    max: int = 100


class IndicatorSet(CamelModel):
    diversity_index: Indicator
    saturation_score: Indicator
    competition_intensity: Indicator
    franchise_score: Indicator
    density_score: Indicator
    stability_score: Indicator


# 비교 시 사용하는 지표 순서
INDICATOR_KEYS = (
    "diversity_index",
    "saturation_score",
    "competition_intensity",
    "franchise_score",
    "density_score",
    "stability_score",
)


class Grade(CamelModel):
    grade: Literal["S", "A", "B", "C", "D"]
    label: str
    color: str
    description: str


# ── 타겟 업종 ──────────────────────────────────────────────────────────────────
class SaturationLevel(CamelModel):
    level: Literal["미진입", "적정", "경쟁", "포화"]
    color: str
    advice: str


class TargetAnalysis(CamelModel):
    target_category: str
    competitor_count: int
    market_share: float
    saturation_level: SaturationLevel
    competitors: List[Listing] = Field(default_factory=list)
    nearby_categories: List[CategorySummaryEntry] = Field(default_factory=list)


# ── 히트맵 레이어 ──────────────────────────────────────────────────────────────
class HeatPoint(CamelModel):
    lat: float
    lng: float
    intensity: float
    name: str
    category: str


class CategoryLayer(CamelModel):
    category: str
    color: str
    count: int
    points: List[HeatPoint] = Field(default_factory=list)


class PointLayer(CamelModel):
    label: str
    description: str
    color_scheme: str
    points: List[HeatPoint] = Field(default_factory=list)


class Top3Layer(CamelModel):
    label: str
    description: str
    color_scheme: str = "categorical"
    categories: List[CategoryLayer] = Field(default_factory=list)


class HeatmapLayers(CamelModel):
    all: PointLayer
    top3: Top3Layer
    spending: PointLayer
    nightlife: PointLayer


class CategoryPoint(CamelModel):
    lat: float
    lng: float
    name: str
    category: str


# ── 종합 결과 ──────────────────────────────────────────────────────────────────
class DistrictAnalysis(CamelModel):
    total_stores: int
    category_summary: List[CategorySummaryEntry]
    franchise_analysis: FranchiseAnalysis
    indicators: IndicatorSet
    overall_score: int = Field(ge=0, le=100)
    grade: Grade
    target_analysis: Optional[TargetAnalysis] = None
    multi_heatmaps: HeatmapLayers
    category_heatmap: Dict[str, List[CategoryPoint]] = Field(default_factory=dict)
    radius_m: Optional[int] = None


# ── 두 상권 비교 ───────────────────────────────────────────────────────────────
class AreaSummary(CamelModel):
    total_stores: int
    score: int
    grade: Grade


class ComparisonSummary(CamelModel):
    first: AreaSummary
    second: AreaSummary


class IndicatorComparison(CamelModel):
    key: str
    label: str
    first: int
    second: int
    winner: Literal["first", "second", "tie"]
    diff: int


class Advantages(CamelModel):
    first: List[str] = Field(default_factory=list)
    second: List[str] = Field(default_factory=list)


class CategoryComparison(CamelModel):
    category: str
    first_count: int = 0
    first_pct: float = 0.0
    second_count: int = 0
    second_pct: float = 0.0


class ComparisonResult(CamelModel):
    summary: ComparisonSummary
    indicator_comparison: List[IndicatorComparison]
    advantages: Advantages
    category_comparison: List[CategoryComparison]
    recommendation: Literal["first", "second", "similar"]


# ── HTTP 요청/응답 ─────────────────────────────────────────────────────────────
class Location(CamelModel):
    address: str
    road_address: Optional[str] = None
    latitude: float
    longitude: float
    region1: str = ""  # 시/도
    region2: str = ""  # 구/군
    region3: str = ""  # 동/읍/면
    place_name: str = ""


class SingleAnalysisRequest(CamelModel):
    address: str = Field(min_length=1)
    radius: int = Field(500, ge=100, le=2000)
    target_category: Optional[str] = None


class CompareAnalysisRequest(CamelModel):
    address1: str = Field(min_length=1)
    address2: str = Field(min_length=1)
    radius: int = Field(500, ge=100, le=2000)
    target_category: Optional[str] = None


class SingleAnalysisResponse(CamelModel):
    location: Location
    radius: int
    analysis: DistrictAnalysis
    generated_at: str


class AreaResult(CamelModel):
    location: Location
    analysis: DistrictAnalysis


class CompareAnalysisResponse(CamelModel):
    area1: AreaResult
    area2: AreaResult
    comparison: ComparisonResult
    radius: int
    generated_at: str
