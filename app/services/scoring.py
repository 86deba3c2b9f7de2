# app/services/scoring.py
# -----------------------------------------------------------------------------
# 종합 점수(가중 평균)와 등급 부여
# -----------------------------------------------------------------------------
from __future__ import annotations

from types import MappingProxyType

from app.schemas.analysis import Grade, IndicatorSet
from app.services.rounding import clamp, round_half_up

WEIGHTS = MappingProxyType(
    {
        "diversity_index": 0.20,
        "saturation_score": 0.15,
        "competition_intensity": 0.20,
        "franchise_ratio": 0.10,  # (100 - 프랜차이즈 비율) 에 곱함
        "density_score": 0.20,
        "stability_score": 0.15,
    }
)

# (하한 점수, 등급, 라벨, 색상, 설명) - 위에서부터 첫 번째로 만족하는 등급
GRADE_TABLE = (
    (90, "S", "최우수", "#6366f1", "창업에 매우 유리한 최상의 상권입니다."),
    (80, "A", "우수", "#3b82f6", "안정적이고 잠재력 있는 우수 상권입니다."),
    (65, "B", "양호", "#22c55e", "전략적 접근 시 성공 가능성이 높은 상권입니다."),
    (50, "C", "보통", "#f59e0b", "신중한 분석과 전략이 필요한 상권입니다."),
    (0, "D", "주의", "#ef4444", "진입 시 상당한 리스크를 동반하는 상권입니다."),
)


def calculate_overall_score(indicators: IndicatorSet, franchise_ratio: float) -> int:
    """
    6대 지표 가중 평균 (100점 만점).
    프랜차이즈 항목은 표시용 franchise_score 가 아니라 원본 비율로 계산한다.
    """
    w = WEIGHTS
    score = 0.0
    score += indicators.diversity_index.value * w["diversity_index"]
    score += indicators.saturation_score.value * w["saturation_score"]
    score += indicators.competition_intensity.value * w["competition_intensity"]
    score += (100 - franchise_ratio) * w["franchise_ratio"]
    score += indicators.density_score.value * w["density_score"]
    score += indicators.stability_score.value * w["stability_score"]
    return clamp(round_half_up(score))


def get_grade(score: int) -> Grade:
    for threshold, grade, label, color, description in GRADE_TABLE:
        if score >= threshold:
            break
    return Grade(grade=grade, label=label, color=color, description=description)
