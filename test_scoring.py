# test_scoring.py
import pytest

from app.services.scoring import WEIGHTS, calculate_overall_score, get_grade
from conftest import make_indicator_set as _ind_set


def test_weights_sum_to_one():
    assert sum(WEIGHTS.values()) == pytest.approx(1.0)


def test_overall_all_perfect():
    assert calculate_overall_score(_ind_set(100, 100, 100, 100, 100, 100), 0) == 100


def test_overall_weighted_sum():
    # 20 + 0 + 20 + 10 + 4 + 0
    assert calculate_overall_score(_ind_set(div=100, comp=100, dens=20), 0) == 54


def test_overall_uses_raw_franchise_ratio_not_display_value():
    # franchise_score 표시값은 가중합에 들어가지 않는다
    low_display = calculate_overall_score(_ind_set(fr=0), 0)
    high_display = calculate_overall_score(_ind_set(fr=100), 0)
    assert low_display == high_display == 10
    # (100 - 35.0) * 0.1 = 6.5 -> 7
    assert calculate_overall_score(_ind_set(), 35.0) == 7


@pytest.mark.parametrize(
    "score, grade",
    [
        (100, "S"), (90, "S"), (89, "A"), (80, "A"), (79, "B"), (65, "B"),
        (64, "C"), (50, "C"), (49, "D"), (0, "D"),
    ],
)
def test_grade_thresholds(score, grade):
    assert get_grade(score).grade == grade


def test_grade_carries_label_and_color():
    g = get_grade(92)
    assert g.label == "최우수"
    assert g.color == "#6366f1"
    assert get_grade(10).label == "주의"
