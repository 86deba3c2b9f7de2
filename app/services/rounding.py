import math


def round_half_up(x: float) -> int:
    """0.5 는 항상 올림 (2.5 -> 3). 내장 round()의 은행가 반올림과 다름."""
    return int(math.floor(x + 0.5))


def round1(x: float) -> float:
    """소수 첫째 자리 반올림 (퍼센트/비율 표기용)."""
    return math.floor(x * 10 + 0.5) / 10


def clamp(x: int, lo: int = 0, hi: int = 100) -> int:
    return max(lo, min(hi, x))
