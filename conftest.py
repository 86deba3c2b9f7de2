# conftest.py
# -----------------------------------------------------------------------------
# 공용 픽스처
# - 앱 모듈 import 전에 테스트용 환경변수(임시 DB/로그, 더미 API 키) 주입
# -----------------------------------------------------------------------------
import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="bizscope-test-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP}/reports.db"
os.environ["LOG_DIR"] = os.path.join(_TMP, "logs")
os.environ["KAKAO_API_KEY"] = "test-kakao-key"
os.environ["STORE_API_KEY"] = "test-store-key"
os.environ["STORE_PAGE_DELAY"] = "0"

import pytest  # noqa: E402

from app.schemas.analysis import Listing  # noqa: E402


def make_listing(
    name="동네가게",
    major="음식",
    mid="한식",
    minor="백반/한정식",
    lat=37.5,
    lng=127.03,
    **extra,
) -> Listing:
    return Listing(
        name=name,
        category_l=major,
        category_m=mid,
        category_s=minor,
        lat=lat,
        lng=lng,
        **extra,
    )


@pytest.fixture
def listing():
    return make_listing


@pytest.fixture
def sample_stores():
    """음식 5 / 소매 3 / 보건의료 2 / 예술·스포츠 1 (좌표 없는 노래방)."""
    return [
        make_listing("스타벅스 역삼점", "음식", "비알코올", "카페"),
        make_listing("할매국밥", "음식", "한식", "국밥"),
        make_listing("노래방 아리랑", "예술·스포츠", "오락", "노래방", lat=0.0, lng=0.0),
        make_listing("해장국집", "음식", "한식", "해장국"),
        make_listing("GS25 역삼역점", "소매", "종합소매", "편의점"),
        make_listing("동네책방", "소매", "서적", "서점"),
        make_listing("튼튼정형외과의원", "보건의료", "의원", "정형외과"),
        make_listing("온누리약국", "소매", "의약", "약국"),
        make_listing("참치회관", "음식", "일식", "일식 회"),
        make_listing("연세치과의원", "보건의료", "의원", "치과의원"),
        make_listing("김밥나라", "음식", "분식", "김밥"),
    ]


@pytest.fixture(scope="session")
def client():
    from fastapi.testclient import TestClient

    from app.main import app

    with TestClient(app) as c:
        yield c


def make_indicator_set(div=0, sat=0, comp=0, fr=0, dens=0, stab=0):
    from app.schemas.analysis import Indicator, IndicatorSet

    def ind(v):
        return Indicator(value=v, label="x", description="x")

    return IndicatorSet(
        diversity_index=ind(div),
        saturation_score=ind(sat),
        competition_intensity=ind(comp),
        franchise_score=ind(fr),
        density_score=ind(dens),
        stability_score=ind(stab),
    )
