# test_api.py
import asyncio

import pytest

from app.routers import analysis as analysis_router
from app.schemas.analysis import Location
from app.services.kakao import GeocodeError
from conftest import make_listing

GANGNAM = Location(
    address="서울 강남구 역삼동 736-1",
    latitude=37.5006,
    longitude=127.0365,
    region1="서울",
    region2="강남구",
    region3="역삼동",
)
HONGDAE = Location(address="서울 마포구 서교동 358-1", latitude=37.5563, longitude=126.9236)


@pytest.fixture
def fake_collaborators(monkeypatch, sample_stores):
    calls = {"stores": []}

    async def fake_geocode(address):
        if address == "없는주소":
            raise GeocodeError("해당 주소를 찾을 수 없습니다.")
        return HONGDAE if "마포" in address else GANGNAM

    async def fake_stores(lat, lon, radius=500):
        calls["stores"].append((lat, lon, radius))
        if lat == HONGDAE.latitude:
            return [make_listing(major="음식") for _ in range(4)]
        return sample_stores

    monkeypatch.setattr(analysis_router, "geocode_address", fake_geocode)
    monkeypatch.setattr(analysis_router, "get_stores_in_radius", fake_stores)
    return calls


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_single_analysis(client, fake_collaborators):
    r = client.post(
        "/analysis/single",
        json={"address": "테헤란로 156", "radius": 700, "targetCategory": "카페"},
    )

    assert r.status_code == 200
    body = r.json()
    assert body["radius"] == 700
    assert body["location"]["region2"] == "강남구"
    assert body["analysis"]["totalStores"] == 11
    assert body["analysis"]["radiusM"] == 700
    assert body["analysis"]["targetAnalysis"]["competitorCount"] == 1
    assert set(body["analysis"]["indicators"]) >= {"diversityIndex", "stabilityScore"}
    assert "generatedAt" in body
    assert fake_collaborators["stores"] == [(GANGNAM.latitude, GANGNAM.longitude, 700)]


def test_single_analysis_unknown_address(client, fake_collaborators):
    r = client.post("/analysis/single", json={"address": "없는주소"})
    assert r.status_code == 404


def test_single_analysis_validation(client):
    assert client.post("/analysis/single", json={}).status_code == 422
    assert client.post("/analysis/single", json={"address": "역삼", "radius": 10}).status_code == 422


def test_single_analysis_provider_failure(client, monkeypatch):
    async def fake_geocode(address):
        return GANGNAM

    async def broken_stores(lat, lon, radius=500):
        raise RuntimeError("STORE_API_KEY가 설정되어 있지 않습니다.")

    monkeypatch.setattr(analysis_router, "geocode_address", fake_geocode)
    monkeypatch.setattr(analysis_router, "get_stores_in_radius", broken_stores)

    r = client.post("/analysis/single", json={"address": "테헤란로 156"})
    assert r.status_code == 500
    assert "STORE_API_KEY" in r.json()["detail"]


def test_compare_analysis(client, fake_collaborators):
    r = client.post(
        "/analysis/compare",
        json={"address1": "테헤란로 156", "address2": "마포구 와우산로", "radius": 500},
    )

    assert r.status_code == 200
    body = r.json()
    assert body["area1"]["analysis"]["totalStores"] == 11
    assert body["area2"]["analysis"]["totalStores"] == 4
    comparison = body["comparison"]
    assert len(comparison["indicatorComparison"]) == 6
    assert comparison["recommendation"] in {"first", "second", "similar"}
    assert comparison["summary"]["second"]["totalStores"] == 4
    assert len(fake_collaborators["stores"]) == 2


def test_compare_unknown_address(client, fake_collaborators):
    r = client.post(
        "/analysis/compare", json={"address1": "테헤란로 156", "address2": "없는주소"}
    )
    assert r.status_code == 404


def test_compare_waits_for_both_geocodes_before_failing(client, monkeypatch):
    finished = []

    async def fake_geocode(address):
        if address == "없는주소":
            raise GeocodeError("해당 주소를 찾을 수 없습니다.")
        await asyncio.sleep(0.05)
        finished.append(address)
        return GANGNAM

    monkeypatch.setattr(analysis_router, "geocode_address", fake_geocode)

    r = client.post(
        "/analysis/compare", json={"address1": "없는주소", "address2": "테헤란로 156"}
    )
    assert r.status_code == 404
    assert finished == ["테헤란로 156"]


def test_report_save_and_load(client):
    payload = {
        "type": "single",
        "data": {"analysis": {"overallScore": 72}},
        "address1": "테헤란로 156",
        "targetCategory": "카페",
        "radius": 500,
    }
    r = client.post("/reports", json=payload)
    assert r.status_code == 200
    report_id = r.json()["id"]
    assert len(report_id) == 8
    assert r.json()["success"] is True

    r = client.get(f"/reports/{report_id}")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == report_id
    assert body["data"] == {"analysis": {"overallScore": 72}}
    assert body["targetCategory"] == "카페"
    assert body["address2"] is None
    assert body["createdAt"]


def test_report_not_found(client):
    assert client.get("/reports/NOPE1234").status_code == 404


def test_report_requires_data(client):
    assert client.post("/reports", json={"type": "single"}).status_code == 422
