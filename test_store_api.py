# test_store_api.py
import asyncio

import httpx
import pytest

from app.core.config import settings
from app.services.store_api import get_stores_in_radius, process_store_data, to_listing

RAW_ITEM = {
    "bizesId": "MA0101202210A0093218",
    "bizesNm": "GS25 역삼역점",
    "indsLclsCd": "G2",
    "indsLclsNm": "소매",
    "indsMclsCd": "G204",
    "indsMclsNm": "종합 소매",
    "indsSclsCd": "G20405",
    "indsSclsNm": "편의점",
    "lon": "127.0365",
    "lat": "37.5006",
    "rdnmAdr": "서울특별시 강남구 테헤란로 156",
    "lnoAdr": "서울특별시 강남구 역삼동 736-1",
    "flrNo": 1,
    "adongNm": "역삼1동",
}


def _item(i: int) -> dict:
    return {**RAW_ITEM, "bizesId": f"ID{i}", "bizesNm": f"업소{i}"}


def test_to_listing_maps_provider_fields():
    s = to_listing(RAW_ITEM)

    assert s.id == "MA0101202210A0093218"
    assert s.name == "GS25 역삼역점"
    assert s.category_l == "소매"
    assert s.category_m == "종합 소매"
    assert s.category_s == "편의점"
    assert s.category_s_code == "G20405"
    assert s.lat == pytest.approx(37.5006)
    assert s.lng == pytest.approx(127.0365)
    assert s.floor_info == "1"
    assert s.dong == "역삼1동"


def test_to_listing_defaults():
    s = to_listing({"lat": "not-a-number"})

    assert s.name == "이름 없음"
    assert s.category_l == s.category_m == s.category_s == "기타"
    assert s.lat == 0.0 and s.lng == 0.0
    assert not s.has_coords


def test_display_name_applied_via_major():
    s = to_listing({**RAW_ITEM, "indsLclsNm": "수리·개인"})
    assert s.category_l == "수리·개인"
    assert s.major == "생활서비스"


def test_process_store_data_handles_none():
    assert process_store_data(None) == []


def _run(coro):
    return asyncio.run(coro)


def test_pagination_until_total_count():
    seen_pages = []

    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["pageNo"])
        seen_pages.append(page)
        assert request.url.params["cx"] == "127.03"
        assert request.url.params["cy"] == "37.5"
        assert request.url.params["radius"] == "300"
        items = [_item(1), _item(2)] if page == 1 else [_item(3)]
        return httpx.Response(200, json={"body": {"totalCount": 3, "items": items}})

    stores = _run(
        get_stores_in_radius(37.5, 127.03, 300, transport=httpx.MockTransport(handler))
    )

    assert seen_pages == [1, 2]
    assert [s.id for s in stores] == ["ID1", "ID2", "ID3"]


def test_partial_failure_keeps_collected_pages():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["pageNo"] == "1":
            return httpx.Response(
                200, json={"body": {"totalCount": 5, "items": [_item(1), _item(2)]}}
            )
        return httpx.Response(500, text="server error")

    stores = _run(get_stores_in_radius(37.5, 127.0, transport=httpx.MockTransport(handler)))
    assert len(stores) == 2


def test_invalid_json_stops_pagination():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<OpenAPI_ServiceResponse>LIMITED</OpenAPI_ServiceResponse>")

    stores = _run(get_stores_in_radius(37.5, 127.0, transport=httpx.MockTransport(handler)))
    assert stores == []


def test_non_object_json_keeps_collected_pages():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["pageNo"] == "1":
            return httpx.Response(
                200, json={"body": {"totalCount": 5, "items": [_item(1), _item(2)]}}
            )
        return httpx.Response(200, json=["unexpected"])

    stores = _run(get_stores_in_radius(37.5, 127.0, transport=httpx.MockTransport(handler)))
    assert [s.id for s in stores] == ["ID1", "ID2"]


def test_non_object_body_stops_pagination():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"body": "LIMITED NUMBER OF SERVICE REQUESTS"})

    stores = _run(get_stores_in_radius(37.5, 127.0, transport=httpx.MockTransport(handler)))
    assert stores == []


def test_empty_body_returns_empty_list():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"header": {"resultCode": "03"}})

    stores = _run(get_stores_in_radius(37.5, 127.0, transport=httpx.MockTransport(handler)))
    assert stores == []


def test_page_cap(monkeypatch):
    monkeypatch.setattr(settings, "STORE_MAX_PAGES", 2)
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.params["pageNo"])
        return httpx.Response(200, json={"body": {"totalCount": 100, "items": [_item(len(calls))]}})

    stores = _run(get_stores_in_radius(37.5, 127.0, transport=httpx.MockTransport(handler)))
    assert calls == ["1", "2"]
    assert len(stores) == 2


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(settings, "STORE_API_KEY", None)
    with pytest.raises(RuntimeError):
        _run(get_stores_in_radius(37.5, 127.0))
