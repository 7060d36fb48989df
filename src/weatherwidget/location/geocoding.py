"""
위치 조회 HTTP 모듈
-------------------

주소 / 좌표 / 접속 IP를 사람이 읽을 수 있는 지역명과 좌표로 바꿔주는
외부 API 호출을 모아둔 모듈입니다.

주요 기능:
-   `geocode()`: 주소 문자열 → 위도, 경도, 지역, 국가
-   `reverse_geocode()`: (위도, 경도) → 지역, 국가
-   `fetch_location_by_ip()`: 접속 IP → 위도, 경도, 도시, 국가

모든 함수는 실패 시 `httpx.HTTPError` 또는 `ValueError`를 그대로 올립니다.
오류 변환은 호출하는 쪽(LocationResolver)에서 처리합니다.
"""
from __future__ import annotations
from typing import Any, Dict, Optional
import httpx

from weatherwidget.core.settings import HTTP_TIMEOUT
from weatherwidget.core.urls import geocode_url, iplookup_url
from weatherwidget.models.schemas import GeocodeResult, IPCountry, IPLocation, ReverseGeocodeResult


async def _get_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    async with httpx.AsyncClient(timeout=HTTP_TIMEOUT, transport=transport) as client:
        r = await client.get(url, params=params)
        r.raise_for_status()
    data = r.json()
    if not isinstance(data, dict):
        raise ValueError(f"예상치 못한 응답 형식: {type(data).__name__}")
    # geocode.xyz는 200 응답에 error 객체를 실어 보내기도 함
    if data.get("error"):
        err = data["error"]
        detail = err.get("description") if isinstance(err, dict) else err
        raise ValueError(f"위치 조회 실패: {detail}")
    return data


async def geocode(address: str, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> GeocodeResult:
    print(f"📡 geocode 실행: address={address!r}")
    data = await _get_json(geocode_url(address), params={"json": 1}, transport=transport)
    standard = data.get("standard") or {}
    return GeocodeResult(
        latitude=data["latt"],
        longitude=data["longt"],
        region=standard.get("region") or standard.get("city") or "",
        country=standard.get("countryname") or "",
    )


async def reverse_geocode(
    lat: str, lng: str, *, transport: Optional[httpx.AsyncBaseTransport] = None
) -> ReverseGeocodeResult:
    print(f"📡 reverse geocode 실행: ({lat}, {lng})")
    data = await _get_json(geocode_url(f"{lat},{lng}"), params={"json": 1}, transport=transport)
    return ReverseGeocodeResult(
        region=data.get("region") or data.get("city") or "",
        country=data.get("country") or "",
    )


async def fetch_location_by_ip(*, transport: Optional[httpx.AsyncBaseTransport] = None) -> IPLocation:
    print("📡 IP 기반 위치 조회 실행")
    data = await _get_json(iplookup_url(), transport=transport)
    return IPLocation(
        latitude=data["latitude"],
        longitude=data["longitude"],
        city=data.get("city") or "",
        country=IPCountry(name=data.get("country_name") or ""),
    )


class HttpLocationService:
    """resolver가 쓰는 세 가지 조회를 한 객체로 묶은 기본 구현."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.transport = transport

    async def geocode(self, address: str) -> GeocodeResult:
        return await geocode(address, transport=self.transport)

    async def reverse_geocode(self, lat: str, lng: str) -> ReverseGeocodeResult:
        return await reverse_geocode(lat, lng, transport=self.transport)

    async def fetch_by_ip(self) -> IPLocation:
        return await fetch_location_by_ip(transport=self.transport)
