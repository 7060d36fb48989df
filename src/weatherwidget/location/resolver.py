# src/weatherwidget/location/resolver.py
from __future__ import annotations
from typing import Optional, Protocol

import httpx
from pydantic import ValidationError

from weatherwidget.core.errors import ResolutionError
from weatherwidget.location.geocoding import HttpLocationService
from weatherwidget.models.schemas import (
    GeocodeResult,
    IPLocation,
    LocationQuery,
    ResolvedLocation,
    ReverseGeocodeResult,
)


class LocationService(Protocol):
    async def geocode(self, address: str) -> GeocodeResult: ...
    async def reverse_geocode(self, lat: str, lng: str) -> ReverseGeocodeResult: ...
    async def fetch_by_ip(self) -> IPLocation: ...


class LocationResolver:
    """
    LocationQuery → ResolvedLocation.
    우선순위: 위경도 둘 다 있음 > 주소 > 접속 IP (서로 배타적)
    """

    def __init__(self, service: Optional[LocationService] = None) -> None:
        self.service = service or HttpLocationService()

    async def resolve(self, query: LocationQuery) -> ResolvedLocation:
        try:
            return await self._resolve(query)
        except (httpx.HTTPError, ValueError, KeyError, ValidationError) as e:
            raise ResolutionError(f"위치를 확인할 수 없습니다: {e}") from e

    async def _resolve(self, query: LocationQuery) -> ResolvedLocation:
        coords = query.coordinates()
        if coords is not None:
            data = await self.service.reverse_geocode(query.lat.strip(), query.lng.strip())
            # 좌표는 provider 응답이 아니라 입력값을 그대로 사용
            lat, lng = coords
            return ResolvedLocation(lat=lat, lng=lng, name=f"{data.region}, {data.country}")

        if query.has_address():
            data = await self.service.geocode(query.address.strip())
            return ResolvedLocation(
                lat=data.latitude, lng=data.longitude, name=f"{data.region}, {data.country}"
            )

        data = await self.service.fetch_by_ip()
        return ResolvedLocation(
            lat=data.latitude, lng=data.longitude, name=f"{data.city}, {data.country.name}"
        )
