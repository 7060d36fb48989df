# src/weatherwidget/weather/darksky.py
from __future__ import annotations
from typing import Optional
import httpx

from weatherwidget.core.settings import HTTP_TIMEOUT
from weatherwidget.core.urls import darksky_url
from weatherwidget.models.schemas import RawForecast
from weatherwidget.weather.types import ForecastProvider


class DarkSkyForecastProvider(ForecastProvider):
    """
    Dark Sky 형식 Forecast API.
    응답이 이미 RawForecast 형식이라 검증만 거친다.
    """
    name = "darksky"

    def __init__(self, api_key: str, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        if not api_key:
            raise RuntimeError("Dark Sky API key missing")
        self.api_key = api_key
        self.transport = transport

    async def forecast(self, *, lat: float, lng: float, units: str, language: str) -> RawForecast:
        url = darksky_url(self.api_key, lat, lng)
        params = {"units": units, "lang": language, "exclude": "minutely,alerts,flags"}
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT, transport=self.transport) as client:
            r = await client.get(url, params=params)
            r.raise_for_status()
        return RawForecast.model_validate(r.json())
