# src/weatherwidget/weather/fetcher.py
from __future__ import annotations
from typing import Callable, Dict, Optional

import httpx
from pydantic import ValidationError

from weatherwidget.core.errors import FetchError
from weatherwidget.models.schemas import RawForecast
from weatherwidget.weather.darksky import DarkSkyForecastProvider
from weatherwidget.weather.openweather import OpenWeatherForecastProvider
from weatherwidget.weather.types import ForecastProvider

ProviderFactory = Callable[..., ForecastProvider]

# provider 선택자 → 생성 함수
PROVIDERS: Dict[str, ProviderFactory] = {
    "darksky": DarkSkyForecastProvider,
    "openweather": OpenWeatherForecastProvider,
}


class WeatherFetcher:
    def __init__(
        self,
        providers: Optional[Dict[str, ProviderFactory]] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.providers = providers or PROVIDERS
        self.transport = transport

    def provider_for(self, provider: str, api_key: str) -> ForecastProvider:
        factory = self.providers.get(provider)
        if factory is None:
            raise FetchError(f"알 수 없는 날씨 provider: {provider!r}")
        if not api_key:
            raise FetchError(f"{provider} API key가 설정되지 않았습니다.")
        return factory(api_key, transport=self.transport)

    async def fetch(
        self, *, api_key: str, lat: float, lng: float, units: str, language: str, provider: str
    ) -> RawForecast:
        p = self.provider_for(provider, api_key)
        print(f"📡 {p.name} 예보 요청: ({lat}, {lng}) units={units} lang={language}")
        try:
            return await p.forecast(lat=lat, lng=lng, units=units, language=language)
        except httpx.HTTPStatusError as e:
            raise FetchError(f"{p.name} 응답 오류 (status={e.response.status_code})") from e
        except httpx.HTTPError as e:
            raise FetchError(f"{p.name} 연결 실패: {e}") from e
        except (ValueError, KeyError, TypeError, ValidationError) as e:
            raise FetchError(f"{p.name} 응답 파싱 실패: {e}") from e
