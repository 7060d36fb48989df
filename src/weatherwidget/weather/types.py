# src/weatherwidget/weather/types.py
from __future__ import annotations
from typing import Protocol

from weatherwidget.models.schemas import RawForecast


class ForecastProvider(Protocol):
    name: str

    async def forecast(self, *, lat: float, lng: float, units: str, language: str) -> RawForecast: ...
