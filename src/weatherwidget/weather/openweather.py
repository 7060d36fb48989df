# src/weatherwidget/weather/openweather.py
from __future__ import annotations
from typing import Any, Dict, List, Optional
import httpx

from weatherwidget.core.settings import HTTP_TIMEOUT
from weatherwidget.core.urls import ow_url
from weatherwidget.models.schemas import RawForecast
from weatherwidget.weather.types import ForecastProvider

# Dark Sky 단위계 → OpenWeather 단위계
UNITS_MAP = {
    "us": "imperial",
    "si": "metric",
    "ca": "metric",
    "uk2": "metric",
    "auto": "metric",
}

# OpenWeather 아이콘 코드(앞 두 자리) → skycon 이름
ICON_MAP = {
    "01": "clear-{daypart}",
    "02": "partly-cloudy-{daypart}",
    "03": "cloudy",
    "04": "cloudy",
    "09": "rain",
    "10": "rain",
    "11": "rain",
    "13": "snow",
    "50": "fog",
}


def to_skycon(code: Optional[str]) -> str:
    """ex) "01d" -> "clear-day", "02n" -> "partly-cloudy-night" """
    if not code:
        return "cloudy"
    daypart = "night" if code.endswith("n") else "day"
    return ICON_MAP.get(code[:2], "cloudy").format(daypart=daypart)


def _condition(item: Dict[str, Any]) -> Dict[str, Any]:
    cond = (item.get("weather") or [{}])[0]
    return {"summary": cond.get("description"), "icon": to_skycon(cond.get("icon"))}


def _ratio(v: Any) -> Optional[float]:
    return None if v is None else float(v) / 100


def normalize_onecall(data: Dict[str, Any]) -> Dict[str, Any]:
    """One Call 응답을 Dark Sky 형식(currently / hourly.data / daily.data)으로 변환."""
    cur = data["current"]
    currently = {
        "time": cur.get("dt"),
        **_condition(cur),
        "temperature": cur["temp"],
        "apparentTemperature": cur.get("feels_like"),
        "humidity": _ratio(cur.get("humidity")),
        "pressure": cur.get("pressure"),
        "windSpeed": cur.get("wind_speed"),
        "windBearing": cur.get("wind_deg"),
        "cloudCover": _ratio(cur.get("clouds")),
        "uvIndex": cur.get("uvi"),
        "visibility": cur.get("visibility"),
    }

    hourly: List[Dict[str, Any]] = [
        {
            "time": h["dt"],
            **_condition(h),
            "temperature": h["temp"],
            "apparentTemperature": h.get("feels_like"),
            "precipProbability": h.get("pop"),
        }
        for h in data.get("hourly", [])
    ]

    daily: List[Dict[str, Any]] = [
        {
            "time": d["dt"],
            **_condition(d),
            "temperatureMax": d["temp"]["max"],
            "temperatureMin": d["temp"]["min"],
            "precipProbability": d.get("pop"),
        }
        for d in data.get("daily", [])
    ]

    return {
        "latitude": data.get("lat"),
        "longitude": data.get("lon"),
        "timezone": data.get("timezone"),
        "currently": currently,
        "hourly": {"data": hourly},
        "daily": {"data": daily},
    }


class OpenWeatherForecastProvider(ForecastProvider):
    """
    OpenWeather One Call. 응답은 Dark Sky 형식으로 정규화해서 돌려준다.
    """
    name = "openweather"

    def __init__(self, api_key: str, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        if not api_key:
            raise RuntimeError("OpenWeather API key missing")
        self.api_key = api_key
        self.transport = transport

    async def forecast(self, *, lat: float, lng: float, units: str, language: str) -> RawForecast:
        params = {
            "lat": lat,
            "lon": lng,
            "appid": self.api_key,
            "units": UNITS_MAP.get(units, "standard"),
            "lang": language,
            "exclude": "minutely,alerts",
        }
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT, transport=self.transport) as client:
            r = await client.get(ow_url("onecall"), params=params)
            r.raise_for_status()
        return RawForecast.model_validate(normalize_onecall(r.json()))
