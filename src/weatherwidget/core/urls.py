# src/weatherwidget/core/urls.py
from __future__ import annotations
import os
from typing import Final
from urllib.parse import quote

# 베이스 도메인은 .env로 덮어쓸 수 있게
DARKSKY_BASE: Final[str] = os.getenv("DARKSKY_BASE", "https://api.darksky.net")
OPENWEATHER_BASE: Final[str] = os.getenv("OPENWEATHER_BASE", "https://api.openweathermap.org")
GEOCODE_BASE: Final[str] = os.getenv("GEOCODE_BASE", "https://geocode.xyz")
IPLOOKUP_BASE: Final[str] = os.getenv("IPLOOKUP_BASE", "https://ipapi.co")

# 경로 상수 (도메인과 분리)
OPENWEATHER_PATHS = {
    # One Call 3.0 (current + hourly 48h + daily 8d)
    "onecall": "/data/3.0/onecall",
}


def ow_url(path_key: str) -> str:
    """
    OpenWeather endpoint 빌더.
    ex) ow_url("onecall") -> "https://api.openweathermap.org/data/3.0/onecall"
    """
    return f"{OPENWEATHER_BASE}{OPENWEATHER_PATHS[path_key]}"


def darksky_url(api_key: str, lat: float, lng: float) -> str:
    return f"{DARKSKY_BASE}/forecast/{quote(api_key, safe='')}/{lat},{lng}"


def geocode_url(query: str) -> str:
    # 주소 / "lat,lng" 둘 다 경로에 그대로 들어감
    return f"{GEOCODE_BASE}/{quote(query, safe=',')}"


def iplookup_url() -> str:
    return f"{IPLOOKUP_BASE}/json/"
