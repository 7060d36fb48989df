# src/weatherwidget/models/schemas.py
from __future__ import annotations
import math
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """provider 문서 형식(camelCase)을 그대로 받고 내보내는 공통 베이스."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


# ===== 위치 =====
class LocationQuery(BaseModel):
    """호출자가 넘기는 위치 입력. 모두 비어 있으면 IP 기반 조회."""
    model_config = ConfigDict(frozen=True)

    address: Optional[str] = None
    lat: Optional[str] = None
    lng: Optional[str] = None

    def coordinates(self) -> Optional[Tuple[float, float]]:
        """lat/lng 둘 다 유한한 숫자로 읽히면 (lat, lng), 하나라도 없거나 깨져 있으면 None."""
        if not (self.lat or "").strip() or not (self.lng or "").strip():
            return None
        try:
            lat, lng = float(self.lat), float(self.lng)
        except ValueError:
            return None
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return None
        return lat, lng

    def has_address(self) -> bool:
        return bool((self.address or "").strip())


class ResolvedLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float
    name: str


class GeocodeResult(BaseModel):
    latitude: float
    longitude: float
    region: str
    country: str


class ReverseGeocodeResult(BaseModel):
    region: str
    country: str


class IPCountry(BaseModel):
    name: str


class IPLocation(BaseModel):
    latitude: float
    longitude: float
    city: str
    country: IPCountry


# ===== 예보 원본 (provider 정규화 결과) =====
class Currently(CamelModel):
    time: Optional[int] = None
    summary: Optional[str] = None
    icon: Optional[str] = None
    temperature: float
    apparent_temperature: Optional[float] = None
    wind_speed: Optional[float] = None
    wind_bearing: Optional[float] = None


class HourlyPoint(CamelModel):
    time: int
    temperature: float
    summary: Optional[str] = None
    icon: Optional[str] = None


class DailyPoint(CamelModel):
    time: int
    temperature_max: float
    temperature_min: float
    summary: Optional[str] = None
    icon: Optional[str] = None


class Hourly(CamelModel):
    summary: Optional[str] = None
    data: List[HourlyPoint] = Field(default_factory=list)


class Daily(CamelModel):
    summary: Optional[str] = None
    data: List[DailyPoint] = Field(default_factory=list)


class RawForecast(CamelModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    timezone: Optional[str] = None
    currently: Currently
    hourly: Hourly = Field(default_factory=Hourly)
    daily: Daily = Field(default_factory=Daily)


# ===== 화면용 파생 모델 (저장하지 않음) =====
class DisplayDay(DailyPoint):
    week_name: str
    height: int  # % 단위
    top: int
    bottom: int


class DisplayModel(CamelModel):
    currently: Currently
    wind_bearing: Optional[str] = None
    is_downward: Optional[bool] = None
    daily: List[DisplayDay] = Field(default_factory=list)


# ===== 갱신 상태 =====
class RefreshState(CamelModel):
    loading: bool = True
    weather: Optional[RawForecast] = None
    error: Optional[str] = None
    location: Optional[ResolvedLocation] = None


# ===== 설정 입력 =====
class RenderingOptions(CamelModel):
    """표시 전용 옵션. 코어는 저장만 하고 그대로 넘긴다."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    hide_header: bool = False
    disable_animation: bool = False
    bar_color: str = "#444"
    text_color: str = "#333"


class WidgetOptions(RenderingOptions):
    provider: str = "openweather"  # "openweather" | "darksky"
    api_key: str = ""
    address: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    language: str = "en"
    units: str = "us"
    update_interval: Optional[float] = None  # 밀리초

    @field_validator("update_interval", mode="before")
    @classmethod
    def _parse_interval(cls, v):
        # 숫자로 못 읽으면 자동 갱신 없음으로 취급
        if v is None or v == "":
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None

    def query(self) -> LocationQuery:
        return LocationQuery(address=self.address, lat=self.latitude, lng=self.longitude)

    def rendering(self) -> RenderingOptions:
        return RenderingOptions(
            hide_header=self.hide_header,
            disable_animation=self.disable_animation,
            bar_color=self.bar_color,
            text_color=self.text_color,
        )


class WidgetOptionsUpdate(CamelModel):
    """PATCH 요청 본문. 지정된 필드만 반영."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    provider: Optional[str] = None
    api_key: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    language: Optional[str] = None
    units: Optional[str] = None
    update_interval: Optional[float] = None
    hide_header: Optional[bool] = None
    disable_animation: Optional[bool] = None
    bar_color: Optional[str] = None
    text_color: Optional[str] = None
