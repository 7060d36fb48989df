"""
예보 파생 모듈
--------------

provider에서 받은 RawForecast를 화면에 바로 쓸 수 있는 DisplayModel로
바꿔주는 순수 함수 모음입니다. I/O 없음, 입력 객체는 수정하지 않습니다.

-   `wind_bearing()`: 풍향 각도 → 8방위 라벨
-   `is_downward()`: 다음 시간대 기온이 현재보다 낮은지 (추세)
-   `derive_daily()`: 일별 최고/최저 기온 막대의 높이, 위/아래 여백 (%)
-   `build_display_model()`: 위 셋을 묶어 DisplayModel 생성
"""
from __future__ import annotations
import math
from typing import List, Optional

from babel.core import UnknownLocaleError
from babel.dates import format_date

from weatherwidget.core.settings import WIDGET_TZ
from weatherwidget.models.schemas import DailyPoint, DisplayDay, DisplayModel, HourlyPoint, RawForecast
from weatherwidget.utils.timewindow import end_of_today_ts, local_datetime, now_ts

# 마지막 N은 360° 근처에서 반올림된 인덱스 8을 받기 위한 것
COMPASS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW", "N"]


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def wind_bearing(degrees: Optional[float]) -> Optional[str]:
    if degrees is None:
        return None
    idx = round_half_up((degrees % 360) / 45)
    return COMPASS[idx % len(COMPASS)]


def is_downward(hourly: List[HourlyPoint], current_temp: float, *, now: Optional[float] = None) -> Optional[bool]:
    """첫 번째 미래 시간대 기준. 미래 데이터가 없으면 None (추세 없음)."""
    t = now_ts() if now is None else now
    for h in hourly:
        if h.time <= t:
            continue
        return h.temperature < current_temp
    return None


def week_name(ts: int, *, language: str, tz: str) -> str:
    d = local_datetime(ts, tz=tz).date()
    try:
        return format_date(d, "EEE", locale=language.replace("-", "_"))
    except (UnknownLocaleError, ValueError):
        return format_date(d, "EEE", locale="en")


def derive_daily(
    daily: List[DailyPoint],
    *,
    language: str = "en",
    tz: str = WIDGET_TZ,
    now: Optional[float] = None,
) -> List[DisplayDay]:
    if not daily:
        return []

    global_max = max(d.temperature_max for d in daily)
    global_min = min(d.temperature_min for d in daily)
    temp_range = global_max - global_min
    today = end_of_today_ts(tz=tz, now=now)

    out: List[DisplayDay] = []
    for day in daily:
        if temp_range == 0:
            # 모든 기온이 같으면 막대 없이 전체를 아래 여백으로
            height, top = 0, 0
        else:
            height = round_half_up(100 * (day.temperature_max - day.temperature_min) / temp_range)
            top = round_half_up(100 * (global_max - day.temperature_max) / temp_range)

        name = "Today" if day.time <= today else week_name(day.time, language=language, tz=tz)
        out.append(
            DisplayDay.model_validate({
                **day.model_dump(),
                "week_name": name,
                "height": height,
                "top": top,
                "bottom": 100 - (top + height),
            })
        )
    return out


def build_display_model(
    weather: RawForecast,
    *,
    language: str = "en",
    tz: str = WIDGET_TZ,
    now: Optional[float] = None,
) -> DisplayModel:
    t = now_ts() if now is None else now
    currently = weather.currently
    return DisplayModel(
        currently=currently,
        wind_bearing=wind_bearing(currently.wind_bearing),
        is_downward=is_downward(weather.hourly.data, currently.temperature, now=t),
        daily=derive_daily(weather.daily.data, language=language, tz=tz, now=t),
    )
